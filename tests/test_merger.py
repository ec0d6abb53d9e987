import pytest
from pydub import AudioSegment

from speech_pipeline.chunker import ChunkResult
from speech_pipeline.merger import merge_audio_chunks


def _write_chunks(directory, durations):
    chunks = []
    for index, duration in enumerate(durations, start=1):
        segment = AudioSegment.silent(duration=duration, frame_rate=16000)
        file_path = directory / f"outputaudio_chunk_{index}.wav"
        segment.export(file_path, format="wav")
        chunks.append(ChunkResult(index=index, file_path=file_path, text_length=10))
    return chunks


def test_merge_audio_chunks_inserts_silence(tmp_path):
    durations = [1000, 1500, 800]
    chunks = _write_chunks(tmp_path, durations)

    output_path = tmp_path / "merged" / "speech.wav"
    merged = merge_audio_chunks(chunks, output_path, silence_gap_ms=200, output_format="wav")

    assert output_path.exists()
    expected_duration = sum(durations) + 200 * (len(durations) - 1)
    assert abs(len(merged) - expected_duration) <= 50


def test_merge_audio_chunks_skips_failed_chunks(tmp_path):
    chunks = _write_chunks(tmp_path, [1000, 500])
    chunks.insert(
        1,
        ChunkResult(index=3, file_path=tmp_path / "never_written.wav", text_length=5, error="canceled"),
    )

    merged = merge_audio_chunks(chunks, tmp_path / "speech.wav", silence_gap_ms=0)

    assert abs(len(merged) - 1500) <= 50


def test_merge_audio_chunks_requires_audio(tmp_path):
    failed = [ChunkResult(index=1, file_path=tmp_path / "x.wav", text_length=3, error="canceled")]

    with pytest.raises(ValueError):
        merge_audio_chunks(failed, tmp_path / "speech.wav")
