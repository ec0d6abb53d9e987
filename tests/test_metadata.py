import json

from speech_pipeline.chunker import ChunkingConfig, ChunkResult
from speech_pipeline.metadata import MetadataBuilder
from speech_pipeline.tts_engine import MockTtsEngine


def test_metadata_reports_chunk_status(tmp_path):
    config = ChunkingConfig(max_chunk_length=100, output_directory=tmp_path)
    chunks = [
        ChunkResult(index=1, file_path=tmp_path / "outputaudio_chunk_1.wav", text_length=80, error="canceled"),
        ChunkResult(index=2, file_path=tmp_path / "outputaudio_chunk_2.wav", text_length=42),
    ]
    builder = MetadataBuilder(engine=MockTtsEngine(), config=config, output_path=tmp_path / "meta" / "run.json")

    metadata = builder.build_metadata(chunks=chunks, options={"input_path": tmp_path / "in.txt"})
    builder.write_metadata(metadata)

    written = json.loads(builder.output_path.read_text(encoding="utf-8"))
    assert written["engine"] == "MockTtsEngine"
    assert written["voice"] == "en-US-AndrewMultilingualNeural"
    assert written["max_chunk_length"] == 100
    assert written["succeeded"] == 1
    assert written["failed"] == 1
    assert written["merge_output"] is None
    assert written["chunks"][0] == {
        "index": 1,
        "file": "outputaudio_chunk_1.wav",
        "chars": 80,
        "status": "failed",
        "error": "canceled",
    }
    assert written["chunks"][1]["status"] == "ok"
