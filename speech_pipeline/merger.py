from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from pydub import AudioSegment

from .chunker import ChunkResult

logger = logging.getLogger(__name__)

__all__ = ["merge_audio_chunks"]


def merge_audio_chunks(
    chunks: Sequence[ChunkResult],
    output_path: Path,
    *,
    silence_gap_ms: int = 300,
    output_format: str = "wav",
) -> AudioSegment:
    """
    Concatenate the audio of every successful chunk into ``output_path``.

    The chunk files themselves are left in place.
    """
    produced = [chunk for chunk in chunks if chunk.succeeded]
    if not produced:
        raise ValueError("No synthesized chunks provided for merging.")

    merged: AudioSegment | None = None
    for idx, chunk in enumerate(produced):
        segment = AudioSegment.from_file(chunk.file_path, format="wav")
        merged = segment if merged is None else merged + segment

        if idx < len(produced) - 1 and silence_gap_ms > 0:
            merged += _matching_silence(segment, silence_gap_ms)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    merged.export(output_path, format=output_format)
    logger.info("Merged %d chunks into %s", len(produced), output_path)
    return merged


def _matching_silence(segment: AudioSegment, duration_ms: int) -> AudioSegment:
    silence = AudioSegment.silent(duration=duration_ms, frame_rate=segment.frame_rate)
    silence = silence.set_channels(segment.channels)
    silence = silence.set_sample_width(segment.sample_width)
    return silence
