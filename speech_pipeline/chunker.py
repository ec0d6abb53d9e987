from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from .ssml import build_ssml
from .text_loader import read_text_file
from .tts_engine import TtsEngine, synthesize_to_file

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_MAX_CHUNK_LENGTH",
    "ChunkingConfig",
    "ChunkResult",
    "ChunkSynthesizer",
    "split_into_sentences",
    "run_pipeline",
    "split_text_into_chunks",
    "synthesize_speech",
]

DEFAULT_MAX_CHUNK_LENGTH = 3000
SENTENCE_BOUNDARY_PATTERN = re.compile(r"(?<=[.!?])\s+")


def split_into_sentences(text: str) -> List[str]:
    """
    Split text after ``.``, ``!`` or ``?`` followed by whitespace.

    The terminating punctuation stays attached to its sentence.
    """
    text = (text or "").strip()
    if not text:
        return []
    return [part.strip() for part in SENTENCE_BOUNDARY_PATTERN.split(text) if part.strip()]


def split_text_into_chunks(text: str, max_chunk_length: int = DEFAULT_MAX_CHUNK_LENGTH) -> List[str]:
    """
    Group sentences into chunks of at most ``max_chunk_length`` characters.

    Sentences are joined with a single space, and the space counts towards the
    limit. A sentence longer than the limit becomes a chunk of its own rather
    than being cut.
    """
    if max_chunk_length <= 0:
        raise ValueError("max_chunk_length must be positive.")

    chunks: List[str] = []
    buffer = ""
    for sentence in split_into_sentences(text):
        if buffer and len(buffer) + 1 + len(sentence) > max_chunk_length:
            chunks.append(buffer.strip())
            buffer = sentence
        elif buffer:
            buffer = f"{buffer} {sentence}"
        else:
            buffer = sentence

    if buffer:
        chunks.append(buffer.strip())

    return chunks


@dataclass
class ChunkingConfig:
    """
    Configuration describing how chunks are split and where their audio goes.
    """

    max_chunk_length: int = DEFAULT_MAX_CHUNK_LENGTH
    output_directory: Path = Path(".")
    chunk_prefix: str = "outputaudio_chunk_"
    chunk_extension: str = ".wav"
    write_ssml: bool = False

    def ensure_directories(self) -> None:
        self.output_directory.mkdir(parents=True, exist_ok=True)

    def chunk_path(self, index: int) -> Path:
        return self.output_directory / f"{self.chunk_prefix}{index}{self.chunk_extension}"

    def ssml_path(self, index: int) -> Path:
        return self.output_directory / f"ssml_chunk_{index}.xml"


@dataclass
class ChunkResult:
    index: int
    file_path: Path
    text_length: int
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class ChunkSynthesizer:
    """
    Synthesizes chunks one at a time, in order, into numbered audio files.

    A failed chunk is logged and recorded, and the next chunk is attempted.
    """

    def __init__(self, engine: TtsEngine, config: ChunkingConfig) -> None:
        self.engine = engine
        self.config = config
        self.config.ensure_directories()

    def synthesize_chunks(self, chunks: Iterable[str]) -> List[ChunkResult]:
        results: List[ChunkResult] = []
        for index, chunk in enumerate(chunks, start=1):
            output_path = self.config.chunk_path(index)
            ssml = build_ssml(chunk)
            logger.debug(
                "Chunk %d: %d characters, %d characters of SSML.", index, len(chunk), len(ssml)
            )
            try:
                if self.config.write_ssml:
                    ssml_path = self.config.ssml_path(index)
                    ssml_path.write_text(ssml, encoding="utf-8")
                    logger.debug("Wrote SSML: %s", ssml_path)
                synthesize_to_file(self.engine, ssml, output_path)
            except Exception as exc:
                logger.error("Error synthesizing chunk %d: %s", index, exc)
                results.append(
                    ChunkResult(index=index, file_path=output_path, text_length=len(chunk), error=str(exc))
                )
                continue

            logger.info("Synthesis finished for chunk: %s", output_path)
            results.append(ChunkResult(index=index, file_path=output_path, text_length=len(chunk)))

        return results


def synthesize_speech(
    input_path: Path,
    engine: TtsEngine,
    config: Optional[ChunkingConfig] = None,
    *,
    encoding: str = "utf-8",
) -> List[str]:
    """
    Run the whole pipeline for one input file.

    Returns the paths of the audio files that were produced, in chunk order.
    Chunks that failed are absent from the list.
    """
    results = run_pipeline(input_path, engine, config, encoding=encoding)
    return [str(result.file_path) for result in results if result.succeeded]


def run_pipeline(
    input_path: Path,
    engine: TtsEngine,
    config: Optional[ChunkingConfig] = None,
    *,
    encoding: str = "utf-8",
) -> List[ChunkResult]:
    config = config or ChunkingConfig()
    text = read_text_file(Path(input_path), encoding)
    chunks = split_text_into_chunks(text, config.max_chunk_length)
    if not chunks:
        logger.warning("No text found in %s. Nothing to synthesize.", input_path)
        return []

    logger.info("Split text into %d chunks.", len(chunks))
    return ChunkSynthesizer(engine, config).synthesize_chunks(chunks)
