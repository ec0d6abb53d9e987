"""
Chunked SSML text-to-speech pipeline.

This package exposes the building blocks used by the CLI entry point:

- Input loading and XML escaping (`text_loader`).
- SSML request templating (`ssml`).
- Provider abstractions and concrete implementations (`tts_engine`).
- Sentence-aware chunking and per-chunk synthesis (`chunker`).
- Audio merging helpers (`merger`).
- Metadata helpers (`metadata`).
"""

from .text_loader import FileReadError, escape_xml, load_input_text, read_text_file
from .ssml import build_ssml
from .tts_engine import (
    AzureTtsEngine,
    MockTtsEngine,
    SpeechConfig,
    SynthesisError,
    TtsEngine,
    synthesize_to_file,
)
from .chunker import (
    ChunkingConfig,
    ChunkResult,
    ChunkSynthesizer,
    run_pipeline,
    split_into_sentences,
    split_text_into_chunks,
    synthesize_speech,
)
from .merger import merge_audio_chunks
from .metadata import MetadataBuilder

__all__ = [
    "FileReadError",
    "escape_xml",
    "load_input_text",
    "read_text_file",
    "build_ssml",
    "TtsEngine",
    "AzureTtsEngine",
    "MockTtsEngine",
    "SpeechConfig",
    "SynthesisError",
    "synthesize_to_file",
    "ChunkingConfig",
    "ChunkResult",
    "ChunkSynthesizer",
    "run_pipeline",
    "split_into_sentences",
    "split_text_into_chunks",
    "synthesize_speech",
    "merge_audio_chunks",
    "MetadataBuilder",
]
