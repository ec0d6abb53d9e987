#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from speech_pipeline.chunker import ChunkingConfig, ChunkResult, run_pipeline
from speech_pipeline.merger import merge_audio_chunks
from speech_pipeline.metadata import MetadataBuilder
from speech_pipeline.tts_engine import AzureTtsEngine, MockTtsEngine, SpeechConfig, TtsEngine

logger = logging.getLogger(__name__)

DEFAULT_INPUT_PATH = "./done/eng_4.txt"


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chunked SSML text-to-speech synthesis.")
    parser.add_argument("--input", default=DEFAULT_INPUT_PATH, help="Input text file path.")
    parser.add_argument("--input-encoding", default="utf-8", help="Encoding used for input file.")
    parser.add_argument("--max-chunk-length", type=int, default=3000, help="Maximum characters per chunk.")
    parser.add_argument("--output-dir", default=".", help="Directory for outputaudio_chunk_<n>.wav files.")
    parser.add_argument("--engine", default="azure", help="TTS engine to use (azure, mock).")
    parser.add_argument("--speech-key", help="Azure Speech key (defaults to SPEECH_KEY env var).")
    parser.add_argument("--speech-region", help="Azure Speech region (defaults to SPEECH_REGION env var).")
    parser.add_argument("--write-ssml", action="store_true", help="Write the SSML sent for each chunk.")
    parser.add_argument("--merge-output", help="Optional path for a single merged audio file.")
    parser.add_argument("--silence-gap-ms", type=int, default=300, help="Silence inserted between merged chunks.")
    parser.add_argument("--metadata-output", help="Optional path for a metadata JSON report.")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    return parser.parse_args(argv)


def configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )


def create_engine(args: argparse.Namespace) -> TtsEngine:
    engine_name = (args.engine or "").lower()
    if engine_name in {"mock", "dummy"}:
        return MockTtsEngine()

    if engine_name in {"azure", "azure_speech"}:
        config = SpeechConfig.from_env()
        if args.speech_key:
            config.subscription_key = args.speech_key
        if args.speech_region:
            config.region = args.speech_region
        return AzureTtsEngine(config)

    raise ValueError(f"Unsupported engine: {args.engine}")


def run(args: argparse.Namespace) -> List[str]:
    if args.max_chunk_length <= 0:
        raise ValueError("--max-chunk-length must be positive.")

    engine = create_engine(args)
    chunk_config = ChunkingConfig(
        max_chunk_length=args.max_chunk_length,
        output_directory=Path(args.output_dir),
        write_ssml=args.write_ssml,
    )
    input_path = Path(args.input)
    results = run_pipeline(input_path, engine, chunk_config, encoding=args.input_encoding)
    audio_files = [str(result.file_path) for result in results if result.succeeded]
    if not audio_files:
        logger.warning("No audio chunks were produced.")
    else:
        logger.info("Produced %d of %d audio chunks.", len(audio_files), len(results))

    merge_output: Optional[Path] = None
    if args.merge_output and audio_files:
        merge_output = Path(args.merge_output)
        merge_audio_chunks(
            results,
            merge_output,
            silence_gap_ms=args.silence_gap_ms,
            output_format=merge_output.suffix.lstrip(".").lower() or "wav",
        )

    if args.metadata_output:
        _write_metadata(args, engine, chunk_config, results, input_path, merge_output)

    return audio_files


def _write_metadata(
    args: argparse.Namespace,
    engine: TtsEngine,
    config: ChunkingConfig,
    results: Sequence[ChunkResult],
    input_path: Path,
    merge_output: Optional[Path],
) -> None:
    metadata_builder = MetadataBuilder(
        engine=engine,
        config=config,
        output_path=Path(args.metadata_output),
    )
    metadata = metadata_builder.build_metadata(
        chunks=results,
        options={"input_path": input_path, "merge_output": merge_output},
    )
    metadata_builder.write_metadata(metadata)
    logger.info("Metadata written to %s", metadata_builder.output_path)


def main(argv: Sequence[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.debug)

    # Failures are reported in the log only; the exit status stays 0.
    try:
        run(args)
    except Exception as exc:
        logger.exception("Speech synthesis failed: %s", exc)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.error("Interrupted by user.")
        sys.exit(1)
