from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Sequence

from .chunker import ChunkingConfig, ChunkResult
from .ssml import LANGUAGE, VOICE_NAME
from .tts_engine import TtsEngine

__all__ = ["MetadataBuilder"]


@dataclass
class MetadataBuilder:
    engine: TtsEngine
    config: ChunkingConfig
    output_path: Path

    def build_metadata(
        self,
        *,
        chunks: Sequence[ChunkResult],
        options: Dict[str, object],
    ) -> Dict[str, object]:
        failed = [chunk for chunk in chunks if not chunk.succeeded]

        metadata = {
            "created_at": datetime.now(timezone.utc).isoformat(),
            "engine": self.engine.descriptor(),
            "voice": VOICE_NAME,
            "language": LANGUAGE,
            "format": self.engine.audio_format,
            "max_chunk_length": self.config.max_chunk_length,
            "input_path": str(options.get("input_path")) if options.get("input_path") else None,
            "merge_output": str(options.get("merge_output")) if options.get("merge_output") else None,
            "chunks": [
                {
                    "index": chunk.index,
                    "file": chunk.file_path.name,
                    "chars": chunk.text_length,
                    "status": "ok" if chunk.succeeded else "failed",
                    "error": chunk.error,
                }
                for chunk in chunks
            ],
            "succeeded": len(chunks) - len(failed),
            "failed": len(failed),
            "config": {
                "output_directory": str(self.config.output_directory),
                "write_ssml": self.config.write_ssml,
            },
        }

        return metadata

    def write_metadata(self, metadata: Dict[str, object]) -> None:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with self.output_path.open("w", encoding="utf-8") as f:
            json.dump(metadata, f, ensure_ascii=False, indent=2)
