from __future__ import annotations

import io
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from pydub import AudioSegment

logger = logging.getLogger(__name__)

__all__ = [
    "SpeechConfig",
    "SynthesisError",
    "TtsEngine",
    "AzureTtsEngine",
    "MockTtsEngine",
    "synthesize_to_file",
]


class SynthesisError(RuntimeError):
    """
    The provider did not complete a synthesis request.
    """


@dataclass
class SpeechConfig:
    """
    Credentials for the Azure Speech resource.
    """

    subscription_key: Optional[str]
    region: Optional[str]

    @classmethod
    def from_env(cls) -> "SpeechConfig":
        # Missing values are passed through and rejected by the provider.
        return cls(
            subscription_key=os.environ.get("SPEECH_KEY"),
            region=os.environ.get("SPEECH_REGION"),
        )


class TtsEngine(ABC):
    """
    Thin abstraction over a text-to-speech provider that turns SSML into audio bytes.
    """

    audio_format: str = "wav"

    @abstractmethod
    def synthesize(self, ssml: str) -> bytes:
        """
        Synthesize one SSML document. Raises ``SynthesisError`` on any failure.
        """

    def descriptor(self) -> str:
        return self.__class__.__name__


class MockTtsEngine(TtsEngine):
    """
    Lightweight mock for tests. Returns silent WAV audio of predictable length.
    """

    def __init__(
        self,
        *,
        failing_calls: Optional[Iterable[int]] = None,
        duration_ms: int = 200,
        sample_rate: int = 16000,
    ) -> None:
        self._failing_calls = set(failing_calls or ())
        self._duration_ms = duration_ms
        self._sample_rate = sample_rate
        self.calls = 0
        self.received: List[str] = []

    def synthesize(self, ssml: str) -> bytes:
        self.calls += 1
        self.received.append(ssml)
        if self.calls in self._failing_calls:
            raise SynthesisError(f"Mock failure on call {self.calls}")

        segment = AudioSegment.silent(duration=self._duration_ms, frame_rate=self._sample_rate)
        buffer = io.BytesIO()
        segment.export(buffer, format="wav")
        return buffer.getvalue()


class AzureTtsEngine(TtsEngine):
    """
    Azure Speech implementation built on ``azure-cognitiveservices-speech``.

    A new synthesizer is created for every request. With
    ``audio_config=None`` the SDK returns the RIFF/WAV bytes on the result instead
    of playing them.
    """

    def __init__(self, config: SpeechConfig, *, speechsdk_module: Optional[object] = None) -> None:
        if speechsdk_module is None:
            try:
                import azure.cognitiveservices.speech as speechsdk  # type: ignore
            except ImportError as exc:  # pragma: no cover - optional dependency
                raise RuntimeError(
                    "azure-cognitiveservices-speech is required for AzureTtsEngine but is not installed."
                ) from exc
            speechsdk_module = speechsdk

        self._sdk = speechsdk_module
        self._config = config

    def synthesize(self, ssml: str) -> bytes:
        sdk = self._sdk
        try:
            speech_config = sdk.SpeechConfig(
                subscription=self._config.subscription_key,
                region=self._config.region,
            )
            synthesizer = sdk.SpeechSynthesizer(speech_config=speech_config, audio_config=None)
            result = synthesizer.speak_ssml_async(ssml).get()
        except Exception as exc:
            raise SynthesisError(f"Speech synthesis request failed: {exc}") from exc

        if result.reason == sdk.ResultReason.SynthesizingAudioCompleted:
            logger.debug("Azure returned %d audio bytes.", len(result.audio_data))
            return result.audio_data

        details = getattr(result, "cancellation_details", None)
        error_details = getattr(details, "error_details", None) or str(result.reason)
        logger.error(
            "Speech synthesis canceled, %s\nDid you set the speech resource key and region values?",
            error_details,
        )
        raise SynthesisError(error_details)


def synthesize_to_file(engine: TtsEngine, ssml: str, output_path: Path) -> Path:
    """
    Synthesize ``ssml`` with ``engine`` and write the returned audio to ``output_path``.
    """
    audio_bytes = engine.synthesize(ssml)
    output_path = Path(output_path)
    try:
        output_path.write_bytes(audio_bytes)
    except OSError as exc:
        raise SynthesisError(f"Unable to write audio to {output_path}: {exc}") from exc
    return output_path
