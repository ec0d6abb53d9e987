from __future__ import annotations

__all__ = [
    "VOICE_NAME",
    "LANGUAGE",
    "PROSODY_RATE",
    "PROSODY_PITCH",
    "build_ssml",
]

VOICE_NAME = "en-US-AndrewMultilingualNeural"
LANGUAGE = "en-US"
PROSODY_RATE = "medium"
PROSODY_PITCH = "medium"

_SSML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<speak version="1.0" xmlns="http://www.w3.org/2001/10/synthesis" xml:lang="{language}">
    <voice name="{voice}">
        <prosody rate="{rate}" pitch="{pitch}">
            <p>{text}</p>
        </prosody>
    </voice>
</speak>"""


def build_ssml(chunk_text: str) -> str:
    """
    Wrap an already escaped chunk of text in the fixed SSML request document.
    """
    return _SSML_TEMPLATE.format(
        language=LANGUAGE,
        voice=VOICE_NAME,
        rate=PROSODY_RATE,
        pitch=PROSODY_PITCH,
        text=chunk_text,
    )
