from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

__all__ = [
    "FileReadError",
    "escape_xml",
    "load_input_text",
    "read_text_file",
]

XML_ESCAPES: Dict[str, str] = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    "'": "&apos;",
    '"': "&quot;",
}
_ESCAPE_TABLE = str.maketrans(XML_ESCAPES)


class FileReadError(OSError):
    """
    Raised when the input text file is missing, unreadable or not valid text.
    """


def escape_xml(text: str) -> str:
    """
    Replace XML metacharacters with entity references.

    All characters are translated in a single pass so the ``&`` of an emitted
    entity is never escaped a second time.
    """
    return (text or "").translate(_ESCAPE_TABLE)


def load_input_text(path: Path, encoding: str = "utf-8") -> str:
    path = Path(path)
    try:
        return path.read_text(encoding=encoding)
    except FileNotFoundError as exc:
        raise FileReadError(f"Input file does not exist: {path}") from exc
    except UnicodeDecodeError as exc:
        raise FileReadError(f"Input file is not valid {encoding}: {path}") from exc
    except OSError as exc:
        raise FileReadError(f"Unable to read input file {path}: {exc}") from exc


def read_text_file(path: Path, encoding: str = "utf-8") -> str:
    """
    Load ``path``, trim surrounding whitespace and escape it for SSML.

    Read failures are logged and reported as an empty string, which callers
    treat as nothing to synthesize.
    """
    try:
        text = load_input_text(path, encoding)
    except FileReadError as exc:
        logger.error("Error reading file: %s", exc)
        return ""
    return escape_xml(text.strip())
