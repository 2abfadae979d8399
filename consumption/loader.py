"""
Reading dataset text from disk or from uploaded bytes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from charset_normalizer import from_bytes

from .logging_config import get_logger

log = get_logger(__name__)


def load_csv(path: Union[str, Path]) -> str:
    """
    Read the whole file as UTF-8 text, line endings untouched.

    Read failures (missing file, permissions, invalid UTF-8) are left to
    propagate; there is nothing sensible to do without the dataset.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8", newline="") as f:
        text = f.read()
    log.debug("csv_loaded", path=str(path), chars=len(text))
    return text


def decode_csv_bytes(raw: bytes) -> str:
    """
    Decode uploaded CSV bytes to text.

    Rules:
    - UTF-8 (with or without BOM) is tried first.
    - Otherwise detect the encoding best-effort via charset-normalizer.
    - If detection finds nothing, decode UTF-8 with replacement characters.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is not None:
        log.info("csv_encoding_detected", encoding=match.encoding)
        return str(match)

    log.warning("csv_encoding_undetected", fallback="utf-8", errors="replace")
    return raw.decode("utf-8", errors="replace")
