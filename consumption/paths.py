from __future__ import annotations

from pathlib import Path

PACKAGE_DIR = Path(__file__).resolve().parent


def retrieve_file_path(file_name: str) -> Path:
    """Resolve ``file_name`` against the package directory. Existence is not checked."""
    return (PACKAGE_DIR / file_name).resolve()
