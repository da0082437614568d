"""Small helpers for text checks and temporary-file handling."""

from __future__ import annotations

import os
import shutil
import tempfile
import time
from pathlib import Path

_DIGITS = frozenset("0123456789")


def contains_only_nums(text: str) -> bool:
    """Return True if every character of text is an ASCII digit."""
    return all(ch in _DIGITS for ch in text)


def get_temp_path(path: str | os.PathLike[str]) -> str:
    """Return a path in the temp directory named after path's base name."""
    name = Path(path).name or "."
    millis = time.time_ns() // 1_000_000
    return os.path.join(tempfile.gettempdir(), f"{name}_tmp_{millis}")


def move_file(
    src_path: str | os.PathLike[str], dest_path: str | os.PathLike[str]
) -> None:
    """Copy src_path over dest_path, then delete src_path."""
    with open(src_path, "rb") as src, open(dest_path, "wb") as dest:
        shutil.copyfileobj(src, dest)
    os.remove(src_path)