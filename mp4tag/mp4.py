"""Opening an MP4 file, reading its tags and writing them back."""

from __future__ import annotations

import contextlib
import os
from collections.abc import Iterable
from typing import BinaryIO

from .merge import merge_tags
from .objects import (
    FTYP_MAGIC,
    FTYPS,
    BoxNotPresentError,
    InvalidMagicError,
    MP4Tags,
    UnsupportedFtypError,
)
from .reader import ILST_PATH, find_box, read_file_tags
from .utils import get_temp_path, move_file
from .writer import write_tags


def _check_header(f: BinaryIO) -> None:
    f.seek(4)
    head = f.read(8)
    if len(head) < 8 or head[:4] != FTYP_MAGIC:
        raise InvalidMagicError()
    if head[4:] not in FTYPS:
        raise UnsupportedFtypError(f"unsupported ftyp: {head[4:].hex()}")


class MP4:
    """An open MP4 file whose tags can be read and rewritten.

    Set upper_custom to True to upper-case custom tag names on read and write.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)
        self.upper_custom = False
        self._open()

    def _open(self) -> None:
        f = open(self.path, "rb")
        try:
            size = os.fstat(f.fileno()).st_size
            _check_header(f)
        except BaseException:
            f.close()
            raise
        self._f = f
        self._size = size

    def read(self) -> MP4Tags:
        """Return the tags currently stored in the file."""
        tags, _ = read_file_tags(self._f, self._size, self.upper_custom)
        return tags

    def write(self, tags: MP4Tags | None, delete: Iterable[str] | None = None) -> None:
        """Merge tags into the file's tags, applying the deletion keywords first."""
        delete = [item.lower() for item in (delete or ())]
        if tags is None and not delete:
            return
        existing, boxes = read_file_tags(self._f, self._size, self.upper_custom)
        if find_box(boxes, ILST_PATH) is None:
            raise BoxNotPresentError("ilst box not present")
        merged = merge_tags(existing, tags, delete)

        temp_path = get_temp_path(self.path)
        try:
            with open(temp_path, "wb") as dest:
                write_tags(self._f, boxes, merged, dest, self.upper_custom)
        except BaseException:
            with contextlib.suppress(OSError):
                os.remove(temp_path)
            raise
        self.close()
        move_file(temp_path, self.path)
        self._open()

    def close(self) -> None:
        """Close the underlying file."""
        self._f.close()

    def __enter__(self) -> MP4:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_mp4(path: str | os.PathLike[str]) -> MP4:
    """Open path as an MP4 file, checking its header."""
    return MP4(path)