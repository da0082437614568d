"""Writing a file with a rebuilt ilst box and the boxes around it resized."""

from __future__ import annotations

import shutil
import struct
from typing import BinaryIO

from .atoms import build_ilst
from .objects import BoxNotPresentError, InvalidStcoSizeError, MP4Box, MP4Tags
from .reader import ILST_PATH, find_box

BUF_SIZE = 4096 * 1024

STCO_PATH = "moov.trak.mdia.minf.stbl.stco"
_RESIZED_PARENTS = ("moov", "moov.udta", "moov.udta.meta")


def _u32(n: int) -> bytes:
    return struct.pack(">I", n & 0xFFFFFFFF)


def _require(boxes: list[MP4Box], path: str) -> MP4Box:
    box = find_box(boxes, path)
    if box is None:
        raise BoxNotPresentError(f"{path} box not present")
    return box


def _read_exact(f: BinaryIO, size: int) -> bytes:
    data = f.read(size)
    if len(data) < size:
        raise EOFError("unexpected end of file")
    return data


def _copy_prefix(src: BinaryIO, dest: BinaryIO, length: int) -> None:
    remaining = length
    while remaining > 0:
        chunk = src.read(min(BUF_SIZE, remaining))
        if not chunk:
            break
        dest.write(chunk)
        remaining -= len(chunk)


def update_chunk_offsets(
    src: BinaryIO, dest: BinaryIO, boxes: list[MP4Box], old_size: int, new_size: int
) -> None:
    """Shift every stco chunk offset by the change in the ilst box's size."""
    stco = _require(boxes, STCO_PATH)
    src.seek(stco.start_offset + 12)
    count = struct.unpack(">i", _read_exact(src, 4))[0]
    if stco.box_size != count * 4 + 16:
        raise InvalidStcoSizeError()
    entries = struct.unpack(f">{count}I", _read_exact(src, count * 4))
    delta = new_size - old_size
    dest.seek(stco.start_offset + 16)
    dest.write(b"".join(_u32(entry + delta) for entry in entries))


def resize_boxes(
    dest: BinaryIO, boxes: list[MP4Box], ilst_offset: int, old_size: int, new_size: int
) -> None:
    """Write the new ilst size and the adjusted sizes of moov, udta and meta."""
    dest.seek(ilst_offset)
    dest.write(_u32(new_size))
    for path in _RESIZED_PARENTS:
        box = _require(boxes, path)
        dest.seek(box.start_offset)
        dest.write(_u32(box.box_size - old_size + new_size))


def write_tags(
    src: BinaryIO, boxes: list[MP4Box], tags: MP4Tags, dest: BinaryIO, upper_custom: bool
) -> None:
    """Copy src to dest with its ilst box replaced by one holding tags."""
    ilst = find_box(boxes, ILST_PATH)
    if ilst is None:
        raise BoxNotPresentError("ilst box not present")
    old_size = ilst.box_size

    src.seek(0)
    _copy_prefix(src, dest, ilst.start_offset)
    ilst_offset = dest.tell()
    dest.write(build_ilst(tags, upper_custom))
    new_end = dest.tell()
    new_size = new_end - ilst_offset

    resize_boxes(dest, boxes, ilst_offset, old_size, new_size)

    mdat = _require(boxes, "mdat")
    if mdat.start_offset > ilst_offset and old_size != new_size:
        update_chunk_offsets(src, dest, boxes, old_size, new_size)

    dest.seek(new_end)
    src.seek(ilst.end_offset)
    shutil.copyfileobj(src, dest, BUF_SIZE)