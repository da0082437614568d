"""Walking the box tree of an MP4 file and reading the tags in its ilst box."""

from __future__ import annotations

import struct
from typing import BinaryIO

from .objects import (
    CONTAINERS,
    BoxNotPresentError,
    Genre,
    ImageType,
    ItunesAdvisory,
    MP4Box,
    MP4Picture,
    MP4Tags,
    MP4TagError,
)
from .utils import contains_only_nums

ILST_PATH = "moov.udta.meta.ilst"
_CUSTOM_PATH = f"{ILST_PATH}.----"

_REQUIRED_PATHS = (
    "moov",
    "mdat",
    "moov.udta",
    "moov.udta.meta",
    "moov.trak.mdia.minf.stbl.stco",
)

_IMAGE_TYPES = {13: ImageType.JPEG, 14: ImageType.PNG}
_ADVISORIES = {1: ItunesAdvisory.EXPLICIT, 2: ItunesAdvisory.CLEAN}
_INT32_MAX = 2**31 - 1


def find_box(boxes: list[MP4Box], path: str) -> MP4Box | None:
    """Return the first box with the given dotted path, or None."""
    return next((box for box in boxes if box.path == path), None)


def find_boxes(boxes: list[MP4Box], path: str) -> list[MP4Box]:
    """Return every box with the given dotted path, in file order."""
    return [box for box in boxes if box.path == path]


def _read_exact(f: BinaryIO, size: int) -> bytes:
    if size < 0:
        raise MP4TagError(f"invalid box size: {size}")
    data = f.read(size)
    if len(data) < size:
        raise EOFError("unexpected end of file")
    return data


def _read_i16(f: BinaryIO) -> int:
    return struct.unpack(">h", _read_exact(f, 2))[0]


def _read_i32(f: BinaryIO) -> int:
    return struct.unpack(">i", _read_exact(f, 4))[0]


def _read_byte(f: BinaryIO) -> int:
    return _read_exact(f, 1)[0]


def _read_text(f: BinaryIO, size: int) -> str:
    return _read_exact(f, size).decode("utf-8", errors="replace")


def _read_box_name(f: BinaryIO) -> str:
    raw = _read_exact(f, 4)
    if raw[0] == 0xA9:
        return "(c)" + raw[1:].lower().decode("latin-1")
    return raw.decode("latin-1")


def _walk(f: BinaryIO, ends_at: int, prefix: str, boxes: list[MP4Box]) -> None:
    while True:
        pos = f.tell()
        if pos >= ends_at:
            return
        size = _read_i32(f)
        name = _read_box_name(f)
        if size <= 0:
            raise MP4TagError(f"invalid size {size} for box {name!r} at {pos}")
        if name == "meta":
            f.seek(4, 1)
        path = f"{prefix}.{name}" if prefix else name
        box_end = pos + size
        boxes.append(MP4Box(start_offset=pos, end_offset=box_end, box_size=size, path=path))
        if name in CONTAINERS:
            _walk(f, box_end, path, boxes)
        f.seek(box_end)


def read_boxes(f: BinaryIO, size: int) -> list[MP4Box]:
    """Return every box in the first size bytes of f, parents before children."""
    f.seek(0)
    boxes: list[MP4Box] = []
    _walk(f, size, "", boxes)
    return boxes


def check_boxes(boxes: list[MP4Box]) -> None:
    """Raise BoxNotPresentError if a box needed for tagging is missing."""
    for path in _REQUIRED_PATHS:
        if find_box(boxes, path) is None:
            raise BoxNotPresentError(f"{path} box not present")


def _data_box(boxes: list[MP4Box], name: str) -> MP4Box | None:
    return find_box(boxes, f"{ILST_PATH}.{name}.data")


def _read_tag(f: BinaryIO, boxes: list[MP4Box], name: str) -> str:
    box = _data_box(boxes, name)
    if box is None:
        return ""
    f.seek(box.start_offset + 16)
    return _read_text(f, box.box_size - 16)


def _read_bpm(f: BinaryIO, boxes: list[MP4Box]) -> int:
    box = _data_box(boxes, "tmpo")
    if box is None:
        return -1
    f.seek(box.start_offset + 16)
    return _read_i16(f)


def _read_pictures(f: BinaryIO, boxes: list[MP4Box]) -> list[MP4Picture]:
    pictures = []
    for box in find_boxes(boxes, f"{ILST_PATH}.covr.data"):
        f.seek(box.start_offset + 11)
        image_type = _IMAGE_TYPES.get(_read_byte(f), ImageType.JPEG)
        f.seek(4, 1)
        data = _read_exact(f, box.box_size - 16)
        pictures.append(MP4Picture(data=data, format=image_type))
    return pictures


def _read_number_pair(f: BinaryIO, boxes: list[MP4Box], name: str) -> tuple[int, int]:
    box = _data_box(boxes, name)
    if box is None:
        return -1, -1
    try:
        f.seek(box.start_offset + 18)
        return _read_i16(f), _read_i16(f)
    except (EOFError, OSError):
        return -1, -1


def _read_custom(
    f: BinaryIO, boxes: list[MP4Box], upper_custom: bool
) -> tuple[dict[str, str], dict[str, list[str]]]:
    name_boxes = find_boxes(boxes, f"{_CUSTOM_PATH}.name")
    if not name_boxes:
        return {}, {}

    names = []
    for box in name_boxes:
        f.seek(box.start_offset + 12)
        name = _read_text(f, box.box_size - 12)
        names.append(name.upper() if upper_custom else name)

    others: dict[str, list[str]] = {}
    values: list[str] = []
    prev_end = 0
    for box in find_boxes(boxes, f"{_CUSTOM_PATH}.data"):
        f.seek(box.start_offset + 16)
        value = _read_text(f, box.box_size - 16)
        if box.start_offset == prev_end:
            # A further data box inside the same ---- box.
            others.setdefault(names[len(values) - 1], []).append(value)
        else:
            values.append(value)
        prev_end = box.end_offset

    if len(values) < len(names):
        raise MP4TagError("custom tag has a name but no data")

    custom: dict[str, str] = {}
    for name, value in zip(names, values):
        if name in custom:
            others.setdefault(name, []).append(value)
        else:
            custom[name] = value
    return custom, others


def _read_album_id(f: BinaryIO, boxes: list[MP4Box]) -> int:
    box = _data_box(boxes, "plID")
    if box is None:
        return -1
    f.seek(box.start_offset + 20)
    return _read_i32(f)


def _read_artist_id(f: BinaryIO, boxes: list[MP4Box]) -> int:
    box = _data_box(boxes, "atID")
    if box is None:
        return -1
    f.seek(box.start_offset + 16)
    return _read_i32(f)


def _read_advisory(f: BinaryIO, boxes: list[MP4Box]) -> ItunesAdvisory:
    box = _data_box(boxes, "rtng")
    if box is None:
        return ItunesAdvisory.NONE
    f.seek(box.start_offset + 16)
    return _ADVISORIES.get(_read_byte(f), ItunesAdvisory.NONE)


def _read_genre(f: BinaryIO, boxes: list[MP4Box]) -> Genre:
    box = _data_box(boxes, "gnre")
    if box is None:
        return Genre.NONE
    f.seek(box.start_offset + 17)
    code = _read_byte(f)
    if 1 <= code <= Genre.HARD_ROCK:
        return Genre(code)
    return Genre.NONE


def read_tags(f: BinaryIO, boxes: list[MP4Box], upper_custom: bool) -> MP4Tags:
    """Read the tags stored under the ilst box described by boxes."""
    custom, other_custom = _read_custom(f, boxes, upper_custom)
    track_number, track_total = _read_number_pair(f, boxes, "trkn")
    disc_number, disc_total = _read_number_pair(f, boxes, "disk")
    tags = MP4Tags(
        album=_read_tag(f, boxes, "(c)alb"),
        album_artist=_read_tag(f, boxes, "aART"),
        artist=_read_tag(f, boxes, "(c)art"),
        bpm=_read_bpm(f, boxes),
        comment=_read_tag(f, boxes, "(c)cmt"),
        composer=_read_tag(f, boxes, "(c)wrt"),
        conductor=_read_tag(f, boxes, "(c)con"),
        copyright=_read_tag(f, boxes, "cprt"),
        custom=custom,
        custom_genre=_read_tag(f, boxes, "(c)gen"),
        description=_read_tag(f, boxes, "desc"),
        disc_number=disc_number,
        disc_total=disc_total,
        genre=_read_genre(f, boxes),
        itunes_advisory=_read_advisory(f, boxes),
        itunes_album_id=_read_album_id(f, boxes),
        itunes_artist_id=_read_artist_id(f, boxes),
        lyrics=_read_tag(f, boxes, "(c)lyr"),
        narrator=_read_tag(f, boxes, "(c)nrt"),
        other_custom=other_custom,
        pictures=_read_pictures(f, boxes),
        publisher=_read_tag(f, boxes, "(c)pub"),
        title=_read_tag(f, boxes, "(c)nam"),
        track_number=track_number,
        track_total=track_total,
    )

    day = _read_tag(f, boxes, "(c)day")
    if day:
        if contains_only_nums(day):
            year = int(day)
            if year > _INT32_MAX:
                raise ValueError(f"year out of range: {day}")
            tags.year = year
        else:
            tags.date = day
    return tags


def read_file_tags(
    f: BinaryIO, size: int, upper_custom: bool
) -> tuple[MP4Tags, list[MP4Box]]:
    """Walk the whole file, check its layout and return its tags and boxes."""
    boxes = read_boxes(f, size)
    check_boxes(boxes)
    if find_box(boxes, ILST_PATH) is None:
        return MP4Tags(), boxes
    return read_tags(f, boxes, upper_custom), boxes