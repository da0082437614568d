"""Building the binary boxes that make up a new ilst box."""

from __future__ import annotations

import struct
from collections.abc import Iterable, Mapping

from .objects import Genre, ImageType, ItunesAdvisory, MP4Picture, MP4Tags

_TEXT_FLAGS = b"\x00\x00\x00\x01\x00\x00\x00\x00"
_INT_FLAGS = b"\x00\x00\x00\x15\x00\x00\x00\x00"
_PNG_MAGIC = b"\x89PNG"
_ITUNES_MEAN = b"com.apple.iTunes"


def _u32(n: int) -> bytes:
    return struct.pack(">I", n & 0xFFFFFFFF)


def _u16(n: int) -> bytes:
    return struct.pack(">H", n & 0xFFFF)


def _name(name: str) -> bytes:
    return name.encode("latin-1")


def regular_atom(name: str, value: str, prefix: bool) -> bytes:
    """Return a text tag box; prefix puts the 0xA9 marker before name."""
    value_bytes = value.encode("utf-8")
    size = len(value_bytes) + 24
    head = b"\xa9" + _name(name) if prefix else _name(name)
    return (
        _u32(size) + head + _u32(size - 8) + b"data" + _TEXT_FLAGS + value_bytes
    )


def genre_atom(genre: Genre) -> bytes:
    """Return the gnre box for a standard genre code."""
    return (
        _u32(0x1A) + b"gnre" + _u32(0x12) + b"data" + bytes(9)
        + bytes([int(genre) & 0xFF])
    )


def trkn_disk_atom(number: int, total: int, is_trkn: bool) -> bytes:
    """Return a trkn or disk box; negative numbers are stored as zero."""
    number = max(number, 0)
    total = max(total, 0)
    size = 32 if is_trkn else 30
    out = (
        _u32(size) + (b"trkn" if is_trkn else b"disk") + _u32(size - 8)
        + b"data" + bytes(10) + _u16(number) + _u16(total)
    )
    if is_trkn:
        out += bytes(2)
    return out


def bpm_atom(bpm: int) -> bytes:
    """Return the tmpo box."""
    return _u32(0x1A) + b"tmpo" + _u32(0x12) + b"data" + _INT_FLAGS + _u16(bpm)


def advisory_atom(advisory: ItunesAdvisory) -> bytes:
    """Return the rtng box."""
    return (
        _u32(0x19) + b"rtng" + _u32(0x11) + b"data" + _INT_FLAGS
        + bytes([int(advisory) & 0xFF])
    )


def album_id_atom(album_id: int) -> bytes:
    """Return the plID box."""
    return (
        _u32(0x20) + b"plID" + _u32(0x18) + b"data" + _INT_FLAGS + bytes(4)
        + _u32(album_id)
    )


def artist_id_atom(artist_id: int) -> bytes:
    """Return the atID box."""
    return (
        _u32(0x1C) + b"atID" + _u32(0x14) + b"data" + _INT_FLAGS + _u32(artist_id)
    )


def custom_atom(
    name: str, value: str, upper: bool, others: Mapping[str, list[str]] | None
) -> bytes:
    """Return a ---- box holding one custom tag and its extra values."""
    if upper:
        name = name.upper()
    name_bytes = name.encode("utf-8")
    extras = [v.encode("utf-8") for v in (others or {}).get(name, [])]
    value_bytes = value.encode("utf-8")

    def data_box(payload: bytes) -> bytes:
        return _u32(len(payload) + 16) + b"data" + _TEXT_FLAGS + payload

    body = (
        _u32(0x1C) + b"mean" + bytes(4) + _ITUNES_MEAN
        + _u32(len(name_bytes) + 12) + b"name" + bytes(4) + name_bytes
        + data_box(value_bytes)
        + b"".join(data_box(extra) for extra in extras)
    )
    return _u32(len(body) + 8) + b"----" + body


def picture_format(image_type: ImageType, magic: bytes) -> int:
    """Return the data type code for a picture: 0x0E for PNG, 0x0D otherwise."""
    if image_type == ImageType.AUTO and magic[:4] == _PNG_MAGIC:
        return 0x0E
    if image_type == ImageType.PNG:
        return 0x0E
    return 0x0D


def pictures_atom(pictures: Iterable[MP4Picture]) -> bytes:
    """Return the covr box; pictures without data are left out."""
    parts = []
    for picture in pictures:
        if not picture.data:
            continue
        code = picture_format(picture.format, picture.data[:4])
        parts.append(
            _u32(len(picture.data) + 16) + b"data"
            + bytes([0, 0, 0, code]) + bytes(4) + picture.data
        )
    body = b"".join(parts)
    return _u32(len(body) + 8) + b"covr" + body


def build_ilst(tags: MP4Tags, upper_custom: bool) -> bytes:
    """Return a complete ilst box holding every set field of tags."""
    text_fields = (
        ("nam", tags.title, True),
        ("sonm", tags.title_sort, False),
        ("alb", tags.album, True),
        ("soal", tags.album_sort, False),
        ("aART", tags.album_artist, False),
        ("soaa", tags.album_artist_sort, False),
        ("ART", tags.artist, True),
        ("soar", tags.artist_sort, False),
        ("cmt", tags.comment, True),
        ("wrt", tags.composer, True),
        ("soco", tags.composer_sort, False),
        ("cprt", tags.copyright, False),
        ("lyr", tags.lyrics, True),
        ("gen", tags.custom_genre, True),
        ("desc", tags.description, False),
        ("pub", tags.publisher, True),
        ("con", tags.conductor, True),
    )
    parts = [regular_atom(name, value, prefix) for name, value, prefix in text_fields if value]

    if tags.itunes_advisory != ItunesAdvisory.NONE:
        parts.append(advisory_atom(tags.itunes_advisory))
    if tags.itunes_album_id > 0:
        parts.append(album_id_atom(tags.itunes_album_id))
    if tags.itunes_artist_id > 0:
        parts.append(artist_id_atom(tags.itunes_artist_id))
    if tags.track_number > 0 or tags.track_total > 0:
        parts.append(trkn_disk_atom(tags.track_number, tags.track_total, True))
    if tags.disc_number > 0 or tags.disc_total > 0:
        parts.append(trkn_disk_atom(tags.disc_number, tags.disc_total, False))
    if tags.bpm > 0:
        parts.append(bpm_atom(tags.bpm))
    if tags.year > 0:
        parts.append(regular_atom("day", str(tags.year), True))
    elif tags.date:
        parts.append(regular_atom("day", tags.date, True))
    if tags.genre != Genre.NONE:
        parts.append(genre_atom(tags.genre))
    for key, value in (tags.custom or {}).items():
        parts.append(custom_atom(key, value, upper_custom, tags.other_custom))
    parts.append(pictures_atom(tags.pictures or []))

    body = b"".join(parts)
    return _u32(len(body) + 8) + b"ilst" + body