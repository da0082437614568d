import io
import struct

import pytest

from mp4tag.objects import BoxNotPresentError, InvalidStcoSizeError, MP4Tags
from mp4tag.reader import find_box, read_boxes, read_file_tags
from mp4tag.writer import resize_boxes, update_chunk_offsets, write_tags

AUDIO = b"AUDIO-PAYLOAD"


def box(name: bytes, payload: bytes = b"") -> bytes:
    return struct.pack(">I", len(payload) + 8) + name + payload


FTYP = box(b"ftyp", b"M4A " + bytes(4))


def stco(entries, count=None):
    count = len(entries) if count is None else count
    body = bytes(4) + struct.pack(">I", count)
    body += b"".join(struct.pack(">I", e) for e in entries)
    return box(b"stco", body)


def moov(ilst, stco_box):
    trak = box(b"trak", box(b"mdia", box(b"minf", box(b"stbl", stco_box))))
    meta = box(b"meta", bytes(4) + ilst)
    return box(b"moov", trak + box(b"udta", meta))


def make_mp4(ilst=None, mdat_first=False, count=None):
    ilst = box(b"ilst") if ilst is None else ilst
    mdat = box(b"mdat", AUDIO)
    if mdat_first:
        return FTYP + mdat + moov(ilst, stco([len(FTYP) + 8], count))
    placeholder = moov(ilst, stco([0], count))
    offset = len(FTYP) + len(placeholder) + 8
    return FTYP + moov(ilst, stco([offset], count)) + mdat


def boxes_of(data):
    return read_boxes(io.BytesIO(data), len(data))


def stco_entries(data):
    found = find_box(boxes_of(data), "moov.trak.mdia.minf.stbl.stco")
    count = struct.unpack(">I", data[found.start_offset + 12:found.start_offset + 16])[0]
    start = found.start_offset + 16
    return list(struct.unpack(f">{count}I", data[start:start + count * 4]))


def rewrite(data, tags):
    src = io.BytesIO(data)
    dest = io.BytesIO()
    write_tags(src, boxes_of(data), tags, dest, False)
    return dest.getvalue()


def test_write_tags_round_trip():
    out = rewrite(make_mp4(), MP4Tags(title="Song", artist="Band"))
    tags, _ = read_file_tags(io.BytesIO(out), len(out), False)
    assert tags.title == "Song"
    assert tags.artist == "Band"


def test_write_tags_keeps_chunk_offsets_pointing_at_audio():
    out = rewrite(make_mp4(), MP4Tags(title="A much longer title than before"))
    (offset,) = stco_entries(out)
    assert out[offset:offset + len(AUDIO)] == AUDIO


def test_write_tags_resizes_parent_boxes():
    out = rewrite(make_mp4(), MP4Tags(album="Record"))
    boxes = boxes_of(out)
    moov_box = find_box(boxes, "moov")
    mdat_box = find_box(boxes, "mdat")
    assert moov_box.end_offset == mdat_box.start_offset
    assert mdat_box.end_offset == len(out)
    udta = find_box(boxes, "moov.udta")
    assert udta.end_offset == moov_box.end_offset


def test_mdat_before_moov_leaves_offsets_alone():
    data = make_mp4(mdat_first=True)
    out = rewrite(data, MP4Tags(title="Song"))
    assert stco_entries(out) == stco_entries(data)
    (offset,) = stco_entries(out)
    assert out[offset:offset + len(AUDIO)] == AUDIO


def test_write_tags_without_ilst_raises():
    data = FTYP + moov(b"", stco([0])) + box(b"mdat", AUDIO)
    with pytest.raises(BoxNotPresentError):
        rewrite(data, MP4Tags(title="Song"))


def test_invalid_stco_size_raises():
    data = make_mp4(count=2)
    with pytest.raises(InvalidStcoSizeError):
        rewrite(data, MP4Tags(title="Song"))


def test_update_chunk_offsets_shifts_by_size_change():
    data = make_mp4()
    (before,) = stco_entries(data)
    dest = io.BytesIO(data)
    update_chunk_offsets(io.BytesIO(data), dest, boxes_of(data), 8, 20)
    assert stco_entries(dest.getvalue()) == [before + 12]


def test_resize_boxes_writes_new_sizes():
    data = make_mp4()
    boxes = boxes_of(data)
    ilst = find_box(boxes, "moov.udta.meta.ilst")
    moov_box = find_box(boxes, "moov")
    dest = io.BytesIO(data)
    resize_boxes(dest, boxes, ilst.start_offset, 8, 20)
    out = dest.getvalue()
    assert struct.unpack(">I", out[ilst.start_offset:ilst.start_offset + 4])[0] == 20
    new_moov = struct.unpack(">I", out[moov_box.start_offset:moov_box.start_offset + 4])[0]
    assert new_moov == moov_box.box_size + 12