import pytest

from mp4tag.merge import merge_tags
from mp4tag.objects import Genre, ItunesAdvisory, MP4Picture, MP4Tags


def _existing():
    return MP4Tags(
        album="Old Album",
        artist="Old Artist",
        bpm=120,
        disc_number=1,
        disc_total=2,
        genre=Genre.JAZZ,
        custom={"MOOD": "calm"},
        other_custom={"MOOD": ["quiet"]},
        pictures=[MP4Picture(data=b"one"), MP4Picture(data=b"two")],
    )


def test_new_values_override():
    merged = merge_tags(_existing(), MP4Tags(album="New", genre=Genre.ROCK), [])
    assert merged.album == "New"
    assert merged.artist == "Old Artist"
    assert merged.genre == Genre.ROCK


def test_empty_values_do_not_override():
    merged = merge_tags(_existing(), MP4Tags(), [])
    assert merged.album == "Old Album"
    assert merged.bpm == 120


def test_delete_is_case_insensitive():
    merged = merge_tags(_existing(), MP4Tags(), ["ALBUM", "Bpm"])
    assert merged.album == ""
    assert merged.bpm == 0


@pytest.mark.parametrize("keyword", ["disknumber", "discnumber"])
def test_disc_aliases(keyword):
    merged = merge_tags(_existing(), MP4Tags(), [keyword, "disktotal"])
    assert merged.disc_number == 0
    assert merged.disc_total == 0


def test_delete_then_set_uses_new_value():
    merged = merge_tags(_existing(), MP4Tags(album="Fresh"), ["album"])
    assert merged.album == "Fresh"


def test_alltags_keeps_pictures():
    existing = _existing()
    merged = merge_tags(existing, None, ["alltags"])
    assert merged.album == ""
    assert merged.custom == {}
    assert [p.data for p in merged.pictures] == [b"one", b"two"]


def test_allpictures_and_new_pictures():
    new = MP4Picture(data=b"three")
    merged = merge_tags(_existing(), MP4Tags(pictures=[new]), ["allpictures"])
    assert merged.pictures == [new]


def test_picture_number_removal():
    merged = merge_tags(_existing(), MP4Tags(), ["picture:1"])
    assert [p.data for p in merged.pictures] == [b"two"]


def test_allcustom_and_allothercustom():
    merged = merge_tags(_existing(), MP4Tags(), ["allcustom", "allothercustom"])
    assert merged.custom == {}
    assert merged.other_custom == {}


def test_custom_merging():
    tags = MP4Tags(
        custom={"MOOD": "happy", "KEY": "C", "SKIP": "x", "EMPTY": ""},
        other_custom={"MOOD": ["loud"], "NEW": ["a"], "NONE": []},
    )
    merged = merge_tags(_existing(), tags, ["custom:SKIP".lower(), "custom:skip"])
    assert merged.custom["MOOD"] == "happy"
    assert merged.custom["KEY"] == "C"
    assert "EMPTY" not in merged.custom
    assert merged.other_custom["MOOD"] == ["quiet", "loud"]
    assert merged.other_custom["NEW"] == ["a"]
    assert "NONE" not in merged.other_custom


def test_custom_delete_blocks_incoming_key():
    merged = merge_tags(MP4Tags(), MP4Tags(custom={"skip": "v"}), ["custom:skip"])
    assert merged.custom == {}


def test_advisory_override_and_delete():
    merged = merge_tags(
        MP4Tags(itunes_advisory=ItunesAdvisory.CLEAN),
        MP4Tags(itunes_advisory=ItunesAdvisory.EXPLICIT),
        [],
    )
    assert merged.itunes_advisory == ItunesAdvisory.EXPLICIT
    cleared = merge_tags(merged, MP4Tags(), ["itunesadvisory"])
    assert cleared.itunes_advisory == ItunesAdvisory.NONE


def test_existing_not_modified():
    existing = _existing()
    merge_tags(existing, MP4Tags(other_custom={"MOOD": ["x"]}), ["album", "picture:2"])
    assert existing.album == "Old Album"
    assert existing.other_custom == {"MOOD": ["quiet"]}
    assert len(existing.pictures) == 2