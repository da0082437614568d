"""Merging new tag values into the tags already present in a file."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from .objects import Genre, ItunesAdvisory, MP4Tags

# Deletion keyword -> field it resets to its default value.
_DELETABLE: dict[str, str] = {
    "album": "album",
    "albumartist": "album_artist",
    "albumartistsort": "album_artist_sort",
    "albumsort": "album_sort",
    "artist": "artist",
    "artistsort": "artist_sort",
    "bpm": "bpm",
    "comment": "comment",
    "composer": "composer",
    "composersort": "composer_sort",
    "conductor": "conductor",
    "copyright": "copyright",
    "customgenre": "custom_genre",
    "date": "date",
    "description": "description",
    "director": "director",
    "discnumber": "disc_number",
    "disknumber": "disc_number",
    "disctotal": "disc_total",
    "disktotal": "disc_total",
    "genre": "genre",
    "itunesadvisory": "itunes_advisory",
    "itunesalbumid": "itunes_album_id",
    "itunesartistid": "itunes_artist_id",
    "lyrics": "lyrics",
    "narrator": "narrator",
    "publisher": "publisher",
    "title": "title",
    "titlesort": "title_sort",
    "tracknumber": "track_number",
    "tracktotal": "track_total",
    "year": "year",
}

_TEXT_FIELDS = (
    "album", "album_sort", "album_artist", "album_artist_sort", "artist",
    "artist_sort", "comment", "composer", "composer_sort", "conductor",
    "copyright", "custom_genre", "date", "description", "director",
    "lyrics", "narrator", "publisher", "title", "title_sort",
)

_NUMBER_FIELDS = (
    "bpm", "disc_number", "disc_total", "itunes_album_id",
    "itunes_artist_id", "track_number", "track_total", "year",
)


def _copy(tags: MP4Tags) -> MP4Tags:
    return dataclasses.replace(
        tags,
        custom=dict(tags.custom or {}),
        other_custom={k: list(v) for k, v in (tags.other_custom or {}).items()},
        pictures=list(tags.pictures or []),
    )


def merge_tags(
    existing: MP4Tags, tags: MP4Tags | None, delete: Iterable[str] | None
) -> MP4Tags:
    """Return existing with the deletions applied and tags' set fields laid over it.

    Deletion keywords are case-insensitive. Neither argument is modified.
    """
    removals = {item.lower() for item in (delete or ())}
    incoming = tags if tags is not None else MP4Tags()
    blank = MP4Tags()

    if "alltags" in removals:
        merged = MP4Tags(pictures=list(existing.pictures or []))
    else:
        merged = _copy(existing)
        if "allcustom" in removals:
            merged.custom = {}
    if "allothercustom" in removals:
        merged.other_custom = {}

    for keyword, name in _DELETABLE.items():
        if keyword in removals:
            setattr(merged, name, getattr(blank, name))

    if "allpictures" in removals:
        merged.pictures = []

    for name in _TEXT_FIELDS:
        value = getattr(incoming, name)
        if value:
            setattr(merged, name, value)
    for name in _NUMBER_FIELDS:
        value = getattr(incoming, name)
        if value > 0:
            setattr(merged, name, value)
    if incoming.itunes_advisory != ItunesAdvisory.NONE:
        merged.itunes_advisory = incoming.itunes_advisory
    if incoming.genre != Genre.NONE:
        merged.genre = incoming.genre

    for key, value in (incoming.custom or {}).items():
        if f"custom:{key}" in removals:
            continue
        if value:
            merged.custom[key] = value

    for key, values in (incoming.other_custom or {}).items():
        if f"custom:{key}" in removals or not values:
            continue
        merged.other_custom.setdefault(key, []).extend(values)

    kept = [
        picture
        for number, picture in enumerate(merged.pictures, start=1)
        if f"picture:{number}" not in removals
    ]
    merged.pictures = kept + list(incoming.pictures or [])
    return merged