# mp4tag

Read and write iTunes-style metadata (the `ilst` box) in MP4 containers such
as `.m4a`, `.m4b` and `.mp4` files. Pure Python, standard library only.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Reading tags

```python
from mp4tag.mp4 import open_mp4

with open_mp4("song.m4a") as mp4:
    tags = mp4.read()
    print(tags.title, tags.artist, tags.album)
    print(tags.track_number, tags.track_total)
    print(tags.custom)
```

`open_mp4(path)` (or `MP4(path)`) opens the file and checks its header.
`read()` returns an `mp4tag.objects.MP4Tags` dataclass.

- Text fields that are absent are empty strings.
- When the file has an `ilst` box, track and disc number/total, BPM and the
  iTunes album and artist IDs are `-1` if their box is missing. When there is
  no `ilst` box at all, `read()` returns a blank `MP4Tags()` whose numbers are
  all `0`.
- A purely numeric `©day` value goes to `year`; anything else goes to `date`.
- `genre` is a `Genre` member; codes outside the table read as `Genre.NONE`.
- `itunes_advisory` is an `ItunesAdvisory` member (`NONE`, `EXPLICIT`,
  `CLEAN`).
- `pictures` is a list of `MP4Picture(data, format)`, with `format` set to
  `ImageType.PNG` or `ImageType.JPEG`.
- `custom` maps the name of each `----` box to its first value; further
  values, and values of repeated names, are collected in `other_custom`.

## Writing tags

```python
from mp4tag.mp4 import MP4
from mp4tag.objects import Genre, ImageType, MP4Picture, MP4Tags

with MP4("song.m4a") as mp4:
    new = MP4Tags(
        title="New Title",
        track_number=3,
        track_total=12,
        genre=Genre.ROCK,
        custom={"MOOD": "calm"},
    )
    with open("cover.png", "rb") as fh:
        new.pictures = [MP4Picture(data=fh.read(), format=ImageType.AUTO)]
    mp4.write(new, ["comment", "picture:1"])
```

`write(tags, delete=None)` reads the tags already in the file, merges `tags`
into them and rewrites the file. If `tags` is `None` and `delete` is empty,
nothing happens. Fields that are empty or not positive in `tags` leave the
existing value alone; new pictures are appended after the kept ones.

`delete` is a list of keywords, compared without regard to case, applied
before the new values are laid over:

- single fields: `album`, `albumartist`, `albumartistsort`, `albumsort`,
  `artist`, `artistsort`, `bpm`, `comment`, `composer`, `composersort`,
  `conductor`, `copyright`, `customgenre`, `date`, `description`, `director`,
  `discnumber`/`disknumber`, `disctotal`/`disktotal`, `genre`,
  `itunesadvisory`, `itunesalbumid`, `itunesartistid`, `lyrics`, `narrator`,
  `publisher`, `title`, `titlesort`, `tracknumber`, `tracktotal`, `year`
- `alltags`: clear every field except pictures
- `allcustom`: clear `custom`; `allothercustom`: clear `other_custom`
- `custom:<NAME>`: ignore the entry `<NAME>` in the new `tags.custom` and
  `tags.other_custom` (existing values under that name are kept)
- `allpictures`: drop all existing pictures; `picture:<n>`: drop the n-th
  existing picture, counting from 1

With `ImageType.AUTO`, a picture whose data starts with the PNG signature is
stored as PNG, otherwise as JPEG.

The new file is built in the system temp directory and then copied over the
original. The sizes of `moov`, `moov.udta` and `moov.udta.meta` are adjusted,
and when `mdat` lies after the metadata and its size changed, the chunk
offsets in `moov.trak.mdia.minf.stbl.stco` are shifted to match.

The merge and the box builders can also be used on their own:
`mp4tag.merge.merge_tags(existing, tags, delete)` and
`mp4tag.atoms.build_ilst(tags, upper_custom)`.

## Custom field names

Set `mp4.upper_custom = True` on an `MP4` object to upper-case custom field
names when reading and writing.

## Errors

Format errors derive from `mp4tag.objects.MP4TagError`:

- `InvalidMagicError`: the file has no `ftyp` header
- `UnsupportedFtypError`: the brand is not one of `M4A `, `M4B `, `dash`,
  `mp41`, `mp42`, `isom`, `iso2`, `avc1`
- `BoxNotPresentError`: a required box (`moov`, `mdat`, `moov.udta`,
  `moov.udta.meta`, the `stco` table, or `ilst` when writing) is missing
- `InvalidStcoSizeError`: the `stco` box size does not match its entry count
- `MP4TagError` itself: a box with a size of zero or less, or a custom tag
  name with no value

A truncated file raises `EOFError`; file system problems raise `OSError`.

## Limitations

- Writing needs an existing `ilst` box; one is not created.
- Only the 32-bit `stco` chunk offset table of the first track is updated;
  `co64` tables and further tracks are not.
- The sort fields (`album_sort`, `album_artist_sort`, `artist_sort`,
  `composer_sort`, `title_sort`) are written but not read back, so a later
  `write()` that does not set them again drops them. `narrator` is read but
  not written, and `director` is neither read nor written.