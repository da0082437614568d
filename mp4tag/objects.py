"""Errors, enumerations and data types shared across the package."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class MP4TagError(Exception):
    """Base class for errors raised while reading or writing MP4 tags."""


class BoxNotPresentError(MP4TagError):
    """A required box is missing from the file."""


class UnsupportedFtypError(MP4TagError):
    """The file's brand in its ftyp box is not one this package handles."""


class InvalidStcoSizeError(MP4TagError):
    """The stco box size does not match its entry count."""

    def __init__(self, message: str = "stco size is invalid") -> None:
        super().__init__(message)


class InvalidMagicError(MP4TagError):
    """The file does not start with an ftyp box."""

    def __init__(
        self, message: str = "file header is corrupted or not an mp4 file"
    ) -> None:
        super().__init__(message)


FTYP_MAGIC = b"ftyp"

FTYPS: tuple[bytes, ...] = (
    b"M4A ",
    b"M4B ",
    b"dash",
    b"mp41",
    b"mp42",
    b"isom",
    b"iso2",
    b"avc1",
)

CONTAINERS: frozenset[str] = frozenset(
    {
        "moov", "udta", "meta", "ilst", "----", "(c)alb",
        "aART", "(c)art", "(c)nam", "(c)cmt", "(c)gen", "gnre",
        "(c)wrt", "(c)con", "cprt", "desc", "(c)lyr", "(c)nrt",
        "(c)pub", "trkn", "covr", "(c)day", "disk", "(c)too",
        "trak", "mdia", "minf", "stbl", "rtng", "plID",
        "atID", "tmpo", "sonm", "soal", "soar", "soco",
        "soaa",
    }
)


class ImageType(IntEnum):
    """Format of an embedded cover picture."""

    JPEG = 13
    PNG = 14
    AUTO = 15


class ItunesAdvisory(IntEnum):
    """iTunes content advisory rating."""

    NONE = 0
    EXPLICIT = 1
    CLEAN = 2


class Genre(IntEnum):
    """Standard genre codes stored in the gnre box."""

    NONE = 0
    BLUES = 1
    CLASSIC_ROCK = 2
    COUNTRY = 3
    DANCE = 4
    DISCO = 5
    FUNK = 6
    GRUNGE = 7
    HIP_HOP = 8
    JAZZ = 9
    METAL = 10
    NEW_AGE = 11
    OLDIES = 12
    OTHER = 13
    POP = 14
    RHYTHM_AND_BLUES = 15
    RAP = 16
    REGGAE = 17
    ROCK = 18
    TECHNO = 19
    INDUSTRIAL = 20
    ALTERNATIVE = 21
    SKA = 22
    DEATH_METAL = 23
    PRANKS = 24
    SOUNDTRACK = 25
    EUROTECHNO = 26
    AMBIENT = 27
    TRIP_HOP = 28
    VOCAL = 29
    JASS_AND_FUNK = 30
    FUSION = 31
    TRANCE = 32
    CLASSICAL = 33
    INSTRUMENTAL = 34
    ACID = 35
    HOUSE = 36
    GAME = 37
    SOUND_CLIP = 38
    GOSPEL = 39
    NOISE = 40
    ALTERNATIVE_ROCK = 41
    BASS = 42
    SOUL = 43
    PUNK = 44
    SPACE = 45
    MEDITATIVE = 46
    INSTRUMENTAL_POP = 47
    INSTRUMENTAL_ROCK = 48
    ETHNIC = 49
    GOTHIC = 50
    DARKWAVE = 51
    TECHNOINDUSTRIAL = 52
    ELECTRONIC = 53
    POP_FOLK = 54
    EURODANCE = 55
    SOUTHERN_ROCK = 56
    COMEDY = 57
    CULL = 58
    GANGSTA = 59
    TOP40 = 60
    CHRISTIAN_RAP = 61
    POP_SLASH_FUNK = 62
    JUNGLE_MUSIC = 63
    NATIVE_US = 64
    CABARET = 65
    NEW_WAVE = 66
    PSYCHEDELIC = 67
    RAVE = 68
    SHOWTUNES = 69
    TRAILER = 70
    LOFI = 71
    TRIBAL = 72
    ACID_PUNK = 73
    ACID_JAZZ = 74
    POLKA = 75
    RETRO = 76
    MUSICAL = 77
    ROCK_N_ROLL = 78
    HARD_ROCK = 79


@dataclass
class MP4Box:
    """Location of one box in the file and its dotted path from the root."""

    start_offset: int
    end_offset: int
    box_size: int
    path: str


@dataclass
class MP4Picture:
    """An embedded cover picture."""

    data: bytes
    format: ImageType = ImageType.JPEG


@dataclass
class MP4Tags:
    """All metadata fields held in a file's ilst box."""

    album: str = ""
    album_sort: str = ""
    album_artist: str = ""
    album_artist_sort: str = ""
    artist: str = ""
    artist_sort: str = ""
    bpm: int = 0
    comment: str = ""
    composer: str = ""
    composer_sort: str = ""
    conductor: str = ""
    copyright: str = ""
    custom: dict[str, str] = field(default_factory=dict)
    custom_genre: str = ""
    date: str = ""
    description: str = ""
    director: str = ""
    disc_number: int = 0
    disc_total: int = 0
    genre: Genre = Genre.NONE
    itunes_advisory: ItunesAdvisory = ItunesAdvisory.NONE
    itunes_album_id: int = 0
    itunes_artist_id: int = 0
    lyrics: str = ""
    narrator: str = ""
    other_custom: dict[str, list[str]] = field(default_factory=dict)
    pictures: list[MP4Picture] = field(default_factory=list)
    publisher: str = ""
    title: str = ""
    title_sort: str = ""
    track_number: int = 0
    track_total: int = 0
    year: int = 0