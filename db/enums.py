from enum import IntEnum, StrEnum


# Enums
class MetadataType(IntEnum):
    SHOW = 2
    SEASON = 3
    EPISODE = 4


class SeasonType(StrEnum):
    DEFAULT = "default"
    OFFICIAL = "official"
    DVD = "dvd"
    ABSOLUTE = "absolute"
    ALTERNATE = "alternate"
    REGIONAL = "regional"


class ArtworkType(IntEnum):
    # TVDB artwork type ids
    SERIES_BANNER = 1
    SERIES_POSTER = 2
    SERIES_BACKGROUND = 3
    SEASON_BANNER = 6
    SEASON_POSTER = 7
    SEASON_BACKGROUND = 8
    EPISODE_SCREENCAP = 11
    SERIES_CLEARLOGO = 23


class ImageType(StrEnum):
    POSTER = "coverPoster"
    BACKGROUND = "background"
    BANNER = "banner"
    CLEAR_LOGO = "clearLogo"
    SNAPSHOT = "snapshot"
