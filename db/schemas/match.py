"""Match request schema."""

from pydantic import BaseModel, ConfigDict


class MatchRequest(BaseModel):
    """Loose identification hints sent by the media server.

    ``type`` is kept as a plain int so that unsupported values reach the
    match service and fail there instead of at validation time.
    """

    model_config = ConfigDict(extra="ignore")

    type: int
    title: str | None = None
    parentTitle: str | None = None  # season matches
    grandparentTitle: str | None = None  # episode matches
    year: int | None = None
    guid: str | None = None  # e.g. "tvdb://12345", "imdb://tt1234567"
    index: int | None = None  # season number (type 3) or episode number (type 4)
    parentIndex: int | None = None  # season number (type 4)
    date: str | None = None  # air date, YYYY-MM-DD
    filename: str | None = None
    manual: int = 0
    includeAdult: int = 0
    includeChildren: int = 0
    episodeOrder: str | None = None

    @property
    def is_manual(self) -> bool:
        return self.manual == 1

    @property
    def include_children(self) -> bool:
        return self.includeChildren == 1
