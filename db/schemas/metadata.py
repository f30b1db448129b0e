"""Media-server metadata schemas for provider, container and item responses."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class GuidTag(BaseModel):
    """External identifier such as ``tvdb://76885``."""

    id: str


class Tag(BaseModel):
    tag: str


class ShowMetadata(BaseModel):
    """TV show item."""

    type: Literal["show"] = "show"
    ratingKey: str
    key: str
    guid: str
    title: str | None = None
    originalTitle: str | None = None
    year: int | None = None
    summary: str | None = None
    originallyAvailableAt: str | None = None
    thumb: str | None = None
    art: str | None = None
    contentRating: str | None = None
    studio: str | None = None
    duration: int | None = None
    Genre: list[Tag] | None = None
    Guid: list[GuidTag] = Field(default_factory=list)
    Children: "MediaContainer | None" = None


class SeasonMetadata(BaseModel):
    """Season item with a read-only copy of its parent show."""

    type: Literal["season"] = "season"
    ratingKey: str
    key: str
    guid: str
    title: str | None = None
    summary: str | None = None
    index: int
    year: int | None = None
    thumb: str | None = None
    parentRatingKey: str
    parentKey: str
    parentGuid: str
    parentType: Literal["show"] = "show"
    parentTitle: str | None = None
    parentThumb: str | None = None
    Guid: list[GuidTag] = Field(default_factory=list)
    Children: "MediaContainer | None" = None


class EpisodeMetadata(BaseModel):
    """Episode item with read-only copies of its season and show."""

    type: Literal["episode"] = "episode"
    ratingKey: str
    key: str
    guid: str
    title: str | None = None
    summary: str | None = None
    index: int | None = None
    parentIndex: int | None = None
    year: int | None = None
    originallyAvailableAt: str | None = None
    duration: int | None = None
    thumb: str | None = None
    contentRating: str | None = None
    parentRatingKey: str
    parentKey: str
    parentGuid: str
    parentType: Literal["season"] = "season"
    parentTitle: str | None = None
    parentThumb: str | None = None
    grandparentRatingKey: str
    grandparentKey: str
    grandparentGuid: str
    grandparentType: Literal["show"] = "show"
    grandparentTitle: str | None = None
    grandparentThumb: str | None = None
    Guid: list[GuidTag] = Field(default_factory=list)


MetadataItem = Annotated[
    ShowMetadata | SeasonMetadata | EpisodeMetadata,
    Field(discriminator="type"),
]


class MediaContainer(BaseModel):
    offset: int = 0
    totalSize: int = 0
    identifier: str
    size: int = 0
    Metadata: list[MetadataItem] = Field(default_factory=list)

    @classmethod
    def from_items(cls, identifier: str, items: list, offset: int = 0, total_size: int | None = None) -> "MediaContainer":
        """Wrap items; without ``total_size`` the container is unpaged."""
        return cls(
            offset=offset,
            totalSize=len(items) if total_size is None else total_size,
            identifier=identifier,
            size=len(items),
            Metadata=items,
        )


class MetadataResponse(BaseModel):
    MediaContainer: MediaContainer


class ImageAsset(BaseModel):
    type: str
    url: str
    alt: str | None = None


class ImageContainer(BaseModel):
    offset: int = 0
    totalSize: int = 0
    identifier: str
    size: int = 0
    Image: list[ImageAsset] = Field(default_factory=list)


class ImageResponse(BaseModel):
    MediaContainer: ImageContainer


class ProviderScheme(BaseModel):
    scheme: str


class ProviderType(BaseModel):
    type: int
    Scheme: list[ProviderScheme]


class ProviderFeature(BaseModel):
    type: str
    key: str


class MediaProvider(BaseModel):
    identifier: str
    title: str
    version: str
    Types: list[ProviderType]
    Feature: list[ProviderFeature]


class MediaProviderResponse(BaseModel):
    MediaProvider: MediaProvider


ShowMetadata.model_rebuild()
SeasonMetadata.model_rebuild()
