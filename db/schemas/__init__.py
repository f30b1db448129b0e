"""
Schemas package.

This module re-exports all Pydantic schemas for easy importing:
    from db.schemas import MatchRequest, MediaContainer, ...
"""

# Match schemas
from db.schemas.match import MatchRequest

# Metadata schemas
from db.schemas.metadata import (
    EpisodeMetadata,
    GuidTag,
    ImageAsset,
    ImageContainer,
    ImageResponse,
    MediaContainer,
    MediaProvider,
    MediaProviderResponse,
    MetadataResponse,
    ProviderFeature,
    ProviderScheme,
    ProviderType,
    SeasonMetadata,
    ShowMetadata,
    Tag,
)

__all__ = [
    "EpisodeMetadata",
    "GuidTag",
    "ImageAsset",
    "ImageContainer",
    "ImageResponse",
    "MatchRequest",
    "MediaContainer",
    "MediaProvider",
    "MediaProviderResponse",
    "MetadataResponse",
    "ProviderFeature",
    "ProviderScheme",
    "ProviderType",
    "SeasonMetadata",
    "ShowMetadata",
    "Tag",
]
