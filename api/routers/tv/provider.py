"""TV provider definition route."""

from fastapi import APIRouter, Request

from db.enums import MetadataType
from db.schemas import (
    MediaProvider,
    MediaProviderResponse,
    ProviderFeature,
    ProviderScheme,
    ProviderType,
)
from utils import const

router = APIRouter(prefix="/tv", tags=["Provider"])


@router.get("", response_model=MediaProviderResponse)
async def get_provider(request: Request):
    """Get the MediaProvider definition with supported types and features."""
    app_settings = request.app.state.settings
    scheme = [ProviderScheme(scheme=app_settings.provider_identifier)]

    return MediaProviderResponse(
        MediaProvider=MediaProvider(
            identifier=app_settings.provider_identifier,
            title=app_settings.provider_title,
            version=app_settings.version,
            Types=[ProviderType(type=metadata_type, Scheme=scheme) for metadata_type in MetadataType],
            Feature=[
                ProviderFeature(type="metadata", key=const.LIBRARY_METADATA_PATH),
                ProviderFeature(type="match", key=const.LIBRARY_MATCHES_PATH),
            ],
        )
    )
