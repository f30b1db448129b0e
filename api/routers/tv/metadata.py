"""TV metadata routes keyed by rating key."""

from fastapi import APIRouter, Depends, Path, Query

from api.dependencies import get_locale, get_metadata_service, get_paging
from api.services import MetadataService
from db.schemas import ImageResponse, MetadataResponse
from utils import const
from utils.network import Paging, RequestLocale

router = APIRouter(prefix=f"/tv{const.LIBRARY_METADATA_PATH}", tags=["Metadata"])

RATING_KEY_EXAMPLES = {
    "show": {"summary": "TV Show", "value": "tvdb-show-15260"},
    "season": {"summary": "Season", "value": "tvdb-season-15260-1"},
    "episode": {"summary": "Episode", "value": "tvdb-episode-15260-1-5"},
}


@router.get(
    "/{ratingKey}/images",
    response_model=ImageResponse,
    response_model_exclude_none=True,
)
async def get_images(
    ratingKey: str = Path(..., openapi_examples=RATING_KEY_EXAMPLES),
    locale: RequestLocale = Depends(get_locale),
    service: MetadataService = Depends(get_metadata_service),
):
    """Get all image assets for a show, season or episode."""
    return ImageResponse(MediaContainer=await service.get_images(ratingKey, locale))


@router.get(
    "/{ratingKey}/children",
    response_model=MetadataResponse,
    response_model_exclude_none=True,
)
async def get_children(
    ratingKey: str = Path(..., openapi_examples=RATING_KEY_EXAMPLES),
    episodeOrder: str | None = Query(None, description="TVDB season type (default, official, dvd, absolute)"),
    locale: RequestLocale = Depends(get_locale),
    paging: Paging = Depends(get_paging),
    service: MetadataService = Depends(get_metadata_service),
):
    """Get seasons of a show or episodes of a season, paged with X-Plex-Container-Start/Size."""
    container = await service.get_children(ratingKey, locale, paging, episode_order=episodeOrder)
    return MetadataResponse(MediaContainer=container)


@router.get(
    "/{ratingKey}/grandchildren",
    response_model=MetadataResponse,
    response_model_exclude_none=True,
)
async def get_grandchildren(
    ratingKey: str = Path(..., openapi_examples=RATING_KEY_EXAMPLES),
    locale: RequestLocale = Depends(get_locale),
    paging: Paging = Depends(get_paging),
    service: MetadataService = Depends(get_metadata_service),
):
    """Get every episode of a show across all seasons, paged."""
    container = await service.get_grandchildren(ratingKey, locale, paging)
    return MetadataResponse(MediaContainer=container)


@router.get(
    "/{ratingKey}",
    response_model=MetadataResponse,
    response_model_exclude_none=True,
)
async def get_metadata(
    ratingKey: str = Path(..., openapi_examples=RATING_KEY_EXAMPLES),
    includeChildren: str | None = Query(None, description="1 to include seasons (show) or episodes (season)"),
    episodeOrder: str | None = Query(None, description="TVDB season type (default, official, dvd, absolute)"),
    locale: RequestLocale = Depends(get_locale),
    service: MetadataService = Depends(get_metadata_service),
):
    """Get metadata for a show, season or episode by its rating key."""
    container = await service.get_metadata(
        ratingKey,
        locale,
        include_children=includeChildren == "1",
        episode_order=episodeOrder,
    )
    return MetadataResponse(MediaContainer=container)
