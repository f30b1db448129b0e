"""TV match route."""

from fastapi import APIRouter, Body, Depends

from api.dependencies import get_locale, get_match_service
from api.services import MatchService
from db.schemas import MatchRequest, MetadataResponse
from utils import const
from utils.network import RequestLocale

router = APIRouter(prefix="/tv", tags=["Match"])

MATCH_EXAMPLES = {
    "matchShow": {
        "summary": "Match TV Show by title",
        "value": {"type": 2, "title": "Adventure Time", "year": 2010},
    },
    "matchByExternalId": {
        "summary": "Match by external ID",
        "value": {"type": 2, "guid": "tvdb://152831"},
    },
    "matchSeason": {
        "summary": "Match Season",
        "value": {"type": 3, "parentTitle": "Adventure Time", "index": 1},
    },
    "matchEpisode": {
        "summary": "Match Episode",
        "value": {"type": 4, "grandparentTitle": "Adventure Time", "parentIndex": 1, "index": 5},
    },
    "manualSearch": {
        "summary": "Manual search (multiple results)",
        "value": {"type": 2, "title": "Star", "manual": 1},
    },
}


@router.post(
    const.LIBRARY_MATCHES_PATH,
    response_model=MetadataResponse,
    response_model_exclude_none=True,
)
async def match_content(
    match_request: MatchRequest = Body(..., openapi_examples=MATCH_EXAMPLES),
    locale: RequestLocale = Depends(get_locale),
    service: MatchService = Depends(get_match_service),
):
    """Search for TV shows, seasons or episodes based on the provided hints.

    Type 2 matches a show by ``guid`` or ``title``, type 3 a season by
    ``parentTitle`` + ``index`` and type 4 an episode by ``grandparentTitle``
    plus ``parentIndex`` + ``index`` or ``date``. ``manual=1`` returns up to
    five show candidates.
    """
    container = await service.match(match_request, locale)
    return MetadataResponse(MediaContainer=container)
