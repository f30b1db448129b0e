"""
FastAPI Dependencies for API endpoints.

Services are built once in the application lifespan and handed to routes
from ``app.state``; tests replace them with ``app.dependency_overrides``.
"""

from fastapi import Request

from api.services import MatchService, MetadataService
from utils.network import Paging, RequestLocale, get_request_locale, get_request_paging


def get_match_service(request: Request) -> MatchService:
    return request.app.state.match_service


def get_metadata_service(request: Request) -> MetadataService:
    return request.app.state.metadata_service


def get_locale(request: Request) -> RequestLocale:
    """Language and country from X-Plex headers, query parameters or defaults."""
    return get_request_locale(request)


def get_paging(request: Request) -> Paging:
    """Container window from X-Plex-Container-Start/Size headers or query parameters."""
    return get_request_paging(request)
