"""Exception handlers returning the provider's error envelope.

The media server treats every failed request alike, so all failures are
reported as HTTP 500 with ``{"error": ..., "message": ...}``.
"""

import logging

import httpx
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.exceptions import ProviderError
from scrapers.tvdb_data import TVDBError
from utils import const

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": INTERNAL_ERROR, "message": message},
        headers=const.NO_CACHE_HEADERS,
    )


async def provider_exception_handler(request: Request, exc: ProviderError) -> JSONResponse:
    """Unsupported metadata type, invalid match request or rating key."""
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return error_response(exc.message)


async def upstream_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """TVDB errors that were not absorbed by a fallback."""
    logger.error(f"{request.method} {request.url.path} failed upstream: {exc}")
    return error_response(str(exc) or exc.__class__.__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies use the same envelope instead of a 422."""
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}" for error in exc.errors()
    )
    logger.warning(f"{request.method} {request.url.path} invalid request: {errors}")
    return error_response(f"Invalid request: {errors}")


def register_exception_handlers(app) -> None:
    app.add_exception_handler(ProviderError, provider_exception_handler)
    app.add_exception_handler(httpx.HTTPError, upstream_exception_handler)
    app.add_exception_handler(TVDBError, upstream_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
