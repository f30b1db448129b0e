"""Application lifecycle management."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from api.services import MatchService, MetadataService
from db.config import Settings
from scrapers.tvdb_data import TVDBClient


def build_services(app: FastAPI, app_settings: Settings, client: TVDBClient) -> None:
    """Attach the shared client and services to the application state."""
    app.state.tvdb_client = client
    app.state.match_service = MatchService(
        client,
        app_settings.provider_identifier,
        manual_limit=app_settings.manual_match_limit,
    )
    app.state.metadata_service = MetadataService(client, app_settings.provider_identifier)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Handles:
    - TVDB client creation (one token and connection pool per process)
    - Match and metadata service wiring
    - Graceful shutdown of the HTTP client
    """
    app_settings: Settings = app.state.settings

    if not app_settings.tvdb_api_key:
        logging.warning("TVDB_API_KEY is not set; upstream requests will fail")

    client = TVDBClient(
        app_settings.tvdb_api_key,
        base_url=app_settings.tvdb_api_url,
        language=app_settings.tvdb_language,
        token_ttl=timedelta(hours=app_settings.tvdb_token_ttl_hours),
        timeout=app_settings.tvdb_request_timeout,
        proxy=app_settings.requests_proxy_url,
        air_date_max_pages=app_settings.air_date_max_pages,
    )
    build_services(app, app_settings, client)

    yield

    # Shutdown logic
    try:
        await client.close()
    except Exception as e:
        logging.exception("Error closing TVDB client, %s", e)
