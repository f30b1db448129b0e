"""Instance information endpoints."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["Instance"])


class HealthStatus(BaseModel):
    """Liveness information."""

    status: str
    addon_name: str
    version: str
    tvdb_configured: bool


@router.get("/health", response_model=HealthStatus)
async def get_health(request: Request):
    """Liveness check; does not call TVDB."""
    app_settings = request.app.state.settings
    return HealthStatus(
        status="ok",
        addon_name=app_settings.addon_name,
        version=app_settings.version,
        tvdb_configured=bool(app_settings.tvdb_api_key),
    )
