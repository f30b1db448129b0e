"""FastAPI application factory."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api import middleware
from api.exception_handlers import register_exception_handlers
from api.lifespan import lifespan
from db.config import Settings, settings
from utils import const


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        app_settings: Settings for this instance; the process settings by default.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=app_settings.addon_name,
        description=app_settings.description,
        version=app_settings.version,
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # Every failure is reported as HTTP 500 with the provider error envelope
    register_exception_handlers(app)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add custom middleware
    @app.middleware("http")
    async def add_cors_header(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(const.CORS_HEADERS)
        if "cache-control" not in response.headers:
            response.headers.update(const.NO_CACHE_HEADERS)
        return response

    app.add_middleware(middleware.TimingMiddleware)
    app.add_middleware(middleware.RequestLoggingMiddleware)

    # Register routers
    _register_routers(app)

    return app


def _register_routers(app: FastAPI) -> None:
    """Register all API routers.

    Uses lazy imports to avoid circular dependencies.
    """
    from api.routers.instance import get_router as get_instance_router
    from api.routers.tv import get_router as get_tv_router

    # ============================================
    # TV Metadata Provider
    # ============================================
    app.include_router(get_tv_router())

    # ============================================
    # Instance
    # ============================================
    app.include_router(get_instance_router(), tags=["instance"])
