"""TV provider routes package.

Import the router via get_router() to avoid circular imports.
"""

from fastapi import APIRouter

_router = None


def get_router() -> APIRouter:
    """Create and return the combined TV provider router.

    Uses lazy imports to avoid circular dependencies.
    """
    global _router
    if _router is not None:
        return _router

    from .match import router as match_router
    from .metadata import router as metadata_router
    from .provider import router as provider_router

    combined = APIRouter()
    combined.include_router(provider_router)
    combined.include_router(match_router)
    combined.include_router(metadata_router)
    _router = combined
    return _router


__all__ = ["get_router"]
