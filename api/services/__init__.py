"""
Services layer for business logic.

This package contains service classes that encapsulate business logic,
separating it from API routes and upstream calls.

Services:
- BaseService: Base class for all services
- MatchService: Show, season and episode match resolution
- MetadataService: Rating-key lookups, children paging and images
"""

from .base import BaseService
from .match import MatchService
from .metadata import MetadataService

__all__ = [
    "BaseService",
    "MatchService",
    "MetadataService",
]
