"""Base service class for all services."""

import logging
from abc import ABC

from db.schemas import MediaContainer
from scrapers.tvdb_data import TVDBClient


class BaseService(ABC):
    """Base class for all services.

    Provides common functionality like logging and upstream access.
    """

    def __init__(
        self,
        client: TVDBClient,
        identifier: str,
        logger: logging.Logger | None = None,
    ):
        """Initialize the service.

        Args:
            client: Shared TVDB client.
            identifier: Provider identifier used in guids and containers.
            logger: Optional logger instance. If not provided, creates one.
        """
        self._client = client
        self._identifier = identifier
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    @property
    def client(self) -> TVDBClient:
        """Get the TVDB client."""
        return self._client

    @property
    def identifier(self) -> str:
        """Get the provider identifier."""
        return self._identifier

    @property
    def logger(self) -> logging.Logger:
        """Get the logger."""
        return self._logger

    def empty_container(self) -> MediaContainer:
        return MediaContainer.from_items(self._identifier, [])
