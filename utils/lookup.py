"""
Explicit lookup results for resolution steps.

Each step of a match cascade returns a ``Lookup`` instead of raising, so the
caller decides whether to fall through, skip a candidate or stop.
"""

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Awaitable, Generic, TypeVar

import httpx

from scrapers.tvdb_data import TVDBError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Errors that mean "this step did not work out" rather than a programming bug
LOOKUP_ERRORS = (httpx.HTTPError, TVDBError, ValueError)


class LookupStatus(StrEnum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Outcome of a single resolution step."""

    status: LookupStatus
    value: T | None = None
    reason: str | None = None

    @classmethod
    def found(cls, value: T) -> "Lookup[T]":
        return cls(LookupStatus.FOUND, value)

    @classmethod
    def not_found(cls, reason: str | None = None) -> "Lookup[T]":
        return cls(LookupStatus.NOT_FOUND, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> "Lookup[T]":
        return cls(LookupStatus.FAILED, reason=reason)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND


async def attempt(awaitable: Awaitable[T | None], step: str) -> Lookup[T]:
    """Await an upstream step and classify its outcome.

    ``None`` and empty results are a miss; upstream and parse errors are a
    failure. Anything else propagates.

    Args:
        awaitable: Upstream call to await
        step: Short description used in log messages

    Returns:
        Lookup with the awaited value when found
    """
    try:
        value = await awaitable
    except LOOKUP_ERRORS as e:
        logger.warning(f"{step} failed: {e}")
        return Lookup.failed(str(e))

    if value is None or value == [] or value == {}:
        logger.debug(f"{step}: nothing found")
        return Lookup.not_found(f"{step}: nothing found")
    return Lookup.found(value)
