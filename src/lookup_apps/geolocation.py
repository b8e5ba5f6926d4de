"""Acquiring the host's position before a weather lookup.

A :class:`Locator` is an optional capability: the weather app checks for
one before doing anything else. Acquisition can fail in three distinguished
ways (permission denied, position unavailable, timeout), each surfaced as a
:class:`LocationError`. A fix younger than the requested maximum age is
served from cache instead of being acquired again.
"""

import abc
import enum
import logging
import time
from typing import Callable, Optional

import requests

from .cache import CacheBackend, MemoryCache
from .config import PositionOptions
from .errors import AppError, NetworkUnreachable
from .models import Coordinates, Position


logger = logging.getLogger(__name__)

POSITION_KEY = "current"


class LocationFailure(enum.Enum):
    """Reasons a position could not be acquired."""

    PERMISSION_DENIED = "Location access denied by user."
    POSITION_UNAVAILABLE = "Location information is unavailable."
    TIMEOUT = "Location request timed out."
    UNKNOWN = "Unable to retrieve your location."


class LocationError(NetworkUnreachable):
    """Raised when the host's position cannot be acquired."""

    def __init__(self, reason: LocationFailure):
        super().__init__(reason.value, details={"reason": reason.name})
        self.reason = reason


class Locator(abc.ABC):
    """Source of the host's current position."""

    def __init__(self, cache: Optional[CacheBackend[str, Position]] = None):
        self._cache: CacheBackend[str, Position] = cache if cache is not None else MemoryCache(max_size=1)

    def current_position(self, options: Optional[PositionOptions] = None) -> Position:
        """Return a position no older than ``options.maximum_age_seconds``."""
        options = options or PositionOptions()

        if options.maximum_age_seconds > 0:
            cached = self._cache.get(POSITION_KEY)
            if cached is not None:
                logger.debug("Using cached position from %s", cached.timestamp.isoformat())
                return cached

        try:
            position = self._acquire(options)
        except AppError:
            raise
        except Exception as e:
            logger.error("Unexpected failure acquiring position: %s", e)
            raise LocationError(LocationFailure.UNKNOWN) from e

        self._cache.set(POSITION_KEY, position, ttl=options.maximum_age_seconds)
        return position

    def forget(self) -> None:
        """Drop any cached position."""
        self._cache.clear()

    @abc.abstractmethod
    def _acquire(self, options: PositionOptions) -> Position:
        """Acquire a fresh position or raise LocationError."""
        ...


class FixedLocator(Locator):
    """Locator that always reports the same coordinates."""

    def __init__(self, latitude: float, longitude: float):
        super().__init__()
        self.coordinates = Coordinates(latitude=latitude, longitude=longitude)

    def _acquire(self, options: PositionOptions) -> Position:
        return Position(coords=self.coordinates, accuracy=0.0)


class IpLocator(Locator):
    """Locator that resolves the host's public IP address to coordinates.

    ``ask_permission`` is called before every acquisition; a falsy answer
    fails with ``PERMISSION_DENIED`` without touching the network.

    ``timeout_seconds`` is passed to requests as the socket timeout, and a
    lookup that takes longer than that overall is also reported as timed out.
    IP lookups resolve to city level, so ``enable_high_accuracy`` has no
    effect here.
    """

    def __init__(
        self,
        url: str = "http://ip-api.com/json/",
        ask_permission: Callable[[], bool] = lambda: True,
        session: Optional[requests.Session] = None,
        cache: Optional[CacheBackend[str, Position]] = None,
    ):
        super().__init__(cache)
        self.url = url
        self.session = session or requests.Session()
        self._ask_permission = ask_permission

    def _acquire(self, options: PositionOptions) -> Position:
        if not self._ask_permission():
            raise LocationError(LocationFailure.PERMISSION_DENIED)

        if options.enable_high_accuracy:
            logger.debug("High accuracy requested; IP lookup resolves to city level only")

        logger.info("Resolving position via %s", self.url)
        started = time.monotonic()
        try:
            response = self.session.get(
                self.url,
                params={"fields": "status,message,lat,lon"},
                timeout=options.timeout_seconds,
            )
        except requests.Timeout as e:
            raise LocationError(LocationFailure.TIMEOUT) from e
        except requests.RequestException as e:
            logger.warning("Position lookup failed: %s", e)
            raise LocationError(LocationFailure.POSITION_UNAVAILABLE) from e

        if time.monotonic() - started > options.timeout_seconds:
            logger.warning("Position lookup exceeded %.1fs", options.timeout_seconds)
            raise LocationError(LocationFailure.TIMEOUT)

        if not response.ok:
            logger.warning("Position lookup returned %s", response.status_code)
            raise LocationError(LocationFailure.POSITION_UNAVAILABLE)

        try:
            data = response.json()
            if data.get("status") != "success":
                logger.warning("Position lookup refused: %s", data.get("message"))
                raise LocationError(LocationFailure.POSITION_UNAVAILABLE)
            coords = Coordinates(latitude=data["lat"], longitude=data["lon"])
        except (ValueError, KeyError, AttributeError) as e:
            raise LocationError(LocationFailure.POSITION_UNAVAILABLE) from e

        return Position(coords=coords)
