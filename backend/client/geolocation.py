"""
Device location acquisition.

A GeolocationWatcher starts a position watch on a PositionSource, stops it
at the first fix, and translates source errors into user-facing messages.
acquire() wraps that into a single awaitable.

Sources are pluggable: FixedPositionSource reports configured coordinates
(the terminal client has no GPS), UnavailablePositionSource behaves like a
platform without geolocation.
"""

import asyncio
import itertools
import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class PositionErrorCode(IntEnum):
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


UNSUPPORTED_MESSAGE = "Geolocation is not supported by your browser."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while fetching your location."

ERROR_MESSAGES = {
    PositionErrorCode.PERMISSION_DENIED: (
        "Location access was denied. Please enable location services in your browser settings."
    ),
    PositionErrorCode.POSITION_UNAVAILABLE: (
        "Location information is unavailable. Please check your network connection."
    ),
    PositionErrorCode.TIMEOUT: "The request to get your location timed out. Please try again.",
}


def describe_error(code: int) -> str:
    """Friendly message for a position error code."""
    try:
        return ERROR_MESSAGES[PositionErrorCode(code)]
    except ValueError:
        return UNKNOWN_ERROR_MESSAGE


@dataclass(frozen=True)
class Location:
    lat: float
    lon: float


@dataclass(frozen=True)
class PositionError:
    """Error reported by a position source."""

    code: int
    message: str = ""


@dataclass(frozen=True)
class WatchOptions:
    enable_high_accuracy: bool = True
    timeout: float = 10.0
    maximum_age: float = 0


class GeolocationError(Exception):
    """Location could not be determined. message is user-facing."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code


SuccessCallback = Callable[[Location], None]
ErrorCallback = Callable[[PositionError], None]


@runtime_checkable
class PositionSource(Protocol):
    """Something that can report the device position."""

    def is_supported(self) -> bool:
        ...

    def watch_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: WatchOptions,
    ) -> int:
        """Start watching. Callbacks may fire before this returns."""
        ...

    def clear_watch(self, watch_id: int) -> None:
        ...


class WatchStatus(str, Enum):
    IDLE = "idle"
    WATCHING = "watching"
    RESOLVED = "resolved"
    ERRORED = "errored"


class GeolocationWatcher:
    """
    One position watch, from start to first fix.

    The watch is cleared as soon as a position arrives and on dispose().
    Errors leave the watch running so a later fix can still resolve it.
    """

    def __init__(self, source: PositionSource, options: Optional[WatchOptions] = None):
        self._source = source
        self.options = options or WatchOptions()
        self.status = WatchStatus.IDLE
        self.location: Optional[Location] = None
        self.error: Optional[str] = None
        self._watch_id: Optional[int] = None
        self._on_success: Optional[Callable[[Location], None]] = None
        self._on_error: Optional[Callable[[str], None]] = None

    @property
    def is_watching(self) -> bool:
        return self._watch_id is not None

    def start(
        self,
        on_success: Callable[[Location], None],
        on_error: Callable[[str], None],
    ) -> None:
        if self.status != WatchStatus.IDLE:
            return
        self._on_success = on_success
        self._on_error = on_error

        if not self._source.is_supported():
            self._fail(UNSUPPORTED_MESSAGE)
            return

        self.status = WatchStatus.WATCHING
        watch_id = self._source.watch_position(
            self._handle_position, self._handle_error, self.options
        )
        if self.status == WatchStatus.RESOLVED:
            # Fixed before watch_position returned
            self._source.clear_watch(watch_id)
        else:
            self._watch_id = watch_id

    def dispose(self) -> None:
        """Stop watching, whatever the state."""
        if self._watch_id is not None:
            self._source.clear_watch(self._watch_id)
            self._watch_id = None

    def _handle_position(self, location: Location) -> None:
        if self.status == WatchStatus.RESOLVED:
            return
        self.dispose()
        self.status = WatchStatus.RESOLVED
        self.location = location
        self.error = None
        logger.debug(f"Location resolved: {location.lat}, {location.lon}")
        self._on_success(location)

    def _handle_error(self, error: PositionError) -> None:
        if self.status == WatchStatus.RESOLVED:
            return
        self._fail(describe_error(error.code))

    def _fail(self, message: str) -> None:
        self.status = WatchStatus.ERRORED
        self.error = message
        logger.info(f"Location unavailable: {message}")
        self._on_error(message)


async def acquire(source: PositionSource, options: Optional[WatchOptions] = None) -> Location:
    """
    Wait for a single position fix.

    Raises:
        GeolocationError: If the source is unsupported, reports an error, or
            gives nothing within the watch timeout
    """
    options = options or WatchOptions()
    future: asyncio.Future = asyncio.get_running_loop().create_future()

    def resolve(location: Location) -> None:
        if not future.done():
            future.set_result(location)

    def reject(message: str) -> None:
        if not future.done():
            future.set_exception(GeolocationError(message))

    watcher = GeolocationWatcher(source, options)
    watcher.start(resolve, reject)
    try:
        return await asyncio.wait_for(future, timeout=options.timeout)
    except asyncio.TimeoutError:
        raise GeolocationError(
            describe_error(PositionErrorCode.TIMEOUT), code=PositionErrorCode.TIMEOUT
        )
    finally:
        watcher.dispose()


class FixedPositionSource:
    """Reports the same coordinates on every watch."""

    def __init__(self, lat: float, lon: float):
        self._location = Location(lat=lat, lon=lon)
        self._ids = itertools.count(1)
        self.active: set[int] = set()

    def is_supported(self) -> bool:
        return True

    def watch_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: WatchOptions,
    ) -> int:
        watch_id = next(self._ids)
        self.active.add(watch_id)
        on_success(self._location)
        return watch_id

    def clear_watch(self, watch_id: int) -> None:
        self.active.discard(watch_id)


class UnavailablePositionSource:
    """A platform without geolocation."""

    def is_supported(self) -> bool:
        return False

    def watch_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: WatchOptions,
    ) -> int:
        raise RuntimeError("Geolocation is not supported")

    def clear_watch(self, watch_id: int) -> None:
        pass
