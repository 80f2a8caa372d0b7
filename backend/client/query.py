"""
Keyed query cache for the dashboard widgets.

Each query is identified by a tuple key, e.g. ("news", "us"). The cache
keeps one QueryState per key, so a slow response for an old key can only
ever update that key's entry; a widget that has moved on to a new key
never sees it.

Policy per query (QueryOptions):
- stale_time: seconds before cached data is refetched in the background;
  None means never stale (only refetch() or invalidate() trigger a fetch)
- retry: automatic retries after a failure; 4xx responses and missing
  provider keys are never retried
- enabled: a disabled query, or one without a key, is not executed
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Hashable, Optional

from .api import ApiError

logger = logging.getLogger(__name__)

QueryKey = tuple[Hashable, ...]
Fetcher = Callable[[], Awaitable[Any]]

# Server error codes that retrying cannot fix
NON_RETRYABLE_CODES = frozenset({"MISSING_API_KEY"})


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class QueryState:
    """Snapshot of one cached query."""

    data: Any = None
    fetched_at: Optional[float] = None
    status: QueryStatus = QueryStatus.IDLE
    error: Optional[str] = None
    failure_count: int = 0
    is_fetching: bool = False
    invalidated: bool = False

    def is_stale(self, stale_time: Optional[float], now: float) -> bool:
        if self.fetched_at is None or self.invalidated:
            return True
        if stale_time is None:
            return False
        return now - self.fetched_at >= stale_time


@dataclass(frozen=True)
class QueryOptions:
    stale_time: Optional[float] = None
    retry: int = 1
    retry_delay: float = 1.0
    enabled: bool = True


def should_retry(error: Exception) -> bool:
    """Transient failures only."""
    if isinstance(error, ApiError):
        return not error.is_client_error and error.code not in NON_RETRYABLE_CODES
    return True


def error_message(error: Exception) -> str:
    if isinstance(error, ApiError):
        return error.message
    return str(error) or error.__class__.__name__


@dataclass
class _Entry:
    state: QueryState = field(default_factory=QueryState)
    task: Optional["asyncio.Task[QueryState]"] = None


class QueryCache:
    """
    Cache of query results keyed by tuple.

    Concurrent fetches of the same key share one in-flight request.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[QueryKey, _Entry] = {}

    def get_state(self, key: Optional[QueryKey]) -> QueryState:
        """Current state for a key; an unknown or missing key is idle."""
        if key is None or key not in self._entries:
            return QueryState()
        return self._entries[key].state

    async def fetch(
        self,
        key: Optional[QueryKey],
        fetcher: Fetcher,
        options: QueryOptions = QueryOptions(),
    ) -> QueryState:
        """
        Resolve a query under its caching policy.

        Fresh data is returned without a request. Stale data is returned
        immediately while a background refetch runs. With nothing cached,
        waits for the fetch.
        """
        if key is None or not options.enabled:
            return QueryState()

        state = self.get_state(key)
        if state.fetched_at is not None:
            if state.is_stale(options.stale_time, self._clock()):
                logger.debug(f"Query {key} is stale, refreshing in background")
                self._start(key, fetcher, options)
            return self.get_state(key)

        return await self._start(key, fetcher, options)

    async def refetch(
        self,
        key: Optional[QueryKey],
        fetcher: Fetcher,
        options: QueryOptions = QueryOptions(),
    ) -> QueryState:
        """Fetch regardless of freshness. Disabled queries stay idle."""
        if key is None or not options.enabled:
            return QueryState()
        return await self._start(key, fetcher, options)

    def invalidate(self, key: QueryKey) -> None:
        """Mark a key stale so the next fetch() goes to the network."""
        entry = self._entries.get(key)
        if entry is not None:
            entry.state = replace(entry.state, invalidated=True)

    async def wait_idle(self) -> None:
        """Wait for every in-flight fetch, including background ones."""
        tasks = [e.task for e in self._entries.values() if e.task is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    def _start(self, key: QueryKey, fetcher: Fetcher, options: QueryOptions) -> "asyncio.Task[QueryState]":
        entry = self._entries.setdefault(key, _Entry())
        if entry.task is not None and not entry.task.done():
            return entry.task

        entry.task = asyncio.ensure_future(self._execute(key, fetcher, options))
        return entry.task

    async def _execute(self, key: QueryKey, fetcher: Fetcher, options: QueryOptions) -> QueryState:
        entry = self._entries[key]
        status = QueryStatus.LOADING if entry.state.fetched_at is None else entry.state.status
        entry.state = replace(entry.state, status=status, is_fetching=True)

        attempt = 0
        while True:
            try:
                data = await fetcher()
            except Exception as e:
                entry.state = replace(entry.state, failure_count=entry.state.failure_count + 1)
                if attempt < options.retry and should_retry(e):
                    attempt += 1
                    logger.debug(f"Query {key} failed ({e}), retry {attempt}/{options.retry}")
                    if options.retry_delay:
                        await asyncio.sleep(options.retry_delay)
                    continue

                logger.warning(f"Query {key} failed: {error_message(e)}")
                entry.state = replace(
                    entry.state,
                    status=QueryStatus.ERROR,
                    error=error_message(e),
                    is_fetching=False,
                )
                return entry.state

            entry.state = QueryState(
                data=data,
                fetched_at=self._clock(),
                status=QueryStatus.SUCCESS,
            )
            logger.debug(f"Query {key} updated")
            return entry.state
