"""Base controller with concurrent source-fetch patterns.

This module provides the foundation for fanning out to several independent
data sources, awaiting all of them, and tracking per-source fetch state.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from bitte_fleet.constants.enums import FetchState
from bitte_fleet.controllers.cluster.errors import SourceFetchError

logger = logging.getLogger(__name__)


@dataclass
class SourceResult:
    """Result wrapper for a single source fetch."""

    success: bool
    data: Any | None = None
    error: BaseException | None = None
    duration_ms: float = 0.0


@dataclass
class FetchStatus:
    """Status tracking for a single data source fetch operation."""

    source_name: str
    state: FetchState = FetchState.LOADING
    error_message: str | None = None
    last_updated: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "source_name": self.source_name,
            "state": self.state.value,
            "error_message": self.error_message,
            "last_updated": self.last_updated.isoformat()
            if self.last_updated
            else None,
        }


class BaseController(ABC):
    """Base controller class with fan-out/fan-in fetch helpers.

    Subclasses should implement ``fetch_all`` to provide specific data
    fetching functionality.
    """

    def __init__(self, source_timeout: float) -> None:
        self._source_timeout = source_timeout
        self._fetch_states: dict[str, FetchStatus] = {}

    def _update_fetch_state(
        self,
        source: str,
        state: FetchState,
        error_message: str | None = None,
    ) -> None:
        """Update the fetch state for a data source."""
        if source not in self._fetch_states:
            self._fetch_states[source] = FetchStatus(source_name=source)
        self._fetch_states[source].state = state
        self._fetch_states[source].error_message = error_message
        if state == FetchState.SUCCESS:
            self._fetch_states[source].last_updated = datetime.now(timezone.utc)

    def get_fetch_state(self, source: str) -> FetchStatus | None:
        """Get the fetch state for a specific data source."""
        return self._fetch_states.get(source)

    def get_all_fetch_states(self) -> dict[str, FetchStatus]:
        """Get all fetch states."""
        return self._fetch_states.copy()

    def get_error_sources(self) -> list[str]:
        """Get list of data sources with errors."""
        return [
            source
            for source, status in self._fetch_states.items()
            if status.state == FetchState.ERROR
        ]

    async def _run_source(self, source: str, fetch: Awaitable[Any]) -> SourceResult:
        """Await one source under the fetch deadline; never raises."""
        self._update_fetch_state(source, FetchState.LOADING)
        start = time.monotonic()
        try:
            data = await asyncio.wait_for(fetch, timeout=self._source_timeout)
        except asyncio.TimeoutError:
            error: BaseException = SourceFetchError(
                source, f"timed out after {self._source_timeout:g}s"
            )
        except Exception as exc:
            error = exc
        else:
            duration_ms = (time.monotonic() - start) * 1000
            self._update_fetch_state(source, FetchState.SUCCESS)
            logger.debug(f"Fetched {source} in {duration_ms:.0f}ms")
            return SourceResult(success=True, data=data, duration_ms=duration_ms)

        duration_ms = (time.monotonic() - start) * 1000
        self._update_fetch_state(source, FetchState.ERROR, str(error))
        logger.debug(f"Fetching {source} failed after {duration_ms:.0f}ms: {error}")
        return SourceResult(success=False, error=error, duration_ms=duration_ms)

    async def _gather_sources(
        self, fetches: Mapping[str, Awaitable[Any]]
    ) -> dict[str, SourceResult]:
        """Run all fetches concurrently and wait for every one to finish.

        Runs independent fetches in parallel via asyncio.gather() so total
        latency is max-of-all rather than sum-of-all. Failures are collected
        per source, never raised here.
        """
        names = list(fetches)
        results = await asyncio.gather(
            *(self._run_source(name, fetches[name]) for name in names)
        )
        return dict(zip(names, results))

    @abstractmethod
    async def fetch_all(self) -> dict[str, Any]:
        """Fetch all data from the sources.

        Returns:
            Dictionary containing all fetched data
        """
        ...
