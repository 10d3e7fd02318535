"""
In-memory caches in front of the upstream launcher metadata host.

This module provides:
- CatalogCache: the single catalog document, refreshed lazily once its
  freshness window has passed
- ReleaseDetailCache: release detail documents by release id, kept for the
  lifetime of the process (a published release never changes upstream)
- SingleFlight: coalesces concurrent loads of the same key so that at most one
  upstream fetch per key is in flight

Both caches take their fetch function (and the catalog cache its clock) as
constructor arguments; nothing here talks to the network directly.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, Hashable, Optional, TypeVar

from app.domain.errors import ReleaseNotFoundError
from app.domain.models import Catalog, Release, ReleaseDetail

logger = logging.getLogger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]
CatalogFetcher = Callable[[], Awaitable[Catalog]]
ReleaseDetailFetcher = Callable[[Release], Awaitable[ReleaseDetail]]


class SingleFlight:
    """
    Runs at most one loader per key at a time.

    Callers arriving while a load is pending await the same task. The entry is
    dropped as soon as the loader finishes, so failures are not remembered.
    Waiters are shielded: cancelling one request does not cancel the shared
    load for the others.
    """

    def __init__(self):
        self._pending: Dict[Hashable, asyncio.Future] = {}

    def in_flight(self, key: Hashable) -> bool:
        return key in self._pending

    async def run(self, key: Hashable, loader: Callable[[], Awaitable[T]]) -> T:
        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run_and_release(key, loader))
            self._pending[key] = task
        else:
            logger.debug(f"Joining in-flight load for {key!r}")
        return await asyncio.shield(task)

    async def _run_and_release(self, key: Hashable, loader: Callable[[], Awaitable[T]]) -> T:
        try:
            return await loader()
        finally:
            self._pending.pop(key, None)


class CatalogCache:
    """
    Holds at most one catalog. `get()` refreshes it on first use and after the
    freshness window; a failed refresh propagates and the stale value is not
    served.
    """

    _KEY = "catalog"

    def __init__(self, fetch: CatalogFetcher, ttl_seconds: float, clock: Clock = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._fetch = fetch
        self._ttl = ttl_seconds
        self._clock = clock
        self._catalog: Optional[Catalog] = None
        self._expires_at: Optional[float] = None
        self._flight = SingleFlight()

    def is_fresh(self) -> bool:
        return (
            self._catalog is not None
            and self._expires_at is not None
            and self._clock() < self._expires_at
        )

    async def get(self) -> Catalog:
        if self.is_fresh():
            return self._catalog
        return await self._flight.run(self._KEY, self._refresh)

    async def _refresh(self) -> Catalog:
        catalog = await self._fetch()
        self._catalog = catalog
        self._expires_at = self._clock() + self._ttl
        logger.info(
            f"Catalog refreshed: {len(catalog.versions)} releases, "
            f"latest release {catalog.latest.release}, latest snapshot {catalog.latest.snapshot}"
        )
        return catalog

    def invalidate(self) -> None:
        self._expires_at = None

    def status(self) -> dict:
        remaining = None
        if self.is_fresh():
            remaining = round(self._expires_at - self._clock(), 3)
        return {
            "cached": self._catalog is not None,
            "fresh": self.is_fresh(),
            "expires_in_seconds": remaining,
        }


class ReleaseDetailCache:
    """
    Release detail documents by release id. Entries are never evicted.
    """

    def __init__(self, catalog_cache: CatalogCache, fetch: ReleaseDetailFetcher):
        self._catalog_cache = catalog_cache
        self._fetch = fetch
        self._details: Dict[str, ReleaseDetail] = {}
        self._flight = SingleFlight()

    def __len__(self) -> int:
        return len(self._details)

    def peek(self, release_id: str) -> Optional[ReleaseDetail]:
        return self._details.get(release_id)

    async def get_or_fetch(self, release_id: str) -> ReleaseDetail:
        detail = self._details.get(release_id)
        if detail is not None:
            logger.debug(f"Release detail cache hit for {release_id}")
            return detail
        return await self._flight.run(release_id, lambda: self._load(release_id))

    async def _load(self, release_id: str) -> ReleaseDetail:
        catalog = await self._catalog_cache.get()
        release = catalog.find_release(release_id)
        if release is None:
            raise ReleaseNotFoundError(release_id)

        detail = await self._fetch(release)
        self._details[release_id] = detail
        return detail
