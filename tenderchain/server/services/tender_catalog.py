"""
Tender Catalog Service.

Serves the tender listing from an in-process cache in front of the tender
registry contract.

Refresh procedure
-----------------

1. A cache entry younger than the TTL is returned as is.
2. Otherwise the tender count is read (bounded by ``count_timeout``).
3. An empty registry, or one whose first id reverts with ``InvalidTenderId``,
   is cached as an empty listing.
4. Ids ``1..count`` are read in batches: concurrently within a batch, one
   batch after another, the whole read bounded by ``fetch_timeout``.
5. The result replaces the cache entry.

If any step fails and an entry exists, even an expired one, its data is served
with a warning. Only a cold cache turns a failure into an error.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional

from tenderchain.chain import InvalidTenderIdError, TenderDetails, TenderRegistryReader
from tenderchain.core import monitoring
from tenderchain.core.logging_config import get_logger

logger = get_logger(__name__)

STALE_WARNING = "Using cached data due to blockchain timeout"


class TenderCatalogUnavailableError(Exception):
    """The listing could not be refreshed and there is no cached copy to fall back to."""


@dataclass(frozen=True)
class TenderRecord:
    """A tender as it appears in the listing: the on-chain details plus its id."""

    id: int
    details: TenderDetails


@dataclass(frozen=True)
class CatalogResult:
    tenders: list[TenderRecord]
    cached: bool
    warning: Optional[str] = None


@dataclass
class _CacheEntry:
    data: list[TenderRecord]
    timestamp: float


class TenderCatalog:
    """
    Cache-aside view of every tender in the registry.

    Attributes:
        ttl_seconds: Age after which the cached listing is refreshed.
        batch_size: Number of tenders read concurrently.
        count_timeout: Seconds allowed for reading the tender count.
        fetch_timeout: Seconds allowed for reading all tender records.
    """

    def __init__(
        self,
        registry: TenderRegistryReader,
        *,
        ttl_seconds: float = 300.0,
        batch_size: int = 10,
        count_timeout: float = 10.0,
        fetch_timeout: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self._registry = registry
        self.ttl_seconds = ttl_seconds
        self.batch_size = batch_size
        self.count_timeout = count_timeout
        self.fetch_timeout = fetch_timeout
        self._clock = clock
        self._cache: Optional[_CacheEntry] = None
        self._lock = asyncio.Lock()

    def _fresh_entry(self) -> Optional[_CacheEntry]:
        entry = self._cache
        if entry is not None and self._clock() - entry.timestamp < self.ttl_seconds:
            return entry
        return None

    def _store(self, tenders: list[TenderRecord]) -> None:
        self._cache = _CacheEntry(data=tenders, timestamp=self._clock())

    async def list_tenders(self) -> CatalogResult:
        """
        Return every tender, refreshing the cache when it has expired.

        Raises:
            TenderCatalogUnavailableError: The refresh failed and nothing is cached.
        """
        entry = self._fresh_entry()
        if entry is not None:
            return CatalogResult(tenders=entry.data, cached=True)

        async with self._lock:
            # Another request may have refreshed while we waited.
            entry = self._fresh_entry()
            if entry is not None:
                return CatalogResult(tenders=entry.data, cached=True)

            try:
                tenders = await self._refresh()
            except Exception as e:
                logger.error(f"Error fetching tenders: {e}", exc_info=True)
                stale = self._cache
                if stale is not None:
                    monitoring.log_chain_fallback(reason=str(e), cached_count=len(stale.data))
                    return CatalogResult(tenders=stale.data, cached=True, warning=STALE_WARNING)
                raise TenderCatalogUnavailableError(str(e) or type(e).__name__) from e

            return CatalogResult(tenders=tenders, cached=False)

    def invalidate(self) -> None:
        """Drop the cached listing so the next request reads the chain."""
        self._cache = None
        logger.info("Tender cache invalidated")

    async def _refresh(self) -> list[TenderRecord]:
        try:
            total = await asyncio.wait_for(self._registry.get_tender_count(), timeout=self.count_timeout)
        except asyncio.TimeoutError as e:
            raise TimeoutError("Timeout reading tender count") from e

        if total <= 0:
            self._store([])
            return []

        try:
            await self._registry.get_tender_details(1)
        except InvalidTenderIdError:
            logger.info(f"Registry reports {total} tenders but tender 1 is not readable; listing is empty")
            self._store([])
            return []

        try:
            details = await asyncio.wait_for(self._fetch_all(total), timeout=self.fetch_timeout)
        except asyncio.TimeoutError as e:
            raise TimeoutError("Timeout fetching tenders") from e

        tenders = [TenderRecord(id=index + 1, details=d) for index, d in enumerate(details)]
        self._store(tenders)
        logger.debug(f"Tender cache refreshed with {len(tenders)} tenders")
        return tenders

    async def _fetch_all(self, total: int) -> list[TenderDetails]:
        results: list[TenderDetails] = []
        for start in range(1, total + 1, self.batch_size):
            ids = range(start, min(start + self.batch_size, total + 1))
            batch = await asyncio.gather(*(self._registry.get_tender_details(i) for i in ids))
            results.extend(batch)
        return results
