"""Time-bounded cache of per-store menu snapshots.

A snapshot is served only while `now - updated_at < ttl` (15 minutes by
default). Neither read nor write failures propagate: a broken cache store
degrades to "always miss" and "never stored".
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from spread_api.services.domain import MenuItem
from spread_api.stores.cache_store import CacheStore

logger = logging.getLogger("uvicorn.error")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MenuCache:
    """Read/write access to cached menus with a freshness window."""

    def __init__(
        self,
        store: CacheStore,
        ttl_seconds: int = 15 * 60,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    async def get(self, store_id: str) -> list[MenuItem] | None:
        """Fresh cached items for `store_id`, or None on miss/stale/error."""
        try:
            cached = await self.store.get_menu(store_id)
        except Exception as e:
            logger.warning(f"Menu cache read failed for store={store_id}: {e}")
            return None

        if cached is None:
            return None

        updated_at = cached.updated_at
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=timezone.utc)

        age = self._clock() - updated_at
        if age >= self.ttl:
            logger.info(f"Menu cache STALE for store={store_id} (age={int(age.total_seconds())}s)")
            return None

        logger.info(f"Menu cache HIT for store={store_id} ({len(cached.items)} items)")
        return list(cached.items)

    async def put(self, store_id: str, items: list[MenuItem]) -> bool:
        """Upsert `items` stamped with the current time.

        Returns False (after logging) instead of raising when the write fails.
        """
        try:
            await self.store.upsert_menu(store_id, list(items), self._clock())
        except Exception as e:
            logger.warning(f"Menu cache write failed for store={store_id}: {e}")
            return False
        return True
