"""Shared test doubles: in-memory cache store and mock-transport contexts."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from spread_api.services.context import ServiceContext, build_http_client
from spread_api.services.domain import BoundingBox, CachedMenu, MenuItem, StoreLocation
from spread_api.settings import Settings

Handler = Callable[[httpx.Request], httpx.Response]


class FakeCacheStore:
    """In-memory CacheStore with call recording and injectable failures."""

    def __init__(self, stores: list[StoreLocation] | None = None):
        self.stores: dict[str, StoreLocation] = {s.store_id: s for s in stores or []}
        self.menus: dict[str, CachedMenu] = {}
        self.box_queries: list[BoundingBox] = []
        self.menu_writes: list[tuple[str, list[MenuItem], datetime]] = []
        self.fail_reads = False
        self.fail_writes = False

    def add_menu(self, store_id: str, items: list[MenuItem], age: timedelta) -> None:
        self.menus[store_id] = CachedMenu(
            store_id=store_id,
            items=items,
            updated_at=datetime.now(timezone.utc) - age,
        )

    async def select_stores_in_box(self, box: BoundingBox) -> list[StoreLocation]:
        self.box_queries.append(box)
        if self.fail_reads:
            raise RuntimeError("cache store unavailable")
        return [
            s
            for s in self.stores.values()
            if box.min_latitude <= s.latitude <= box.max_latitude
            and box.min_longitude <= s.longitude <= box.max_longitude
        ]

    async def upsert_store(self, store: StoreLocation) -> None:
        if self.fail_writes:
            raise RuntimeError("write refused")
        self.stores[store.store_id] = store

    async def get_menu(self, store_id: str) -> CachedMenu | None:
        if self.fail_reads:
            raise RuntimeError("cache store unavailable")
        return self.menus.get(store_id)

    async def upsert_menu(self, store_id: str, items: list[MenuItem], updated_at: datetime) -> None:
        if self.fail_writes:
            raise RuntimeError("write refused")
        self.menu_writes.append((store_id, items, updated_at))
        self.menus[store_id] = CachedMenu(store_id=store_id, items=items, updated_at=updated_at)


class RecordingHandler:
    """MockTransport handler that records every request before delegating."""

    def __init__(self, handler: Handler):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def hosts(self) -> list[str]:
        return [r.url.host for r in self.requests]

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("network disabled in tests", request=request)


@pytest.fixture
def test_settings() -> Settings:
    # No Redis in tests: disable the Overpass response cache.
    return Settings(overpass_cache_ttl=0, chain_name="Taco Bell")


@pytest.fixture
async def make_ctx(test_settings: Settings):
    """Factory for ServiceContext objects wired to a fake store and mock HTTP."""
    clients: list[httpx.AsyncClient] = []

    def _make(handler: Handler = unreachable, store: FakeCacheStore | None = None) -> ServiceContext:
        http = build_http_client(test_settings, transport=httpx.MockTransport(handler))
        clients.append(http)
        return ServiceContext(store=store or FakeCacheStore(), http=http, settings=test_settings)

    yield _make

    for client in clients:
        await client.aclose()
