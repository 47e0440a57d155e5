"""Explicit dependencies shared by the services.

The FastAPI lifespan builds one ServiceContext per process; tests build their
own with an in-memory cache store and an `httpx.MockTransport` client.
"""

from dataclasses import dataclass

import httpx

from spread_api.settings import Settings, get_settings
from spread_api.stores.cache_store import CacheStore, PostgresCacheStore


@dataclass
class ServiceContext:
    store: CacheStore
    http: httpx.AsyncClient
    settings: Settings


def build_http_client(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """HTTP client used for every outbound call (Overpass, store pages, menu API)."""
    return httpx.AsyncClient(
        timeout=settings.http_timeout_seconds,
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
        transport=transport,
    )


def build_context(settings: Settings | None = None) -> ServiceContext:
    """Production context: Postgres cache store + shared HTTP client."""
    settings = settings or get_settings()
    return ServiceContext(
        store=PostgresCacheStore(),
        http=build_http_client(settings),
        settings=settings,
    )
