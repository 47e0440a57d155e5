"""Per-store menu retrieval.

Flow:
1. MenuCache (fresh within the TTL) -> return verbatim, no network
2. Product API: GET {menu_api_url}/{store_id}
3. Menu page scrape: GET {menu_page_url}?store={store_id}, read __NEXT_DATA__
4. Write whatever we ended up with back to MenuCache (failure ignored)

`menu_for` never raises: a store without a reachable menu yields [].
"""

import logging
from collections.abc import Awaitable, Callable

import httpx

from spread_api.services.context import ServiceContext
from spread_api.services.domain import MenuItem
from spread_api.services.menu_cache import MenuCache
from spread_api.services.menu_parsing import parse_menu_page, parse_product_api_menu

logger = logging.getLogger("uvicorn.error")

# A tier returns items, or None when it produced nothing usable.
MenuTier = Callable[[str], Awaitable[list[MenuItem] | None]]


class MenuFetcher:
    """Resolves a store's current menu through ordered fallback tiers."""

    def __init__(self, ctx: ServiceContext, cache: MenuCache | None = None):
        self.ctx = ctx
        self.cache = cache or MenuCache(ctx.store, ttl_seconds=ctx.settings.menu_cache_ttl_seconds)
        self.tiers: list[tuple[str, MenuTier]] = [
            ("product_api", self.from_product_api),
            ("menu_page", self.from_menu_page),
        ]

    async def menu_for(self, store_id: str) -> list[MenuItem]:
        """Current menu for `store_id` (possibly empty)."""
        cached = await self.cache.get(store_id)
        if cached is not None:
            return cached

        items: list[MenuItem] = []
        for tier_name, tier in self.tiers:
            result = await tier(store_id)
            if result:
                logger.info(f"Menu for store={store_id} resolved via {tier_name} ({len(result)} items)")
                items = result
                break
            logger.info(f"Menu tier {tier_name} empty for store={store_id}")

        if not items:
            logger.warning(f"No menu available for store={store_id}")

        await self.cache.put(store_id, items)
        return items

    async def from_product_api(self, store_id: str) -> list[MenuItem] | None:
        """Structured product API; any transport or JSON error counts as empty."""
        url = f"{self.ctx.settings.menu_api_url.rstrip('/')}/{store_id}"
        try:
            response = await self.ctx.http.get(url)
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Product API failed for store={store_id}: {e}")
            return None

        return parse_product_api_menu(data) or None

    async def from_menu_page(self, store_id: str) -> list[MenuItem] | None:
        """Scrape the embedded page data of a public menu category page."""
        try:
            response = await self.ctx.http.get(
                self.ctx.settings.menu_page_url,
                params={"store": store_id},
            )
            html = response.text
        except httpx.HTTPError as e:
            logger.warning(f"Menu page fetch failed for store={store_id}: {e}")
            return None

        return parse_menu_page(html) or None
