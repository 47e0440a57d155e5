"""Store discovery: cached store_locations first, Overpass as fallback.

Flow:
1. Bounding box around the center (coarse prefilter)
2. Range query on store_locations -> if anything is cached, return it as-is
3. Otherwise query Overpass once, then for every element with a website:
   fetch the page, extract the chain store code, build a StoreLocation and
   upsert it

Known limitation: step 2 skips live discovery whenever the cache has at least
one store in the box, even if the cache is incomplete for a larger radius.
This keeps Overpass/website traffic low; new stores show up only once the
area has no cached rows.
"""

import asyncio
import logging

import httpx

from spread_api.services.context import ServiceContext
from spread_api.services.domain import Point, StoreLocation
from spread_api.services.geo import bounding_box
from spread_api.services.menu_parsing import extract_store_id
from spread_api.services.overpass_client import OverpassClient, PointOfInterest

logger = logging.getLogger("uvicorn.error")


def build_address(tags: dict[str, str]) -> str:
    """Street address from OSM addr:* tags ("" if missing)."""
    return f"{tags.get('addr:housenumber', '')} {tags.get('addr:street', '')}".strip()


class StoreDirectory:
    """Resolves chain stores near a point."""

    def __init__(self, ctx: ServiceContext, poi_client: OverpassClient | None = None):
        self.ctx = ctx
        self.poi_client = poi_client or OverpassClient(ctx)

    async def find_stores(self, center: Point, radius_miles: float) -> list[StoreLocation]:
        """Stores in (roughly) `radius_miles` of `center`. Best-effort, never raises.

        Cached rows are returned unfiltered by exact distance; callers apply
        `distance_miles` themselves.
        """
        box = bounding_box(center, radius_miles)
        try:
            cached = await self.ctx.store.select_stores_in_box(box)
        except Exception as e:
            logger.warning(f"Store cache lookup failed, falling back to live discovery: {e}")
            cached = []

        if cached:
            logger.info(f"Store cache HIT: {len(cached)} stores near {center.latitude},{center.longitude}")
            return cached

        logger.info(f"Store cache MISS near {center.latitude},{center.longitude}; running live discovery")
        return await self.discover(center, radius_miles)

    async def discover(self, center: Point, radius_miles: float) -> list[StoreLocation]:
        """Live discovery via Overpass + per-website store code resolution."""
        pois = [p for p in await self.poi_client.search(center, radius_miles) if p.website]
        if not pois:
            return []

        sem = asyncio.Semaphore(self.ctx.settings.discovery_max_concurrency)

        async def _run(poi: PointOfInterest) -> StoreLocation | None:
            async with sem:
                return await self.resolve(poi)

        resolved = await asyncio.gather(*(_run(p) for p in pois), return_exceptions=True)

        stores: list[StoreLocation] = []
        seen: set[str] = set()
        for poi, store in zip(pois, resolved):
            if isinstance(store, Exception):
                logger.warning(f"Store resolution failed for osm_id={poi.osm_id}: {store}")
                continue
            if store is None or store.store_id in seen:
                continue
            seen.add(store.store_id)
            stores.append(store)

        logger.info(f"Live discovery resolved {len(stores)}/{len(pois)} stores")
        return stores

    async def resolve(self, poi: PointOfInterest) -> StoreLocation | None:
        """StoreLocation for one POI, persisted; None if its page yields no store code."""
        website = poi.website
        if not website:
            return None

        try:
            response = await self.ctx.http.get(website)
            html = response.text
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Store page fetch failed for osm_id={poi.osm_id} ({website}): {e}")
            return None

        store_id = extract_store_id(html)
        if not store_id:
            logger.info(f"No store code found on {website}")
            return None

        store = StoreLocation(
            store_id=store_id,
            name=poi.tags.get("name") or self.ctx.settings.chain_name,
            address=build_address(poi.tags),
            latitude=poi.latitude,
            longitude=poi.longitude,
        )

        try:
            await self.ctx.store.upsert_store(store)
        except Exception as e:
            logger.warning(f"Store cache write failed for store={store_id}: {e}")

        return store
