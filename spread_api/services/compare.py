"""Compare pipeline: discovery -> nearest stores -> menus -> spread ranking."""

import asyncio
import logging
from dataclasses import dataclass, field

from spread_api.services.context import ServiceContext
from spread_api.services.domain import MenuItem, Point, RankedItem, StoreLocation
from spread_api.services.geo import distance_miles
from spread_api.services.menu_fetcher import MenuFetcher
from spread_api.services.price_spread import rank
from spread_api.services.store_directory import StoreDirectory

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class NearbyStore:
    store: StoreLocation
    distance_mi: float


@dataclass
class CompareResult:
    stores: list[NearbyStore] = field(default_factory=list)
    items: list[RankedItem] = field(default_factory=list)


async def find_nearby_stores(
    ctx: ServiceContext,
    center: Point,
    radius_mi: float,
    limit: int,
    directory: StoreDirectory | None = None,
) -> list[NearbyStore]:
    """Stores within `radius_mi` of `center`, nearest first, at most `limit`."""
    directory = directory or StoreDirectory(ctx)
    candidates = await directory.find_stores(center, radius_mi)

    nearby = [NearbyStore(store=s, distance_mi=distance_miles(center, s.point)) for s in candidates]
    nearby = [n for n in nearby if n.distance_mi <= radius_mi]
    nearby.sort(key=lambda n: n.distance_mi)
    return nearby[:limit]


async def fetch_menus(fetcher: MenuFetcher, stores: list[StoreLocation]) -> list[list[MenuItem]]:
    """Menus for all stores, fetched concurrently, in store order."""
    return list(await asyncio.gather(*(fetcher.menu_for(s.store_id) for s in stores)))


async def compare_prices(
    ctx: ServiceContext,
    center: Point,
    radius_mi: float,
    store_count: int,
    item_count: int,
    *,
    directory: StoreDirectory | None = None,
    fetcher: MenuFetcher | None = None,
) -> CompareResult:
    """Rank menu items by price spread across the nearest stores.

    Args:
        ctx: Service dependencies.
        center: Search center.
        radius_mi: Search radius in miles.
        store_count: Number of nearest stores to compare.
        item_count: Number of ranked items to return.

    Returns:
        CompareResult with the selected stores (nearest first) and ranked items.
    """
    nearby = await find_nearby_stores(ctx, center, radius_mi, store_count, directory=directory)
    if not nearby:
        logger.info(f"No stores within {radius_mi}mi of {center.latitude},{center.longitude}")
        return CompareResult()

    fetcher = fetcher or MenuFetcher(ctx)
    stores = [n.store for n in nearby]
    menus = await fetch_menus(fetcher, stores)
    items = rank(stores, menus, item_count)

    logger.info(f"Compared {len(stores)} stores: {len(items)} items with a price spread")
    return CompareResult(stores=nearby, items=items)
