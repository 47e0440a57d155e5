#!/usr/bin/env python3
"""Warm the store and menu caches for a list of points.

Runs discovery (store_locations, Overpass on a cold area) around each point
and pre-fetches the menus of the nearest stores, so the first user request
for that area is answered from cache.

Run (local / cron):
  WARM_POINTS="30.2672,-97.7431;29.7604,-95.3698" python -m scripts.warm_cache

Optional env vars:
  WARM_RADIUS_MI=30
  WARM_STORES=10
  WARM_CREATE_TABLES=1   (development only; production uses alembic)
"""

import asyncio
import logging
import os
import sys

# Ensure imports work when executed as a script/module
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv  # noqa: E402

from spread_api.services.compare import fetch_menus, find_nearby_stores  # noqa: E402
from spread_api.services.context import build_context  # noqa: E402
from spread_api.services.domain import Point  # noqa: E402
from spread_api.services.menu_fetcher import MenuFetcher  # noqa: E402
from spread_api.settings import get_settings  # noqa: E402
from spread_api.stores.postgres import close_db, create_tables, init_db, ping_db  # noqa: E402
from spread_api.stores.redis import close_redis, init_redis  # noqa: E402

load_dotenv()

logger = logging.getLogger("uvicorn.error")


def _parse_points(raw: str) -> list[Point]:
    """'lat,lon;lat,lon' -> points. Malformed pairs are skipped."""
    points: list[Point] = []
    for pair in raw.split(";"):
        parts = [p.strip() for p in pair.split(",")]
        if len(parts) != 2:
            continue
        try:
            points.append(Point(float(parts[0]), float(parts[1])))
        except ValueError:
            continue
    return points


async def _connect_redis() -> bool:
    """Connect the Overpass response cache; False (logged) when Redis is down."""
    try:
        await init_redis()
    except Exception:
        # Without Redis every cold area costs a fresh Overpass query.
        logger.exception("Redis init failed; warming without the Overpass cache")
        return False
    return True


async def main() -> None:
    settings = get_settings()
    points = _parse_points(os.getenv("WARM_POINTS", ""))
    if not points:
        print({"ok": False, "error": "WARM_POINTS is empty or malformed"})
        return

    radius_mi = float(os.getenv("WARM_RADIUS_MI", str(settings.default_radius_mi)))
    store_limit = int(os.getenv("WARM_STORES", "10"))

    # Same shared connections as the API lifespan, but for a one-off run
    await init_db()
    await ping_db()
    if os.getenv("WARM_CREATE_TABLES") == "1":
        await create_tables()
    redis_ok = await _connect_redis()

    ctx = build_context(settings)
    fetcher = MenuFetcher(ctx)
    try:
        summary: list[dict] = []
        for point in points:
            nearby = await find_nearby_stores(ctx, point, radius_mi, store_limit)
            menus = await fetch_menus(fetcher, [n.store for n in nearby])
            summary.append(
                {
                    "lat": point.latitude,
                    "lon": point.longitude,
                    "stores": len(nearby),
                    "menus_with_items": sum(1 for m in menus if m),
                }
            )

        print({"ok": True, "redis": redis_ok, "radius_mi": radius_mi, "points": summary})
    finally:
        await ctx.http.aclose()
        await close_redis()
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
