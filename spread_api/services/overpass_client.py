"""Overpass (OpenStreetMap) client for live store discovery.

Cost control:
- Only called when the store_locations cache has nothing for the area
- Raw responses are cached in Redis (Settings.overpass_cache_ttl)
- Redis is optional; cache errors are logged and ignored
"""

import hashlib
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from spread_api.services.context import ServiceContext
from spread_api.services.domain import Point
from spread_api.services.geo import miles_to_meters
from spread_api.stores.redis import get_overpass_cache, set_overpass_cache

logger = logging.getLogger("uvicorn.error")


@dataclass
class PointOfInterest:
    """One OSM element returned by Overpass."""

    osm_id: int
    latitude: float
    longitude: float
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def website(self) -> str | None:
        return self.tags.get("website") or None


def build_query(chain_name: str, center: Point, radius_miles: float) -> str:
    """Overpass QL for fast_food nodes named `chain_name` around `center`."""
    name = chain_name.replace('"', "")
    meters = miles_to_meters(radius_miles)
    return (
        f'[out:json];node["amenity"="fast_food"]["name"="{name}"]'
        f"(around:{meters},{center.latitude},{center.longitude});out;"
    )


def parse_elements(data: Any) -> list[PointOfInterest]:
    """Elements with usable coordinates; ways/relations fall back to `center`."""
    if not isinstance(data, dict):
        return []
    elements = data.get("elements")
    if not isinstance(elements, list):
        return []

    pois: list[PointOfInterest] = []
    for el in elements:
        if not isinstance(el, dict):
            continue
        lat, lon = el.get("lat"), el.get("lon")
        if lat is None or lon is None:
            center = el.get("center")
            if not isinstance(center, dict):
                continue
            lat, lon = center.get("lat"), center.get("lon")
        try:
            poi = PointOfInterest(
                osm_id=int(el.get("id", 0)),
                latitude=float(lat),
                longitude=float(lon),
                tags={str(k): str(v) for k, v in (el.get("tags") or {}).items()},
            )
        except (TypeError, ValueError, AttributeError):
            continue
        pois.append(poi)
    return pois


class OverpassClient:
    """Searches chain locations through an Overpass interpreter endpoint."""

    def __init__(self, ctx: ServiceContext):
        self.ctx = ctx

    async def search(self, center: Point, radius_miles: float) -> list[PointOfInterest]:
        """Points of interest for the configured chain within the radius.

        Returns [] on any transport or decoding failure.
        """
        settings = self.ctx.settings
        query = build_query(settings.chain_name, center, radius_miles)
        query_hash = hashlib.sha256(query.encode()).hexdigest()[:16]

        if settings.overpass_cache_ttl > 0:
            try:
                cached = await get_overpass_cache(query_hash)
                if cached is not None:
                    logger.info(f"Overpass cache HIT for {query_hash}")
                    return parse_elements(cached)
            except Exception as e:
                logger.warning(f"Redis overpass cache read failed: {e}")

        logger.info(f"Overpass cache MISS, querying {settings.overpass_url} (radius={radius_miles}mi)")
        try:
            response = await self.ctx.http.get(settings.overpass_url, params={"data": query})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Overpass query failed: {e}")
            return []

        pois = parse_elements(data)
        logger.info(f"Overpass returned {len(pois)} elements")

        if settings.overpass_cache_ttl > 0 and isinstance(data, dict):
            try:
                await set_overpass_cache(query_hash, data, settings.overpass_cache_ttl)
            except Exception as e:
                logger.warning(f"Redis overpass cache write failed: {e}")

        return pois
