"""Cache-store repository over PostgreSQL.

Services never touch ORM rows directly: this module converts between
`store_locations` / `menu_cache` rows and the plain value types in
`spread_api.services.domain`.

Upserts use INSERT ... ON CONFLICT DO UPDATE so concurrent writers for the
same key are atomic (last write wins).
"""

import json
from datetime import datetime
from typing import Protocol

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert

from spread_api.models import Location, MenuSnapshot
from spread_api.services.domain import BoundingBox, CachedMenu, MenuItem, StoreLocation
from spread_api.stores.postgres import get_session


class CacheStore(Protocol):
    """Operations the services need from the shared cache store."""

    async def select_stores_in_box(self, box: BoundingBox) -> list[StoreLocation]: ...

    async def upsert_store(self, store: StoreLocation) -> None: ...

    async def get_menu(self, store_id: str) -> CachedMenu | None: ...

    async def upsert_menu(self, store_id: str, items: list[MenuItem], updated_at: datetime) -> None: ...


def store_upsert_statement(store: StoreLocation):
    """INSERT ... ON CONFLICT for one store; refreshes updated_at on conflict."""
    stmt = insert(Location).values(
        store_id=store.store_id,
        name=store.name,
        address=store.address,
        latitude=store.latitude,
        longitude=store.longitude,
    )
    return stmt.on_conflict_do_update(
        index_elements=[Location.store_id],
        set_={
            "name": stmt.excluded.name,
            "address": stmt.excluded.address,
            "latitude": stmt.excluded.latitude,
            "longitude": stmt.excluded.longitude,
            # onupdate= does not fire for ON CONFLICT DO UPDATE
            "updated_at": func.now(),
        },
    )


class PostgresCacheStore:
    """CacheStore backed by the application database."""

    async def select_stores_in_box(self, box: BoundingBox) -> list[StoreLocation]:
        """All cached stores whose coordinates fall inside `box` (inclusive)."""
        query = (
            select(Location)
            .where(Location.latitude >= box.min_latitude)
            .where(Location.latitude <= box.max_latitude)
            .where(Location.longitude >= box.min_longitude)
            .where(Location.longitude <= box.max_longitude)
        )
        async with get_session() as session:
            result = await session.execute(query)
            rows = result.scalars().all()

        return [
            StoreLocation(
                store_id=row.store_id,
                name=row.name,
                address=row.address or "",
                latitude=row.latitude,
                longitude=row.longitude,
            )
            for row in rows
        ]

    async def upsert_store(self, store: StoreLocation) -> None:
        async with get_session() as session:
            await session.execute(store_upsert_statement(store))

    async def get_menu(self, store_id: str) -> CachedMenu | None:
        """Read the menu row for a store regardless of age.

        Raises ValueError if the stored JSON is not a list of items.
        """
        async with get_session() as session:
            result = await session.execute(
                select(MenuSnapshot).where(MenuSnapshot.store_id == store_id)
            )
            row = result.scalar_one_or_none()

        if row is None:
            return None

        raw = json.loads(row.items_json or "[]")
        if not isinstance(raw, list):
            raise ValueError(f"menu_cache row for {store_id} is not a JSON array")
        items = [MenuItem(name=str(i["name"]), price=float(i["price"])) for i in raw]
        return CachedMenu(store_id=row.store_id, items=items, updated_at=row.updated_at)

    async def upsert_menu(self, store_id: str, items: list[MenuItem], updated_at: datetime) -> None:
        payload = json.dumps([{"name": i.name, "price": i.price} for i in items], ensure_ascii=False)
        stmt = insert(MenuSnapshot).values(
            store_id=store_id,
            items_json=payload,
            updated_at=updated_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[MenuSnapshot.store_id],
            set_={
                "items_json": stmt.excluded.items_json,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        async with get_session() as session:
            await session.execute(stmt)
