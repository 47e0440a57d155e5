"""SQL shape of the cache-store upserts (compiled, no database needed)."""

from sqlalchemy.dialects import postgresql

from spread_api.services.domain import StoreLocation
from spread_api.stores.cache_store import store_upsert_statement


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


def test_store_upsert_is_keyed_on_store_id() -> None:
    sql = _sql(store_upsert_statement(StoreLocation("031234", "Taco Bell", "1 Main St", 30.0, -97.0)))

    assert "ON CONFLICT (store_id) DO UPDATE" in sql
    assert "name = excluded.name" in sql


def test_store_upsert_refreshes_updated_at() -> None:
    sql = _sql(store_upsert_statement(StoreLocation("031234", "Taco Bell", "", 30.0, -97.0)))

    assert "updated_at = now()" in sql
