"""SQLAlchemy ORM models.

Models represent database tables:
- store_locations: Discovered chain stores (durable reference data)
- menu_cache: Latest menu snapshot per store (expires by age)
"""

from spread_api.models.location import Location
from spread_api.models.menu_snapshot import MenuSnapshot

__all__ = ["Location", "MenuSnapshot"]
