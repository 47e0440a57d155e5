"""Plain value types shared by the discovery, menu and ranking services."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Point:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive latitude/longitude ranges."""

    min_latitude: float
    max_latitude: float
    min_longitude: float
    max_longitude: float


@dataclass(frozen=True)
class StoreLocation:
    """A chain store. Identity is `store_id`."""

    store_id: str
    name: str
    address: str
    latitude: float
    longitude: float

    @property
    def point(self) -> Point:
        return Point(self.latitude, self.longitude)


@dataclass(frozen=True)
class MenuItem:
    name: str
    price: float


@dataclass(frozen=True)
class CachedMenu:
    """Menu snapshot as read back from the cache store."""

    store_id: str
    items: list[MenuItem]
    updated_at: datetime


@dataclass
class RankedItem:
    """One item with a price slot per queried store (None = not on that menu)."""

    name: str
    prices: list[float | None] = field(default_factory=list)
    spread: float = 0.0
