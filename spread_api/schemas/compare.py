"""Schemas for the compare and store endpoints (/v1/compare, /v1/stores)."""

from pydantic import BaseModel, Field


class NearbyStoreOut(BaseModel):
    """A store selected for comparison, with its distance from the query point."""

    store_id: str = Field(alias="storeId")
    name: str
    address: str
    latitude: float
    longitude: float
    distance_mi: float = Field(alias="distanceMi", ge=0)

    model_config = {"populate_by_name": True}


class RankedItemOut(BaseModel):
    """One menu item with a price per compared store (null = not offered)."""

    name: str
    prices: list[float | None]
    spread: float = Field(ge=0)


class CompareResponse(BaseModel):
    """Response payload for GET /v1/compare.

    `items[].prices` is parallel to `stores`.
    """

    stores: list[NearbyStoreOut] = Field(default_factory=list)
    items: list[RankedItemOut] = Field(default_factory=list)


class StoresResponse(BaseModel):
    """Response payload for GET /v1/stores."""

    stores: list[NearbyStoreOut] = Field(default_factory=list)


class MenuItemOut(BaseModel):
    name: str
    price: float


class MenuResponse(BaseModel):
    """Response payload for GET /v1/stores/{storeId}/menu."""

    store_id: str = Field(alias="storeId")
    items: list[MenuItemOut] = Field(default_factory=list)

    model_config = {"populate_by_name": True}
