"""Price comparison endpoint.

GET /v1/compare - Menu items with the widest price spread among nearby stores.

Routers are thin: call services for business logic.
"""

from fastapi import APIRouter, Depends, Query

from spread_api.routes.deps import get_context
from spread_api.schemas import CompareResponse, NearbyStoreOut, RankedItemOut
from spread_api.services.compare import NearbyStore, compare_prices
from spread_api.services.context import ServiceContext
from spread_api.services.domain import Point

router = APIRouter()


def to_store_out(nearby: NearbyStore) -> NearbyStoreOut:
    s = nearby.store
    return NearbyStoreOut(
        store_id=s.store_id,
        name=s.name,
        address=s.address,
        latitude=s.latitude,
        longitude=s.longitude,
        distance_mi=nearby.distance_mi,
    )


@router.get("/compare", response_model=CompareResponse)
async def get_compare(
    lat: float = Query(description="Latitude (decimal degrees)", ge=-90, le=90, allow_inf_nan=False),
    lon: float = Query(description="Longitude (decimal degrees)", ge=-180, le=180, allow_inf_nan=False),
    radius_mi: float | None = Query(
        default=None,
        gt=0,
        le=500,
        allow_inf_nan=False,
        description="Search radius in miles (default 30)",
    ),
    stores: int | None = Query(default=None, ge=1, le=25, description="Stores to compare (default 3)"),
    rows: int | None = Query(default=None, ge=1, le=200, description="Ranked items to return (default 15)"),
    ctx: ServiceContext = Depends(get_context),
) -> CompareResponse:
    """Compare menu prices across the nearest stores.

    Returns:
        CompareResponse with stores (nearest first) and items (widest spread first).
    """
    settings = ctx.settings
    result = await compare_prices(
        ctx,
        Point(lat, lon),
        radius_mi=radius_mi if radius_mi is not None else settings.default_radius_mi,
        store_count=stores if stores is not None else settings.default_store_count,
        item_count=rows if rows is not None else settings.default_item_count,
    )

    return CompareResponse(
        stores=[to_store_out(n) for n in result.stores],
        items=[RankedItemOut(name=i.name, prices=i.prices, spread=i.spread) for i in result.items],
    )
