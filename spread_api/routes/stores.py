"""Store endpoints.

GET /v1/stores                    - Nearby stores (discovery only, no menus)
GET /v1/stores/{store_id}/menu    - Current menu for one store
"""

from fastapi import APIRouter, Depends, Path, Query

from spread_api.routes.compare import to_store_out
from spread_api.routes.deps import get_context
from spread_api.schemas import MenuItemOut, MenuResponse, StoresResponse
from spread_api.services.compare import find_nearby_stores
from spread_api.services.context import ServiceContext
from spread_api.services.domain import Point
from spread_api.services.menu_fetcher import MenuFetcher

router = APIRouter()


@router.get("", response_model=StoresResponse)
async def list_nearby_stores(
    lat: float = Query(description="Latitude (decimal degrees)", ge=-90, le=90, allow_inf_nan=False),
    lon: float = Query(description="Longitude (decimal degrees)", ge=-180, le=180, allow_inf_nan=False),
    radius_mi: float | None = Query(default=None, gt=0, le=500, allow_inf_nan=False),
    limit: int = Query(default=25, ge=1, le=100),
    ctx: ServiceContext = Depends(get_context),
) -> StoresResponse:
    """Nearest stores within the radius, nearest first."""
    radius = radius_mi if radius_mi is not None else ctx.settings.default_radius_mi
    nearby = await find_nearby_stores(ctx, Point(lat, lon), radius, limit)
    return StoresResponse(stores=[to_store_out(n) for n in nearby])


@router.get("/{store_id}/menu", response_model=MenuResponse)
async def get_store_menu(
    store_id: str = Path(
        description="Chain store code",
        pattern=r"^[A-Za-z0-9]{6,7}$",
    ),
    ctx: ServiceContext = Depends(get_context),
) -> MenuResponse:
    """Menu for one store (cached for 15 minutes). Empty when unavailable."""
    items = await MenuFetcher(ctx).menu_for(store_id)
    return MenuResponse(
        store_id=store_id,
        items=[MenuItemOut(name=i.name, price=i.price) for i in items],
    )
