"""API routes."""

from fastapi import APIRouter

from spread_api.routes import compare, stores

api_router = APIRouter()

# Price comparison
api_router.include_router(compare.router, prefix="/v1", tags=["compare"])

# Store discovery and per-store menus
api_router.include_router(stores.router, prefix="/v1/stores", tags=["stores"])
