"""Pydantic schemas for API request/response validation."""

from spread_api.schemas.common import ErrorCode, ErrorDetail, ErrorResponse, error_body
from spread_api.schemas.compare import (
    CompareResponse,
    MenuItemOut,
    MenuResponse,
    NearbyStoreOut,
    RankedItemOut,
    StoresResponse,
)

__all__ = [
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "error_body",
    "CompareResponse",
    "MenuItemOut",
    "MenuResponse",
    "NearbyStoreOut",
    "RankedItemOut",
    "StoresResponse",
]
