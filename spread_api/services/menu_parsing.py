"""Parsers for the chain's menu payloads and store pages.

Two menu sources share the same category -> product shape:
- product API: `menuProductCategories[].menuProducts[]` / `.products[]`
- menu page: `__NEXT_DATA__` script, `props.pageProps.productCategories[].products[]`

Every raw product goes through `parse_product`, which returns a MenuItem or
None. Nothing here raises on malformed input; callers get empty lists.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr, ValidationError, field_validator

from spread_api.services.domain import MenuItem

# JSON-LD on a store page: "menu":"https://www.tacobell.com/food?store=031234"
_JSONLD_MENU_STORE_RE = re.compile(
    r'"menu"\s*:\s*"https?:\\?/\\?/www\.tacobell\.com\\?/food\?store=([A-Za-z0-9]{6,7})'
)
# Fallback: <div id="Core" ... data-code="031234">
_CORE_DATA_CODE_RE = re.compile(r'id="Core"[^>]+data-code="([A-Za-z0-9]{6,7})')
_NEXT_DATA_RE = re.compile(
    r'<script[^>]*id="__NEXT_DATA__"[^>]*>(.*?)</script', re.DOTALL | re.IGNORECASE
)


class RawPrice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: StrictInt | StrictFloat

    @field_validator("value")
    @classmethod
    def _finite_non_negative(cls, v: int | float) -> int | float:
        try:
            as_float = float(v)
        except OverflowError as e:
            raise ValueError("price is out of range") from e
        if not math.isfinite(as_float) or as_float < 0:
            raise ValueError("price must be a finite non-negative number")
        return v


class RawProduct(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: StrictStr
    price: RawPrice

    @field_validator("name")
    @classmethod
    def _non_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be empty")
        return v


def parse_product(raw: Any) -> MenuItem | None:
    """Validate one raw product; None means "invalid, drop it"."""
    if not isinstance(raw, dict):
        return None
    try:
        product = RawProduct.model_validate(raw)
    except ValidationError:
        return None
    return MenuItem(name=product.name, price=float(product.price.value))


def parse_products(raw: Any) -> list[MenuItem]:
    """Valid products from a product array; non-lists yield []."""
    if not isinstance(raw, list):
        return []
    items: list[MenuItem] = []
    for entry in raw:
        item = parse_product(entry)
        if item is not None:
            items.append(item)
    return items


def parse_product_api_menu(data: Any) -> list[MenuItem]:
    """Flatten a product-API response into menu items."""
    if not isinstance(data, dict):
        return []
    categories = data.get("menuProductCategories")
    if not isinstance(categories, list):
        return []

    items: list[MenuItem] = []
    for category in categories:
        if not isinstance(category, dict):
            continue
        items.extend(parse_products(category.get("menuProducts")))
        items.extend(parse_products(category.get("products")))
    return items


def extract_next_data(html: str) -> dict[str, Any] | None:
    """Best-effort extraction of the embedded `__NEXT_DATA__` JSON document."""
    m = _NEXT_DATA_RE.search(html)
    if not m:
        return None
    try:
        payload = json.loads(m.group(1))
    except json.JSONDecodeError:
        return None
    return payload if isinstance(payload, dict) else None


def parse_menu_page(html: str) -> list[MenuItem]:
    """Menu items embedded in a public menu category page."""
    payload = extract_next_data(html)
    if payload is None:
        return []

    props = payload.get("props")
    page_props = props.get("pageProps") if isinstance(props, dict) else None
    categories = page_props.get("productCategories") if isinstance(page_props, dict) else None
    if not isinstance(categories, list):
        return []

    items: list[MenuItem] = []
    for category in categories:
        if isinstance(category, dict):
            items.extend(parse_products(category.get("products")))
    return items


def extract_store_id(html: str) -> str | None:
    """Chain store code from a store website page, or None if no pattern matches.

    Tries the JSON-LD menu URL first, then the `div#Core` data attribute.
    """
    m = _JSONLD_MENU_STORE_RE.search(html)
    if m:
        return m.group(1)
    m = _CORE_DATA_CODE_RE.search(html)
    if m:
        return m.group(1)
    return None
