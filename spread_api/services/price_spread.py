"""Price-spread ranking across stores.

Ranking logic:
1. Build one price slot per store for every item name (None = not offered)
2. spread = max - min over the present prices
3. Drop items priced at fewer than 2 stores
4. Sort by spread DESC (stable: equal spreads keep first-seen order), cut to limit
"""

from collections.abc import Sequence

from spread_api.services.domain import MenuItem, RankedItem, StoreLocation


def rank(
    stores: Sequence[StoreLocation],
    menus: Sequence[Sequence[MenuItem]],
    limit: int,
) -> list[RankedItem]:
    """Rank menu items by price spread.

    Args:
        stores: Queried stores, in query order.
        menus: One menu per store, parallel to `stores`.
        limit: Maximum number of items to return.

    Returns:
        RankedItem list, widest spread first.
    """
    if len(stores) != len(menus):
        raise ValueError(f"Expected {len(stores)} menus, got {len(menus)}")

    store_count = len(stores)
    price_map: dict[str, list[float | None]] = {}
    for idx, menu in enumerate(menus):
        for item in menu:
            slots = price_map.setdefault(item.name, [None] * store_count)
            slots[idx] = item.price

    ranked: list[RankedItem] = []
    for name, prices in price_map.items():
        present = [p for p in prices if p is not None]
        if len(present) < 2:
            continue
        ranked.append(RankedItem(name=name, prices=prices, spread=max(present) - min(present)))

    ranked.sort(key=lambda r: r.spread, reverse=True)
    return ranked[: max(limit, 0)]
