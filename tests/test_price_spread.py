import pytest

from spread_api.services.domain import MenuItem, StoreLocation
from spread_api.services.price_spread import rank


def _stores(n: int) -> list[StoreLocation]:
    return [StoreLocation(f"00000{i}", f"Store {i}", "", 30.0, -97.0) for i in range(n)]


def test_item_needs_two_prices_to_rank() -> None:
    menus = [
        [MenuItem("Taco", 1.00), MenuItem("Burrito", 2.00)],
        [MenuItem("Taco", 1.50)],
        [],
    ]
    ranked = rank(_stores(3), menus, limit=10)

    assert [r.name for r in ranked] == ["Taco"]
    taco = ranked[0]
    assert taco.prices == [1.00, 1.50, None]
    assert taco.spread == pytest.approx(0.50)


def test_sorted_by_spread_desc_and_truncated() -> None:
    menus = [
        [MenuItem("A", 1.0), MenuItem("B", 1.0), MenuItem("C", 1.0), MenuItem("D", 1.0)],
        [MenuItem("A", 1.1), MenuItem("B", 3.0), MenuItem("C", 2.0), MenuItem("D", 1.0)],
    ]
    ranked = rank(_stores(2), menus, limit=3)

    assert [r.name for r in ranked] == ["B", "C", "A"]
    spreads = [r.spread for r in ranked]
    assert spreads == sorted(spreads, reverse=True)


def test_equal_spreads_keep_first_seen_order() -> None:
    menus = [
        [MenuItem("Nachos", 2.0), MenuItem("Quesadilla", 4.0)],
        [MenuItem("Nachos", 2.5), MenuItem("Quesadilla", 4.5)],
    ]
    ranked = rank(_stores(2), menus, limit=5)
    assert [r.name for r in ranked] == ["Nachos", "Quesadilla"]


def test_identical_prices_rank_with_zero_spread() -> None:
    menus = [[MenuItem("Soda", 1.0)], [MenuItem("Soda", 1.0)]]
    ranked = rank(_stores(2), menus, limit=5)
    assert ranked[0].spread == 0.0


def test_limit_zero_returns_nothing() -> None:
    menus = [[MenuItem("Taco", 1.0)], [MenuItem("Taco", 2.0)]]
    assert rank(_stores(2), menus, limit=0) == []


def test_no_menus_yields_empty() -> None:
    assert rank([], [], limit=15) == []


def test_menus_must_match_stores() -> None:
    with pytest.raises(ValueError):
        rank(_stores(2), [[]], limit=5)
