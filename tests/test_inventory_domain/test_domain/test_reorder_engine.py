"""Tests for the reorder engine."""

from src.inventory_domain.domain.services.reorder_engine import (
    compute_reorder_list,
    compute_reorder_value,
    needed_quantity,
    urgency_ratio,
)


def test_reorder_list_contains_exactly_low_stock_items(seed_items) -> None:
    reorder_list = compute_reorder_list(seed_items)

    expected = {item.id for item in seed_items if item.quantity <= item.min_quantity}
    assert {candidate.item.id for candidate in reorder_list} == expected == {"2", "3"}


def test_reorder_list_sorted_by_urgency(seed_items) -> None:
    reorder_list = compute_reorder_list(seed_items)

    # Nike 2/5 = 0.4 before Logitech 8/10 = 0.8
    assert [candidate.item.sku for candidate in reorder_list] == ["NIKE-AJ1-RED-270", "LOG-MXM-3S-BK"]
    assert [candidate.urgency_ratio for candidate in reorder_list] == [0.4, 0.8]


def test_reorder_candidates_expose_needed_quantity(seed_items) -> None:
    nike, logitech = compute_reorder_list(seed_items)

    assert nike.needed_quantity == 13
    assert nike.reorder_amount == 1_807_000
    assert logitech.needed_quantity == 42
    assert logitech.reorder_amount == 6_300_000


def test_equal_ratios_keep_input_order(make_item) -> None:
    items = [
        make_item(id="a", sku="A", quantity=2, min_quantity=4),
        make_item(id="b", sku="B", quantity=1, min_quantity=4),
        make_item(id="c", sku="C", quantity=3, min_quantity=6),
        make_item(id="d", sku="D", quantity=5, min_quantity=10),
    ]

    reorder_list = compute_reorder_list(items)

    assert [candidate.item.id for candidate in reorder_list] == ["b", "a", "c", "d"]


def test_zero_reorder_point_ranks_as_most_urgent(make_item) -> None:
    items = [
        make_item(id="low", sku="LOW", quantity=1, min_quantity=10),
        make_item(id="zero", sku="ZERO", quantity=0, min_quantity=0),
        make_item(id="stocked", sku="STOCKED", quantity=3, min_quantity=0),
    ]

    reorder_list = compute_reorder_list(items)

    assert [candidate.item.id for candidate in reorder_list] == ["zero", "low"]
    assert urgency_ratio(items[1]) == 0.0


def test_needed_quantity_never_negative(make_item) -> None:
    assert needed_quantity(make_item(quantity=30, optimal_quantity=20)) == 0


def test_reorder_value_matches_worked_example(make_item) -> None:
    nike = make_item(quantity=2, min_quantity=5, optimal_quantity=15, price=139000)

    assert compute_reorder_value([nike]) == 1_807_000


def test_reorder_value_for_seed_items(seed_items) -> None:
    # 13 x 139,000 + 42 x 150,000; Apple is above its reorder point
    assert compute_reorder_value(seed_items) == 8_107_000


def test_reorder_value_ignores_items_above_reorder_point(make_item) -> None:
    assert compute_reorder_value([make_item(quantity=6, min_quantity=5, optimal_quantity=50)]) == 0
