# src/inventory_domain/domain/services/stats_service.py
"""Dashboard aggregates. Everything here is computed from the snapshot passed in; nothing is cached."""

from enum import Enum
from typing import Iterable

from src.common.dtos.inventory_dtos import DashboardStatsDTO, StockHealthDTO
from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.services.reorder_engine import compute_reorder_value, needs_reorder

CRITICAL_STOCK_FACTOR = 0.5


class StockStatus(str, Enum):
    OUT_OF_STOCK = "OUT_OF_STOCK"
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    HEALTHY = "HEALTHY"


def stock_status(item: InventoryItem) -> StockStatus:
    if item.quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if item.quantity <= item.min_quantity * CRITICAL_STOCK_FACTOR:
        return StockStatus.CRITICAL
    if item.quantity <= item.min_quantity:
        return StockStatus.WARNING
    return StockStatus.HEALTHY


def compute_dashboard_stats(items: Iterable[InventoryItem]) -> DashboardStatsDTO:
    items = list(items)
    return DashboardStatsDTO(
        total_items=len(items),
        total_value=compute_total_value(items),
        low_stock_count=sum(1 for item in items if needs_reorder(item)),
        out_of_stock_count=sum(1 for item in items if item.quantity <= 0),
        reorder_value=compute_reorder_value(items),
    )


def compute_total_value(items: Iterable[InventoryItem]) -> float:
    return sum(item.price * item.quantity for item in items)


def compute_stock_health(items: Iterable[InventoryItem]) -> StockHealthDTO:
    """Counts items per health bucket; out-of-stock items count as critical."""
    healthy = warning = critical = 0
    for item in items:
        if item.quantity <= item.min_quantity * CRITICAL_STOCK_FACTOR:
            critical += 1
        elif item.quantity <= item.min_quantity:
            warning += 1
        else:
            healthy += 1
    return StockHealthDTO(healthy=healthy, warning=warning, critical=critical)


def compute_category_breakdown(items: Iterable[InventoryItem]) -> dict[str, int]:
    """Total units per category, in order of first appearance."""
    breakdown: dict[str, int] = {}
    for item in items:
        key = item.category.value
        breakdown[key] = breakdown.get(key, 0) + item.quantity
    return breakdown


def search_items(items: Iterable[InventoryItem], query: str) -> list[InventoryItem]:
    """Case-insensitive substring match on name, brand or SKU. An empty query matches everything."""
    needle = (query or "").strip().lower()
    return [
        item
        for item in items
        if needle in item.name.lower() or needle in item.brand.lower() or needle in item.sku.lower()
    ]
