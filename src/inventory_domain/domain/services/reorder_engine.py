# src/inventory_domain/domain/services/reorder_engine.py
"""Reorder point checks: which items need replenishment, in which order, and at what cost."""

from typing import Iterable

from src.common.dtos.inventory_dtos import ReorderCandidateDTO
from src.inventory_domain.domain.entities.inventory_item import InventoryItem


def needs_reorder(item: InventoryItem) -> bool:
    """An item needs reordering once its quantity is at or below its reorder point."""
    return item.quantity <= item.min_quantity


def needed_quantity(item: InventoryItem) -> int:
    """Units required to bring the item up to its optimal level (never negative)."""
    return max(0, item.optimal_quantity - item.quantity)


def urgency_ratio(item: InventoryItem) -> float:
    """
    quantity / min_quantity, lower is more urgent.

    Items with a reorder point of zero rank as maximally urgent (ratio 0.0).
    """
    if item.min_quantity == 0:
        return 0.0
    return item.quantity / item.min_quantity


def compute_reorder_list(items: Iterable[InventoryItem]) -> list[ReorderCandidateDTO]:
    """Low-stock items sorted by urgency; equal ratios keep their input order."""
    candidates = [
        ReorderCandidateDTO(item=item, needed_quantity=needed_quantity(item), urgency_ratio=urgency_ratio(item))
        for item in items
        if needs_reorder(item)
    ]
    # list.sort is stable
    candidates.sort(key=lambda candidate: candidate.urgency_ratio)
    return candidates


def compute_reorder_value(items: Iterable[InventoryItem]) -> float:
    """Cost of bringing every low-stock item up to its optimal level."""
    return sum(needed_quantity(item) * item.price for item in items if needs_reorder(item))
