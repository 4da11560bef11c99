"""Data Transfer Objects for derived inventory views (stats, reorder list, purchase orders)."""

from dataclasses import dataclass, field

from src.inventory_domain.domain.entities.inventory_item import InventoryItem


@dataclass(frozen=True)
class DashboardStatsDTO:
    """Aggregates computed from the current item snapshot."""

    total_items: int
    total_value: float
    low_stock_count: int
    out_of_stock_count: int
    reorder_value: float


@dataclass(frozen=True)
class StockHealthDTO:
    """Item counts per stock health bucket."""

    healthy: int = 0
    warning: int = 0
    critical: int = 0


@dataclass(frozen=True)
class ReorderCandidateDTO:
    """An item at or below its reorder point, with the amount needed to reach the target level."""

    item: InventoryItem
    needed_quantity: int
    urgency_ratio: float

    @property
    def reorder_amount(self) -> float:
        return self.needed_quantity * self.item.price


@dataclass(frozen=True)
class PurchaseOrderLineDTO:
    """One line of a purchase order preview."""

    item_id: str
    sku: str
    item_name: str
    size: str
    color: str
    current_quantity: int
    target_quantity: int
    quantity: int
    unit_price: float
    amount: float


@dataclass(frozen=True)
class PurchaseOrderPreviewDTO:
    """Frozen purchase order: line items and their total."""

    lines: list[PurchaseOrderLineDTO] = field(default_factory=list)
    total_amount: float = 0

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)
