"""Inventory item entity."""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from src.common.utils.date_utils import format_datetime_iso, parse_datetime_iso, utc_now

from .category import Category


@dataclass(frozen=True)  # The store swaps whole records, it never edits one in place
class InventoryItem:
    """Represents one tracked SKU variant (brand, name, size and color)."""

    id: str
    sku: str
    brand: str
    name: str
    size: str
    color: str
    category: Category
    quantity: int
    min_quantity: int
    optimal_quantity: int
    price: float
    location: str
    last_updated: datetime
    supplier: Optional[str] = None

    def __post_init__(self) -> None:
        """Post-initialization for validation."""
        if self.quantity < 0:
            raise ValueError("Quantity cannot be negative.")
        if self.min_quantity < 0:
            raise ValueError("Minimum quantity cannot be negative.")
        if not math.isfinite(self.price):
            raise ValueError("Price must be a finite number.")
        if self.price < 0:
            raise ValueError("Price cannot be negative.")

    @property
    def display_name(self) -> str:
        """Brand and name as shown in ledger entries."""
        return f"{self.brand} {self.name}"

    def to_record(self) -> dict[str, Any]:
        """Serializes the item with the camelCase keys of the stored snapshot."""
        record = {
            "id": self.id,
            "sku": self.sku,
            "brand": self.brand,
            "name": self.name,
            "size": self.size,
            "color": self.color,
            "category": self.category.value,
            "quantity": self.quantity,
            "minQuantity": self.min_quantity,
            "optimalQuantity": self.optimal_quantity,
            "price": self.price,
            "location": self.location,
            "lastUpdated": format_datetime_iso(self.last_updated),
        }
        if self.supplier is not None:
            record["supplier"] = self.supplier
        return record

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "InventoryItem":
        """Rebuilds an item from a stored snapshot record."""
        return cls(
            id=str(data["id"]),
            sku=data.get("sku", ""),
            brand=data.get("brand", ""),
            name=data.get("name", ""),
            size=data.get("size", ""),
            color=data.get("color", ""),
            category=Category.parse(data.get("category"), default=Category.OTHERS),
            quantity=int(data.get("quantity", 0)),
            min_quantity=int(data.get("minQuantity", 0)),
            optimal_quantity=int(data.get("optimalQuantity", 0)),
            price=data.get("price", 0),
            location=data.get("location", ""),
            last_updated=parse_datetime_iso(data.get("lastUpdated")) or utc_now(),
            supplier=data.get("supplier"),
        )
