"""Stock movement (ledger transaction) entity."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from src.common.utils.date_utils import format_datetime_iso, parse_datetime_iso


class TransactionType(str, Enum):
    """Direction of a stock movement. The sign lives here, never in the quantity."""

    IN = "IN"
    OUT = "OUT"
    ADJUST = "ADJUST"
    PURCHASE = "PURCHASE"

    @classmethod
    def parse(cls, value: "str | TransactionType") -> "TransactionType":
        """Accepts 'IN'/'OUT' as well as 'inbound'/'outbound' in any case."""
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().upper()
        aliases = {"INBOUND": cls.IN, "OUTBOUND": cls.OUT, "ADJUSTMENT": cls.ADJUST}
        if normalized in aliases:
            return aliases[normalized]
        return cls(normalized)


@dataclass(frozen=True)  # Ledger entries are never edited after they are appended
class Transaction:
    """Represents a single recorded stock movement for one item."""

    id: str
    item_id: str
    item_name: str  # Snapshot of "brand name" when the movement happened
    type: TransactionType
    quantity: int
    timestamp: datetime
    note: str = ""

    def __post_init__(self) -> None:
        """Post-initialization for validation."""
        if self.quantity < 0:
            raise ValueError("Transaction quantity cannot be negative.")

    def to_record(self) -> dict[str, Any]:
        """Serializes the transaction with the camelCase keys of the stored snapshot."""
        return {
            "id": self.id,
            "itemId": self.item_id,
            "itemName": self.item_name,
            "type": self.type.value,
            "quantity": self.quantity,
            "timestamp": format_datetime_iso(self.timestamp),
            "note": self.note,
        }

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> "Transaction":
        """Rebuilds a transaction from a stored snapshot record."""
        timestamp = parse_datetime_iso(data.get("timestamp"))
        if timestamp is None:
            raise ValueError(f"Transaction {data.get('id')} has no valid timestamp")
        return cls(
            id=str(data["id"]),
            item_id=str(data["itemId"]),
            item_name=data.get("itemName", ""),
            type=TransactionType.parse(data["type"]),
            quantity=int(data["quantity"]),
            timestamp=timestamp,
            note=data.get("note", ""),
        )
