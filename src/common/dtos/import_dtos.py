"""Data Transfer Objects for records produced by the external text and CSV interpreters."""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from src.inventory_domain.domain.entities.transaction import TransactionType

logger = logging.getLogger(__name__)


def _optional_number(data: dict[str, Any], key: str, cast: type) -> Optional[Any]:
    value = data.get(key)
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    if isinstance(value, str):
        value = value.replace(",", "").strip()
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"'{key}' must be a finite number, got {value!r}")
    return cast(number) if cast is int else cast(value)


def _optional_text(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class ParsedItemRecordDTO:
    """A candidate new item extracted from free-form text. Only the name is required."""

    name: str
    brand: Optional[str] = None
    size: Optional[str] = None
    color: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = None
    price: Optional[float] = None
    sku: Optional[str] = None

    @classmethod
    def from_model_output(cls, data: Any) -> "ParsedItemRecordDTO":
        """Validates one element of the interpreter's JSON array. Raises ValueError when malformed."""
        if not isinstance(data, dict):
            raise ValueError(f"Item record must be an object, got {type(data).__name__}")
        name = _optional_text(data, "name")
        if not name:
            raise ValueError(f"Item record without a name: {data}")
        return cls(
            name=name,
            brand=_optional_text(data, "brand"),
            size=_optional_text(data, "size"),
            color=_optional_text(data, "color"),
            category=_optional_text(data, "category"),
            quantity=_optional_number(data, "quantity", int),
            price=_optional_number(data, "price", float),
            sku=_optional_text(data, "sku"),
        )


@dataclass(frozen=True)
class ParsedTransactionRecordDTO:
    """A candidate stock movement extracted from CSV text, matched to an item by SKU or name."""

    type: TransactionType
    quantity: int
    sku: Optional[str] = None
    name: Optional[str] = None

    @property
    def delta(self) -> int:
        """Signed quantity change: inbound adds, outbound removes."""
        amount = abs(self.quantity)
        return amount if self.type == TransactionType.IN else -amount

    @classmethod
    def from_model_output(cls, data: Any) -> "ParsedTransactionRecordDTO":
        """Validates one element of the interpreter's JSON array. Raises ValueError when malformed."""
        if not isinstance(data, dict):
            raise ValueError(f"Transaction record must be an object, got {type(data).__name__}")

        sku = _optional_text(data, "sku")
        name = _optional_text(data, "name")
        if not sku and not name:
            raise ValueError(f"Transaction record needs a sku or a name: {data}")

        movement_type = TransactionType.parse(data.get("type", ""))
        if movement_type not in (TransactionType.IN, TransactionType.OUT):
            raise ValueError(f"Transaction record type must be IN or OUT, got {data.get('type')!r}")

        quantity = _optional_number(data, "quantity", int)
        if quantity is None:
            raise ValueError(f"Transaction record without a quantity: {data}")

        return cls(type=movement_type, quantity=quantity, sku=sku, name=name)
