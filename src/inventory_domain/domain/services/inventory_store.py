# src/inventory_domain/domain/services/inventory_store.py
"""In-memory inventory store: owns item records and applies the mutation rules."""

import dataclasses
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import InvalidItemError, SkuConflictError
from src.common.utils.date_utils import utc_now
from src.common.utils.id_utils import generate_id
from src.inventory_domain.domain.entities.category import Category
from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.entities.transaction import Transaction, TransactionType
from src.inventory_domain.domain.services.ledger import Ledger

logger = logging.getLogger(__name__)

T = TypeVar("T")

MANUAL_ADJUSTMENT_NOTE = "Manual adjustment"

_TEXT_FIELDS = ("sku", "brand", "name", "size", "color", "location")


@dataclass(frozen=True)
class StoreChange:
    """Tells listeners which collections a committed mutation replaced."""

    items_changed: bool
    transactions_changed: bool


StoreListener = Callable[["InventoryStore", StoreChange], None]


def _coerce_int(fields: Mapping[str, Any], key: str, default: int = 0) -> int:
    value = fields.get(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidItemError(f"'{key}' must be a whole number, got {value!r}", original_exception=e)


def _coerce_price(fields: Mapping[str, Any]) -> float:
    value = fields.get("price")
    if value is None or value == "":
        return 0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        price = value
    else:
        try:
            price = float(value)
        except (TypeError, ValueError) as e:
            raise InvalidItemError(f"'price' must be a number, got {value!r}", original_exception=e)
    if not math.isfinite(price):
        raise InvalidItemError(f"'price' must be a finite number, got {value!r}")
    if price < 0:
        raise InvalidItemError(f"'price' cannot be negative, got {price}")
    return price


def build_item(item_id: str, fields: Mapping[str, Any]) -> InventoryItem:
    """
    Builds a full item record from loosely typed input fields.

    Numbers may arrive as strings (form input); quantity is clamped to zero,
    a missing or unknown category becomes "Others".
    """
    text = {key: str(fields.get(key) or "") for key in _TEXT_FIELDS}
    category = Category.parse(fields.get("category"), default=Category.OTHERS)

    min_quantity = _coerce_int(fields, "min_quantity")
    if min_quantity < 0:
        raise InvalidItemError(f"'min_quantity' cannot be negative, got {min_quantity}")

    return InventoryItem(
        id=item_id,
        category=category,
        quantity=max(0, _coerce_int(fields, "quantity")),
        min_quantity=min_quantity,
        optimal_quantity=_coerce_int(fields, "optimal_quantity"),
        price=_coerce_price(fields),
        last_updated=utc_now(),
        supplier=fields.get("supplier"),
        **text,
    )


class StagedInventory:
    """
    Working copy handed to InventoryStore.mutate().

    Changes made here become visible only when the mutation function returns;
    if it raises, the copy is discarded and the store is left untouched.
    """

    def __init__(self, items: dict[str, InventoryItem], enforce_unique_sku: bool) -> None:
        self.items = items
        self.transactions: list[Transaction] = []
        self.items_changed = False
        self._enforce_unique_sku = enforce_unique_sku

    def get(self, item_id: str) -> Optional[InventoryItem]:
        return self.items.get(item_id)

    def find_by_sku(self, sku: str, exclude_id: Optional[str] = None) -> Optional[InventoryItem]:
        for item in self.items.values():
            if item.sku == sku and item.id != exclude_id:
                return item
        return None

    def find_by_sku_or_name(self, sku: Optional[str], name: Optional[str]) -> Optional[InventoryItem]:
        """First item (in store order) whose SKU or name matches."""
        for item in self.items.values():
            if (sku and item.sku == sku) or (name and item.name == name):
                return item
        return None

    def check_sku_available(self, sku: str, exclude_id: Optional[str] = None) -> None:
        if not self._enforce_unique_sku or not sku:
            return
        existing = self.find_by_sku(sku, exclude_id=exclude_id)
        if existing is not None:
            raise SkuConflictError(sku, existing_item_id=existing.id)

    def put(self, item: InventoryItem) -> InventoryItem:
        self.check_sku_available(item.sku, exclude_id=item.id)
        self.items[item.id] = item
        self.items_changed = True
        return item

    def remove(self, item_id: str) -> Optional[InventoryItem]:
        removed = self.items.pop(item_id, None)
        if removed is not None:
            self.items_changed = True
        return removed

    def apply_movement(
        self,
        item_id: str,
        delta: int,
        movement_type: TransactionType,
        note: str = "",
        record: bool = True,
    ) -> tuple[Optional[InventoryItem], Optional[Transaction]]:
        """
        Single entry point for every quantity change.

        New quantity is max(0, quantity + delta). Unless record is False, one
        ledger entry is staged with the absolute requested amount; the type
        carries the direction. Unknown ids are a no-op.
        """
        item = self.items.get(item_id)
        if item is None:
            return None, None

        timestamp = utc_now()
        updated = dataclasses.replace(item, quantity=max(0, item.quantity + delta), last_updated=timestamp)
        self.items[item_id] = updated
        self.items_changed = True

        entry = None
        if record:
            entry = Transaction(
                id=generate_id(),
                item_id=item.id,
                item_name=item.display_name,
                type=movement_type,
                quantity=abs(delta),
                timestamp=timestamp,
                note=note,
            )
            self.transactions.append(entry)
        return updated, entry


class InventoryStore:
    """Owns the item records. All changes go through mutate() and are applied as one batch."""

    def __init__(self, ledger: Optional[Ledger] = None, enforce_unique_sku: Optional[bool] = None) -> None:
        self._items: dict[str, InventoryItem] = {}
        self.ledger = ledger if ledger is not None else Ledger()
        self.enforce_unique_sku = settings.ENFORCE_UNIQUE_SKU if enforce_unique_sku is None else enforce_unique_sku
        self._listeners: list[StoreListener] = []

    # --- lifecycle ---

    def load(self, items: Iterable[InventoryItem], transactions: Iterable[Transaction] = ()) -> None:
        """Replaces the whole state with previously stored data. Listeners are not notified."""
        self._items = {item.id: item for item in items}
        self.ledger = Ledger(transactions)
        logger.info(f"Inventory store loaded with {len(self._items)} items and {len(self.ledger)} transactions.")

    def reset(self, items: Iterable[InventoryItem]) -> None:
        """Full data reset: replaces all items and discards the ledger."""
        self._items = {item.id: item for item in items}
        self.ledger = Ledger()
        logger.warning(f"Inventory data reset to {len(self._items)} items, ledger cleared.")
        self._notify(StoreChange(items_changed=True, transactions_changed=True))

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Registers a listener called after every committed change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def mutate(self, fn: Callable[[StagedInventory], T]) -> T:
        """
        Runs fn against a staged copy and commits its changes as one unit.

        Exceptions raised by fn propagate and leave the store unchanged.
        """
        staged = StagedInventory(dict(self._items), self.enforce_unique_sku)
        result = fn(staged)

        if staged.items_changed:
            self._items = staged.items
        self.ledger.extend(staged.transactions)

        if staged.items_changed or staged.transactions:
            self._notify(StoreChange(items_changed=staged.items_changed, transactions_changed=bool(staged.transactions)))
        return result

    def _notify(self, change: StoreChange) -> None:
        for listener in list(self._listeners):
            listener(self, change)

    # --- queries ---

    @property
    def items(self) -> list[InventoryItem]:
        """Snapshot of all items in insertion order."""
        return list(self._items.values())

    @property
    def transactions(self) -> list[Transaction]:
        """Snapshot of the ledger, newest first."""
        return list(self.ledger.entries)

    def get(self, item_id: str) -> Optional[InventoryItem]:
        return self._items.get(item_id)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    # --- item operations ---

    def create(self, fields: Mapping[str, Any]) -> InventoryItem:
        """Adds a new item with a fresh identifier."""
        item = build_item(generate_id(), fields)
        created = self.mutate(lambda staged: staged.put(item))
        logger.info(f"Created item {created.id} ({created.sku}: {created.display_name}).")
        return created

    def update(self, item_id: str, fields: Mapping[str, Any]) -> Optional[InventoryItem]:
        """Replaces the full record for item_id. Unknown ids are ignored."""
        if item_id not in self._items:
            logger.debug(f"Update ignored, item {item_id} not found.")
            return None
        item = build_item(item_id, fields)
        return self.mutate(lambda staged: staged.put(item))

    def delete(self, item_id: str) -> bool:
        """Removes an item. Its ledger entries stay. Unknown ids are ignored."""
        if item_id not in self._items:
            logger.debug(f"Delete ignored, item {item_id} not found.")
            return False
        self.mutate(lambda staged: staged.remove(item_id))
        logger.info(f"Deleted item {item_id}.")
        return True

    def adjust_quantity(
        self, item_id: str, delta: int, record: bool = False, note: str = MANUAL_ADJUSTMENT_NOTE
    ) -> Optional[InventoryItem]:
        """
        Manual +/- adjustment: quantity becomes max(0, quantity + delta).

        Manual adjustments are not written to the ledger unless record=True.
        """
        if item_id not in self._items:
            logger.debug(f"Adjustment ignored, item {item_id} not found.")
            return None
        updated, _ = self.mutate(
            lambda staged: staged.apply_movement(item_id, delta, TransactionType.ADJUST, note=note, record=record)
        )
        return updated
