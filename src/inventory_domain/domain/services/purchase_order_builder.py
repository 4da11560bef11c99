# src/inventory_domain/domain/services/purchase_order_builder.py
"""Purchase order workflow: select low-stock items, preview the order, commit the receipt."""

import logging
from enum import Enum
from typing import Optional

from src.common.dtos.inventory_dtos import PurchaseOrderLineDTO, PurchaseOrderPreviewDTO
from src.common.exceptions.custom_exceptions import PurchaseOrderError
from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.entities.transaction import Transaction, TransactionType
from src.inventory_domain.domain.services.inventory_store import InventoryStore, StagedInventory, StoreChange
from src.inventory_domain.domain.services.reorder_engine import compute_reorder_list

logger = logging.getLogger(__name__)

PURCHASE_RECEIPT_NOTE = "Automatic purchase-order receipt"


class PurchaseOrderState(str, Enum):
    SELECTING = "SELECTING"
    PREVIEWING = "PREVIEWING"


class PurchaseOrderBuilder:
    """
    Two-state workflow over an InventoryStore.

    SELECTING: item ids are toggled in and out of the selection.
    PREVIEWING: the selection is frozen and shown as line items with a total,
    waiting for commit() or cancel_preview().

    Deleted items drop out of the selection automatically. An open preview is
    rebuilt on every item change so it always matches what commit() receives.
    """

    def __init__(self, store: InventoryStore) -> None:
        self.store = store
        self.state = PurchaseOrderState.SELECTING
        self._selection: list[str] = []
        self._preview: Optional[PurchaseOrderPreviewDTO] = None
        self._unsubscribe = store.subscribe(self._on_store_change)

    def close(self) -> None:
        """Stops following store changes; the builder keeps its current state."""
        self._unsubscribe()

    # --- selection ---

    @property
    def selection(self) -> list[str]:
        return list(self._selection)

    @property
    def current_preview(self) -> Optional[PurchaseOrderPreviewDTO]:
        return self._preview

    def is_selected(self, item_id: str) -> bool:
        return item_id in self._selection

    def select(self, item_id: str) -> None:
        self._ensure_selecting()
        if item_id in self.store and item_id not in self._selection:
            self._selection.append(item_id)

    def deselect(self, item_id: str) -> None:
        self._ensure_selecting()
        if item_id in self._selection:
            self._selection.remove(item_id)

    def toggle(self, item_id: str) -> None:
        if self.is_selected(item_id):
            self.deselect(item_id)
        else:
            self.select(item_id)

    def select_all(self) -> None:
        """Selection becomes every item currently on the reorder list."""
        self._ensure_selecting()
        self._selection = [candidate.item.id for candidate in compute_reorder_list(self.store.items)]

    def start_for_item(self, item_id: str) -> None:
        """Starts a fresh order containing just this item."""
        self.state = PurchaseOrderState.SELECTING
        self._preview = None
        self._selection = [item_id] if item_id in self.store else []

    def clear(self) -> None:
        self._ensure_selecting()
        self._selection = []

    # --- preview ---

    def preview(self) -> PurchaseOrderPreviewDTO:
        """Freezes the selection and computes line items and total."""
        self._ensure_selecting()
        selected = self._selected_items()
        if not selected:
            raise PurchaseOrderError("No items selected for the purchase order")

        self._preview = self._build_preview(selected)
        self.state = PurchaseOrderState.PREVIEWING
        logger.info(
            f"Purchase order preview: {self._preview.line_count} lines, total {self._preview.total_amount:,.0f}"
        )
        return self._preview

    def cancel_preview(self) -> None:
        """Back to selecting; the selection is kept."""
        if self.state != PurchaseOrderState.PREVIEWING:
            raise PurchaseOrderError("There is no purchase order preview to cancel")
        self._preview = None
        self.state = PurchaseOrderState.SELECTING

    # --- commit ---

    def commit(self) -> list[Transaction]:
        """
        Receives the previewed order: every selected item is set to its optimal
        quantity and one PURCHASE transaction is recorded per item.

        The whole order is validated before anything is written; any failure
        leaves items, ledger and selection untouched.
        """
        if self.state != PurchaseOrderState.PREVIEWING:
            raise PurchaseOrderError("Purchase order must be previewed before it can be committed")

        selection = list(self._selection)
        transactions = self.store.mutate(lambda staged: self._receive(staged, selection))

        self._selection = []
        self._preview = None
        self.state = PurchaseOrderState.SELECTING
        logger.info(f"Purchase order committed: {len(transactions)} items received.")
        return transactions

    @staticmethod
    def _receive(staged: StagedInventory, selection: list[str]) -> list[Transaction]:
        selected_ids = set(selection)
        items = [item for item in staged.items.values() if item.id in selected_ids]

        missing = selected_ids - {item.id for item in items}
        if missing:
            raise PurchaseOrderError(f"Selected items no longer exist: {', '.join(sorted(missing))}")

        overstocked = [item for item in items if item.optimal_quantity < item.quantity]
        if overstocked:
            names = ", ".join(f"{item.sku} ({item.quantity} > {item.optimal_quantity})" for item in overstocked)
            raise PurchaseOrderError(f"Items already above their optimal quantity: {names}")

        transactions = []
        for item in items:
            _, entry = staged.apply_movement(
                item.id,
                item.optimal_quantity - item.quantity,
                TransactionType.PURCHASE,
                note=PURCHASE_RECEIPT_NOTE,
            )
            transactions.append(entry)
        return transactions

    # --- helpers ---

    def _ensure_selecting(self) -> None:
        if self.state != PurchaseOrderState.SELECTING:
            raise PurchaseOrderError("Selection is frozen while the purchase order is being previewed")

    def _selected_items(self) -> list[InventoryItem]:
        selected_ids = set(self._selection)
        return [item for item in self.store.items if item.id in selected_ids]

    @classmethod
    def _build_preview(cls, selected: list[InventoryItem]) -> PurchaseOrderPreviewDTO:
        lines = [cls._build_line(item) for item in selected]
        return PurchaseOrderPreviewDTO(lines=lines, total_amount=sum(line.amount for line in lines))

    @staticmethod
    def _build_line(item: InventoryItem) -> PurchaseOrderLineDTO:
        quantity = item.optimal_quantity - item.quantity
        return PurchaseOrderLineDTO(
            item_id=item.id,
            sku=item.sku,
            item_name=item.display_name,
            size=item.size,
            color=item.color,
            current_quantity=item.quantity,
            target_quantity=item.optimal_quantity,
            quantity=quantity,
            unit_price=item.price,
            amount=quantity * item.price,
        )

    def _on_store_change(self, store: InventoryStore, change: StoreChange) -> None:
        if not change.items_changed:
            return
        remaining = [item_id for item_id in self._selection if item_id in store]
        if len(remaining) != len(self._selection):
            logger.info(f"Dropped {len(self._selection) - len(remaining)} deleted items from the purchase order.")
            self._selection = remaining
        if self.state == PurchaseOrderState.PREVIEWING:
            self._refresh_preview()

    def _refresh_preview(self) -> None:
        selected = self._selected_items()
        if not selected:
            self._preview = None
            self.state = PurchaseOrderState.SELECTING
            return
        self._preview = self._build_preview(selected)
