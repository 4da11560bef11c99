# src/inventory_domain/application/inventory_service.py
"""Application service for the inventory dashboard: state lifecycle, item operations and reports."""

import json
import logging
from typing import Any, Mapping, Optional

from src.assistant_domain.application.inventory_assistant_service import InventoryAssistantService
from src.common.config.settings import settings
from src.common.dtos.inventory_dtos import DashboardStatsDTO, ReorderCandidateDTO, StockHealthDTO
from src.common.exceptions.custom_exceptions import ApplicationError, PersistenceError
from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.entities.transaction import Transaction
from src.inventory_domain.domain.repositories.inventory_state_repository import IInventoryStateRepository
from src.inventory_domain.domain.services import reorder_engine, stats_service
from src.inventory_domain.domain.services.inventory_store import InventoryStore, StoreChange
from src.inventory_domain.domain.services.purchase_order_builder import PurchaseOrderBuilder

logger = logging.getLogger(__name__)


def load_seed_items(seed_items_path: Optional[str] = None) -> list[InventoryItem]:
    """Loads the fixed starter item set used when no items have been stored yet."""
    seed_items_path = seed_items_path or settings.SEED_ITEMS_PATH
    try:
        with open(seed_items_path, "r", encoding="utf-8") as f:
            seed_data = json.load(f)
    except FileNotFoundError:
        raise ApplicationError(f"Seed items file not found at {seed_items_path}")
    except json.JSONDecodeError:
        raise ApplicationError(f"Error decoding seed items from {seed_items_path}")

    return [InventoryItem.from_record(record) for record in seed_data]


class InventoryApplicationService:
    """Wires the store to its repository and exposes the dashboard operations."""

    def __init__(
        self,
        store: InventoryStore,
        state_repo: IInventoryStateRepository,
        assistant: InventoryAssistantService,
    ) -> None:
        self.store = store
        self.state_repo = state_repo
        self.assistant = assistant
        self.purchase_orders = PurchaseOrderBuilder(store)
        self.store.subscribe(self._persist)

    # --- state lifecycle ---

    def load_state(self) -> None:
        """Restores items and ledger from storage; missing items fall back to the seed set."""
        items = self.state_repo.load_items()
        if items is None:
            logger.info("No stored items found, starting from the seed set.")
            items = load_seed_items()
        transactions = self.state_repo.load_transactions() or []
        self.store.load(items, transactions)

    def reset_all_data(self) -> None:
        """Restores the seed items and clears the ledger."""
        self.store.reset(load_seed_items())

    def _persist(self, store: InventoryStore, change: StoreChange) -> None:
        try:
            if change.items_changed:
                self.state_repo.save_items(store.items)
            if change.transactions_changed:
                self.state_repo.save_transactions(store.transactions)
        except PersistenceError as e:
            logger.error(f"Failed to persist inventory state: {e}")

    # --- item operations ---

    def add_item(self, fields: Mapping[str, Any]) -> InventoryItem:
        return self.store.create(fields)

    def update_item(self, item_id: str, fields: Mapping[str, Any]) -> Optional[InventoryItem]:
        return self.store.update(item_id, fields)

    def delete_item(self, item_id: str) -> bool:
        return self.store.delete(item_id)

    def adjust_stock(self, item_id: str, delta: int, record: bool = False) -> Optional[InventoryItem]:
        return self.store.adjust_quantity(item_id, delta, record=record)

    # --- queries ---

    def get_items(self, query: str = "") -> list[InventoryItem]:
        return stats_service.search_items(self.store.items, query)

    def get_transactions(self) -> list[Transaction]:
        return self.store.transactions

    def get_dashboard_stats(self) -> DashboardStatsDTO:
        return stats_service.compute_dashboard_stats(self.store.items)

    def get_stock_health(self) -> StockHealthDTO:
        return stats_service.compute_stock_health(self.store.items)

    def get_category_breakdown(self) -> dict[str, int]:
        return stats_service.compute_category_breakdown(self.store.items)

    def get_stock_statuses(self) -> dict[str, stats_service.StockStatus]:
        """Stock status per item id, in store order."""
        return {item.id: stats_service.stock_status(item) for item in self.store.items}

    def get_reorder_list(self) -> list[ReorderCandidateDTO]:
        return reorder_engine.compute_reorder_list(self.store.items)

    def get_inventory_insights(self) -> str:
        return self.assistant.summarize_inventory(self.store.items)
