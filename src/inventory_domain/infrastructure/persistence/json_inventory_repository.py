# src/inventory_domain/infrastructure/persistence/json_inventory_repository.py
"""JSON file implementation of the inventory state repository."""

import json
import logging
import os
from typing import Any, Callable, Optional, TypeVar

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import PersistenceError
from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.entities.transaction import Transaction
from src.inventory_domain.domain.repositories.inventory_state_repository import IInventoryStateRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")


class JsonFileInventoryRepository(IInventoryStateRepository):
    """Keeps items and transactions in two independent JSON files."""

    def __init__(self, items_path: Optional[str] = None, transactions_path: Optional[str] = None) -> None:
        self.items_path = items_path or os.path.join(settings.DATA_DIR, settings.ITEMS_FILE)
        self.transactions_path = transactions_path or os.path.join(settings.DATA_DIR, settings.TRANSACTIONS_FILE)

    def load_items(self) -> Optional[list[InventoryItem]]:
        return self._load(self.items_path, InventoryItem.from_record)

    def save_items(self, items: list[InventoryItem]) -> None:
        self._save(self.items_path, [item.to_record() for item in items])

    def load_transactions(self) -> Optional[list[Transaction]]:
        return self._load(self.transactions_path, Transaction.from_record)

    def save_transactions(self, transactions: list[Transaction]) -> None:
        self._save(self.transactions_path, [transaction.to_record() for transaction in transactions])

    def _load(self, path: str, from_record: Callable[[dict[str, Any]], E]) -> Optional[list[E]]:
        if not os.path.exists(path):
            logger.info(f"No stored snapshot at {path}.")
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except OSError as e:
            raise PersistenceError(f"Error reading {path}: {e}", original_exception=e)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Error decoding snapshot {path}: {e}", original_exception=e)

        if not isinstance(records, list):
            raise PersistenceError(f"Snapshot {path} must contain a JSON array")

        try:
            return [from_record(record) for record in records]
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Invalid record in snapshot {path}: {e}", original_exception=e)

    def _save(self, path: str, records: list[dict[str, Any]]) -> None:
        # Temp file + os.replace: the previous snapshot survives a failed write
        tmp_path = f"{path}.tmp"
        try:
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(records, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except OSError as e:
            raise PersistenceError(f"Error writing {path}: {e}", original_exception=e)
        logger.debug(f"Saved {len(records)} records to {path}.")
