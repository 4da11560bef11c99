# src/inventory_domain/domain/repositories/inventory_state_repository.py
"""Inventory state (items and ledger snapshot) repository interface."""
from abc import ABC, abstractmethod
from typing import Optional

from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.entities.transaction import Transaction


class IInventoryStateRepository(ABC):

    @abstractmethod
    def load_items(self) -> Optional[list[InventoryItem]]:
        """Loads the stored item collection, or None if nothing has been stored yet."""
        pass

    @abstractmethod
    def save_items(self, items: list[InventoryItem]) -> None:
        """Replaces the stored item collection."""
        pass

    @abstractmethod
    def load_transactions(self) -> Optional[list[Transaction]]:
        """Loads the stored ledger (newest first), or None if nothing has been stored yet."""
        pass

    @abstractmethod
    def save_transactions(self, transactions: list[Transaction]) -> None:
        """Replaces the stored ledger."""
        pass
