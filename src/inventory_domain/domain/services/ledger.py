"""Append-only log of stock movements."""

from typing import Iterable, Iterator, Optional

from src.inventory_domain.domain.entities.transaction import Transaction


class Ledger:
    """Holds transactions newest first. Entries can be added, never changed or removed."""

    def __init__(self, entries: Optional[Iterable[Transaction]] = None) -> None:
        self._entries: tuple[Transaction, ...] = tuple(entries or ())

    def append(self, entry: Transaction) -> None:
        """Records one movement in front of all earlier ones."""
        self._entries = (entry,) + self._entries

    def extend(self, entries: Iterable[Transaction]) -> None:
        """Records a batch in front of all earlier entries, keeping the batch's own order."""
        batch = tuple(entries)
        if batch:
            self._entries = batch + self._entries

    @property
    def entries(self) -> tuple[Transaction, ...]:
        return self._entries

    def for_item(self, item_id: str) -> list[Transaction]:
        return [entry for entry in self._entries if entry.item_id == item_id]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._entries)
