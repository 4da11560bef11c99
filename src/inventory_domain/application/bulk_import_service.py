# src/inventory_domain/application/bulk_import_service.py
"""Applies externally parsed item and transaction records through the store's mutation rules."""

import logging
import os
from typing import Optional

from src.assistant_domain.application.inventory_assistant_service import InventoryAssistantService
from src.common.config.settings import settings
from src.common.dtos.import_dtos import ParsedItemRecordDTO, ParsedTransactionRecordDTO
from src.common.exceptions.custom_exceptions import InvalidItemError, SkuConflictError
from src.common.utils.id_utils import generate_id, generate_sku
from src.inventory_domain.domain.entities.category import Category
from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.services.inventory_store import InventoryStore, StagedInventory, build_item

logger = logging.getLogger(__name__)

DEFAULT_BRAND = "Unknown"
DEFAULT_VARIANT = "-"
DEFAULT_LOCATION = "Storage"
MAX_SKU_ATTEMPTS = 20


class BulkImportService:

    def __init__(self, store: InventoryStore, interpreter: InventoryAssistantService) -> None:
        self.store = store
        self.interpreter = interpreter

    # --- new items from free-form text ---

    def import_items_from_text(self, text: str) -> Optional[list[InventoryItem]]:
        """
        Sends text to the interpreter and adds every returned record as a new item.

        Returns the created items, or None when nothing was imported (empty input,
        interpreter failure, or a SKU conflict that rejected the batch).
        """
        if not text or not text.strip():
            return None

        records = self.interpreter.parse_bulk_inventory(text)
        if records is None:
            logger.warning("Bulk item import skipped: the text could not be interpreted.")
            return None

        try:
            return self.apply_item_records(records)
        except (SkuConflictError, InvalidItemError) as e:
            logger.error(f"Bulk item import rejected: {e}")
            return None

    def apply_item_records(self, records: list[ParsedItemRecordDTO]) -> list[InventoryItem]:
        """Adds all records as one batch; a conflict on any record rejects the whole batch."""
        created = self.store.mutate(lambda staged: [staged.put(self._build_item(staged, record)) for record in records])
        logger.info(f"Bulk item import added {len(created)} items.")
        return created

    def _build_item(self, staged: StagedInventory, record: ParsedItemRecordDTO) -> InventoryItem:
        quantity = record.quantity or 0
        brand = record.brand or DEFAULT_BRAND
        fields = {
            "sku": record.sku or self._unique_sku(staged, brand),
            "brand": brand,
            "name": record.name,
            "size": record.size or DEFAULT_VARIANT,
            "color": record.color or DEFAULT_VARIANT,
            "category": Category.parse(record.category, default=Category.OTHERS),
            "quantity": quantity,
            "min_quantity": settings.DEFAULT_MIN_QUANTITY,
            "optimal_quantity": quantity + settings.OPTIMAL_QUANTITY_MARGIN,
            "price": record.price or 0,
            "location": DEFAULT_LOCATION,
        }
        return build_item(generate_id(), fields)

    @staticmethod
    def _unique_sku(staged: StagedInventory, brand: str) -> str:
        sku = generate_sku(brand)
        for _ in range(MAX_SKU_ATTEMPTS):
            if staged.find_by_sku(sku) is None:
                return sku
            sku = generate_sku(brand)
        return f"{sku}-{generate_id()[:4].upper()}"

    # --- stock movements from CSV ---

    def import_transactions_from_file(self, file_path: str) -> int:
        """Reads an uploaded delimited text file and imports its movements. Returns the updated count."""
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                csv_text = f.read()
        except OSError as e:
            logger.error(f"Could not read upload {file_path}: {e}")
            return 0
        return self.import_transactions_from_csv(csv_text, source_name=os.path.basename(file_path))

    def import_transactions_from_csv(self, csv_text: str, source_name: str = "upload") -> int:
        records = self.interpreter.parse_csv_transactions(csv_text)
        if records is None:
            logger.warning(f"Transaction import from {source_name} skipped: the CSV could not be interpreted.")
            return 0
        return self.apply_transaction_records(records, source_name)

    def apply_transaction_records(self, records: list[ParsedTransactionRecordDTO], source_name: str = "upload") -> int:
        """
        Matches each record to an item by SKU or name and applies it as one batch.

        Unmatched records are skipped; only the number of applied records is reported.
        """
        note = f"Bulk update ({source_name})"

        def apply(staged: StagedInventory) -> int:
            updated_count = 0
            for record in records:
                item = staged.find_by_sku_or_name(record.sku, record.name)
                if item is None:
                    logger.debug(f"No item matches sku={record.sku!r} name={record.name!r}, record skipped.")
                    continue
                staged.apply_movement(item.id, record.delta, record.type, note=note)
                updated_count += 1
            return updated_count

        updated_count = self.store.mutate(apply)
        logger.info(f"Transaction import from {source_name}: {updated_count} of {len(records)} records applied.")
        return updated_count
