# src/inventory_domain/infrastructure/persistence/mysql_inventory_repository.py
"""MySQL implementation of the inventory state repository."""

import json
import logging
from typing import Any, Callable, Optional, TypeVar

import mysql.connector
from mysql.connector import Error

from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import PersistenceError
from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.entities.transaction import Transaction
from src.inventory_domain.domain.repositories.inventory_state_repository import IInventoryStateRepository

logger = logging.getLogger(__name__)

E = TypeVar("E")

ITEMS_COLLECTION = "items"
TRANSACTIONS_COLLECTION = "transactions"


class MySQLInventoryRepository(IInventoryStateRepository):
    """
    Stores each collection as one JSON snapshot row in 'inv_state_snapshot'.

    A missing row means the collection was never stored, which is different
    from a stored empty list.
    """

    def __init__(self) -> None:
        """Initializes the repository."""
        self._connection = None

    def _get_connection(self):
        """Establishes or returns an active MySQL database connection."""
        if not self._connection or not self._connection.is_connected():
            try:
                self._connection = mysql.connector.connect(
                    host=settings.DB_HOST,
                    database=settings.DB_DATABASE,
                    user=settings.DB_USER,
                    password=settings.DB_PASSWORD,
                    autocommit=False,
                    charset="utf8mb4",
                    use_unicode=True,
                )
            except Error as e:
                raise PersistenceError(f"Failed to connect to MySQL: {e}", original_exception=e)
        return self._connection

    def create_tables(self) -> None:
        """Creates the snapshot table if it does not exist."""
        create_snapshot_table_query = """
        CREATE TABLE IF NOT EXISTS inv_state_snapshot (
            collection VARCHAR(64) PRIMARY KEY,
            payload LONGTEXT NOT NULL,
            record_count INT UNSIGNED NOT NULL DEFAULT 0,
            date_saved DATETIME DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4;
        """
        conn = self._get_connection()
        cursor = conn.cursor()
        try:
            cursor.execute(create_snapshot_table_query)
            conn.commit()
            logger.info("Inventory snapshot table checked/created.")
        except Error as e:
            conn.rollback()
            raise PersistenceError(f"Error creating inventory snapshot table: {e}", original_exception=e)
        finally:
            cursor.close()

    def load_items(self) -> Optional[list[InventoryItem]]:
        return self._load(ITEMS_COLLECTION, InventoryItem.from_record)

    def save_items(self, items: list[InventoryItem]) -> None:
        self._save(ITEMS_COLLECTION, [item.to_record() for item in items])

    def load_transactions(self) -> Optional[list[Transaction]]:
        return self._load(TRANSACTIONS_COLLECTION, Transaction.from_record)

    def save_transactions(self, transactions: list[Transaction]) -> None:
        self._save(TRANSACTIONS_COLLECTION, [transaction.to_record() for transaction in transactions])

    def _load(self, collection: str, from_record: Callable[[dict[str, Any]], E]) -> Optional[list[E]]:
        conn = self._get_connection()
        cursor = conn.cursor(dictionary=True)

        try:
            cursor.execute("SELECT payload FROM inv_state_snapshot WHERE collection = %s", (collection,))
            row = cursor.fetchone()
        except Error as e:
            raise PersistenceError(f"Error loading {collection} snapshot: {e}", original_exception=e)
        finally:
            cursor.close()

        if row is None:
            return None

        try:
            return [from_record(record) for record in json.loads(row["payload"])]
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Invalid {collection} snapshot: {e}", original_exception=e)

    def _save(self, collection: str, records: list[dict[str, Any]]) -> None:
        conn = self._get_connection()
        cursor = conn.cursor()

        insert_query = """
        INSERT INTO inv_state_snapshot (collection, payload, record_count)
        VALUES (%s, %s, %s)
        ON DUPLICATE KEY UPDATE
        payload = VALUES(payload),
        record_count = VALUES(record_count),
        date_saved = CURRENT_TIMESTAMP
        """
        params = (collection, json.dumps(records, ensure_ascii=False), len(records))

        try:
            cursor.execute(insert_query, params)
            conn.commit()
            logger.debug(f"Saved {len(records)} {collection} to MySQL.")
        except Error as e:
            conn.rollback()
            raise PersistenceError(f"Error saving {collection} snapshot: {e}", original_exception=e)
        finally:
            cursor.close()

    def __del__(self) -> None:
        """Closes the database connection when the object is destroyed."""
        if self._connection and self._connection.is_connected():
            self._connection.close()
