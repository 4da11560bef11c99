"""Main application entry point for the inventory reorder dashboard."""

import logging

from src.assistant_domain.application.inventory_assistant_service import InventoryAssistantService
from src.assistant_domain.infrastructure.api_clients.gemini_api_client import GeminiApiClient
from src.common.config.settings import settings
from src.common.exceptions.custom_exceptions import ApplicationError, PersistenceError
from src.common.logger_config import setup_logging
from src.inventory_domain.application.bulk_import_service import BulkImportService
from src.inventory_domain.application.inventory_service import InventoryApplicationService
from src.inventory_domain.domain.repositories.inventory_state_repository import IInventoryStateRepository
from src.inventory_domain.domain.services.inventory_store import InventoryStore
from src.inventory_domain.domain.services.stats_service import StockStatus
from src.inventory_domain.infrastructure.persistence.json_inventory_repository import JsonFileInventoryRepository
from src.inventory_domain.infrastructure.persistence.mysql_inventory_repository import MySQLInventoryRepository

logger = logging.getLogger(__name__)


def create_state_repository() -> IInventoryStateRepository:
    """Picks the storage backend configured by STORAGE_BACKEND."""
    if settings.STORAGE_BACKEND.lower() == "mysql":
        repo = MySQLInventoryRepository()
        repo.create_tables()
        return repo
    return JsonFileInventoryRepository()


def setup_dependencies() -> tuple[InventoryApplicationService, BulkImportService]:
    """Initializes and wires up application dependencies."""
    assistant = InventoryAssistantService(api_client=GeminiApiClient())
    store = InventoryStore()

    inventory_service = InventoryApplicationService(
        store=store, state_repo=create_state_repository(), assistant=assistant
    )
    bulk_import_service = BulkImportService(store=store, interpreter=assistant)
    return inventory_service, bulk_import_service


def log_dashboard(inventory_service: InventoryApplicationService) -> None:
    """Logs the dashboard figures and the current reorder list."""
    stats = inventory_service.get_dashboard_stats()
    logger.info(
        f"Items: {stats.total_items} | Value: {stats.total_value:,.0f} | Low stock: {stats.low_stock_count} "
        f"| Out of stock: {stats.out_of_stock_count} | Reorder value: {stats.reorder_value:,.0f}"
    )

    health = inventory_service.get_stock_health()
    logger.info(f"Stock health - healthy: {health.healthy}, warning: {health.warning}, critical: {health.critical}")

    for category, units in inventory_service.get_category_breakdown().items():
        logger.info(f"  {category}: {units} units")

    for item_id, status in inventory_service.get_stock_statuses().items():
        if status != StockStatus.HEALTHY:
            item = inventory_service.store.get(item_id)
            logger.info(f"  {status.value}: {item.sku} {item.display_name} ({item.quantity} in stock)")

    reorder_list = inventory_service.get_reorder_list()
    if not reorder_list:
        logger.info("No items need reordering.")
    for candidate in reorder_list:
        item = candidate.item
        logger.info(
            f"  Reorder [bold]{item.sku}[/bold] {item.display_name} ({item.size}/{item.color}): "
            f"{item.quantity}/{item.min_quantity}, order {candidate.needed_quantity} "
            f"= {candidate.reorder_amount:,.0f}"
        )


if __name__ == "__main__":
    setup_logging()
    logger.info("Inventory dashboard service started.")

    try:
        inventory_service, _ = setup_dependencies()
        inventory_service.load_state()
        log_dashboard(inventory_service)
        logger.info(inventory_service.get_inventory_insights())
    except (PersistenceError, ApplicationError) as e:
        logger.error(f"An error occurred while loading the inventory: {e}")
    except Exception as e:
        logger.exception(f"An unexpected error occurred: {e}")
