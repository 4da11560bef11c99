# tests/conftest.py
import pytest
from unittest.mock import Mock
from datetime import datetime
import pytz

from src.assistant_domain.application.inventory_assistant_service import InventoryAssistantService
from src.assistant_domain.infrastructure.api_clients.gemini_api_client import GeminiApiClient
from src.common.config.settings import settings
from src.inventory_domain.application.inventory_service import load_seed_items
from src.inventory_domain.domain.entities.category import Category
from src.inventory_domain.domain.entities.inventory_item import InventoryItem
from src.inventory_domain.domain.services.inventory_store import InventoryStore
from src.inventory_domain.infrastructure.persistence.json_inventory_repository import JsonFileInventoryRepository


@pytest.fixture(autouse=True)
def mock_settings_defaults(mocker) -> None:
    """Pins the settings that change behaviour so tests do not depend on the local .env."""
    mocker.patch.object(settings, "ENFORCE_UNIQUE_SKU", True)
    mocker.patch.object(settings, "DEFAULT_MIN_QUANTITY", 5)
    mocker.patch.object(settings, "OPTIMAL_QUANTITY_MARGIN", 10)
    mocker.patch.object(settings, "GEMINI_API_KEY", None)


@pytest.fixture
def fixed_timestamp() -> datetime:
    return datetime(2024, 3, 1, 9, 30, tzinfo=pytz.utc)


@pytest.fixture
def make_item(fixed_timestamp):
    """Factory for InventoryItem with sensible defaults."""

    def _make_item(**overrides) -> InventoryItem:
        fields = dict(
            id="item-1",
            sku="SKU-1",
            brand="Brand",
            name="Item",
            size="M",
            color="Black",
            category=Category.OTHERS,
            quantity=10,
            min_quantity=5,
            optimal_quantity=20,
            price=1000,
            location="Shelf Z9",
            last_updated=fixed_timestamp,
        )
        fields.update(overrides)
        return InventoryItem(**fields)

    return _make_item


@pytest.fixture
def seed_items() -> list[InventoryItem]:
    """The three starter items: Apple (15/5), Logitech (8/10), Nike (2/5)."""
    return load_seed_items()


@pytest.fixture
def store(seed_items) -> InventoryStore:
    """InventoryStore loaded with the seed items and an empty ledger."""
    inventory_store = InventoryStore(enforce_unique_sku=True)
    inventory_store.load(seed_items)
    return inventory_store


@pytest.fixture
def mock_state_repository() -> Mock:
    """Mock for JsonFileInventoryRepository."""
    return Mock(spec=JsonFileInventoryRepository)


@pytest.fixture
def mock_gemini_api_client() -> Mock:
    """Mock for GeminiApiClient, configured with a key by default."""
    client = Mock(spec=GeminiApiClient)
    client.is_configured = True
    return client


@pytest.fixture
def mock_assistant_service() -> Mock:
    """Mock for InventoryAssistantService."""
    return Mock(spec=InventoryAssistantService)
