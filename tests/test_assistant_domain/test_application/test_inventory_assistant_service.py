"""Tests for the InventoryAssistantService."""

import pytest

from src.assistant_domain.application.inventory_assistant_service import (
    FAILURE_MESSAGE,
    MISSING_KEY_MESSAGE,
    NO_ITEMS_MESSAGE,
    TIMEOUT_MESSAGE,
    InventoryAssistantService,
)
from src.common.dtos.import_dtos import ParsedItemRecordDTO
from src.common.exceptions.custom_exceptions import APIError, APITimeoutError
from src.inventory_domain.domain.entities.transaction import TransactionType


@pytest.fixture
def assistant(mock_gemini_api_client) -> InventoryAssistantService:
    return InventoryAssistantService(api_client=mock_gemini_api_client)


class TestSummarizeInventory:
    def test_returns_model_text(self, assistant, mock_gemini_api_client, seed_items) -> None:
        mock_gemini_api_client.generate_text.return_value = "Reorder the Nike sneakers first."

        assert assistant.summarize_inventory(seed_items) == "Reorder the Nike sneakers first."

        prompt = mock_gemini_api_client.generate_text.call_args.args[0]
        assert "- Nike Air Jordan 1 Low (270mm/Chicago Red): stock 2, minimum 5, optimal 15" in prompt

    def test_no_items(self, assistant, mock_gemini_api_client) -> None:
        assert assistant.summarize_inventory([]) == NO_ITEMS_MESSAGE
        mock_gemini_api_client.generate_text.assert_not_called()

    def test_missing_key(self, assistant, mock_gemini_api_client, seed_items) -> None:
        mock_gemini_api_client.is_configured = False

        assert assistant.summarize_inventory(seed_items) == MISSING_KEY_MESSAGE
        mock_gemini_api_client.generate_text.assert_not_called()

    def test_timeout_has_its_own_fallback(self, assistant, mock_gemini_api_client, seed_items) -> None:
        mock_gemini_api_client.generate_text.side_effect = APITimeoutError("slow")

        assert assistant.summarize_inventory(seed_items) == TIMEOUT_MESSAGE

    def test_api_error_falls_back(self, assistant, mock_gemini_api_client, seed_items) -> None:
        mock_gemini_api_client.generate_text.side_effect = APIError("boom", status_code=500)

        assert assistant.summarize_inventory(seed_items) == FAILURE_MESSAGE


class TestParseBulkInventory:
    def test_parses_fenced_json_array(self, assistant, mock_gemini_api_client) -> None:
        mock_gemini_api_client.generate_text.return_value = (
            '```json\n[{"brand": "Nike", "name": "Dunk Low", "size": "265mm", "quantity": "4", "price": 129000}]\n```'
        )

        records = assistant.parse_bulk_inventory("Nike Dunk Low 265mm x4 129,000")

        assert records == [
            ParsedItemRecordDTO(name="Dunk Low", brand="Nike", size="265mm", quantity=4, price=129000.0)
        ]

    def test_one_malformed_record_rejects_everything(self, assistant, mock_gemini_api_client) -> None:
        mock_gemini_api_client.generate_text.return_value = '[{"name": "Dunk Low"}, {"brand": "Nike"}]'

        assert assistant.parse_bulk_inventory("text") is None

    @pytest.mark.parametrize(
        "raw_text",
        [
            '[{"name": "Dunk Low", "quantity": 1e999}]',
            '[{"name": "Dunk Low", "quantity": 3, "price": NaN}]',
            '[{"name": "Dunk Low", "price": "Infinity"}]',
        ],
    )
    def test_non_finite_numbers_are_failure(self, assistant, mock_gemini_api_client, raw_text) -> None:
        mock_gemini_api_client.generate_text.return_value = raw_text

        assert assistant.parse_bulk_inventory("text") is None

    @pytest.mark.parametrize("raw_text", ['{"name": "Dunk Low"}', "Sorry, I cannot help with that.", ""])
    def test_non_array_output_is_failure(self, assistant, mock_gemini_api_client, raw_text) -> None:
        mock_gemini_api_client.generate_text.return_value = raw_text

        assert assistant.parse_bulk_inventory("text") is None

    def test_api_error_returns_none(self, assistant, mock_gemini_api_client) -> None:
        mock_gemini_api_client.generate_text.side_effect = APITimeoutError("slow")

        assert assistant.parse_bulk_inventory("text") is None

    def test_missing_key_returns_none(self, assistant, mock_gemini_api_client) -> None:
        mock_gemini_api_client.is_configured = False

        assert assistant.parse_bulk_inventory("text") is None
        mock_gemini_api_client.generate_text.assert_not_called()


class TestParseCsvTransactions:
    def test_parses_records(self, assistant, mock_gemini_api_client) -> None:
        mock_gemini_api_client.generate_text.return_value = (
            '[{"sku": "LOG-MXM-3S-BK", "type": "IN", "quantity": 5},'
            ' {"name": "Air Jordan 1 Low", "type": "outbound", "quantity": 2}]'
        )

        inbound, outbound = assistant.parse_csv_transactions("sku,type,qty\n...")

        assert (inbound.sku, inbound.type, inbound.delta) == ("LOG-MXM-3S-BK", TransactionType.IN, 5)
        assert (outbound.name, outbound.type, outbound.delta) == ("Air Jordan 1 Low", TransactionType.OUT, -2)

    @pytest.mark.parametrize(
        "record",
        [
            '{"sku": "A", "type": "MOVE", "quantity": 1}',
            '{"sku": "A", "type": "ADJUST", "quantity": 1}',
            '{"type": "IN", "quantity": 1}',
            '{"sku": "A", "type": "IN"}',
            '{"sku": "A", "type": "IN", "quantity": "many"}',
            '{"sku": "A", "type": "IN", "quantity": 1e999}',
            '{"sku": "A", "type": "OUT", "quantity": NaN}',
        ],
    )
    def test_invalid_record_is_failure(self, assistant, mock_gemini_api_client, record) -> None:
        mock_gemini_api_client.generate_text.return_value = f"[{record}]"

        assert assistant.parse_csv_transactions("csv") is None
