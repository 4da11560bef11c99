# src/assistant_domain/application/inventory_assistant_service.py
"""Application service wrapping the language model: inventory summaries and text-to-record parsing."""

import json
import logging
import re
from typing import Any, Callable, Iterable, Optional, TypeVar

from src.assistant_domain.infrastructure.api_clients.gemini_api_client import GeminiApiClient
from src.common.dtos.import_dtos import ParsedItemRecordDTO, ParsedTransactionRecordDTO
from src.common.exceptions.custom_exceptions import APIError, APITimeoutError
from src.inventory_domain.domain.entities.inventory_item import InventoryItem

logger = logging.getLogger(__name__)

R = TypeVar("R")

NO_ITEMS_MESSAGE = "There is no item data to analyze."
MISSING_KEY_MESSAGE = "The API key is not configured. Set GEMINI_API_KEY to enable inventory analysis."
TIMEOUT_MESSAGE = "The analysis service did not respond in time. Please try again later."
FAILURE_MESSAGE = "An error occurred during analysis. Check the API key and try again."

_CODE_FENCE_PATTERN = re.compile(r"```(?:json)?\n?")

INSIGHTS_PROMPT = """
The following is item data from an inventory management system. Each item is identified by brand, name, size and color.

{item_lines}

Analyze the data and provide:
1. Items that need urgent reordering (current stock at or below 50% of the minimum stock)
2. Items whose reorder point is close
3. Stock health by brand and category
4. Concrete order quantities and amounts

Answer briefly and clearly.
"""

BULK_INVENTORY_PROMPT = """
Extract inventory items from the text below and convert them into a JSON array.
Each item must contain these fields: brand, name, size, color, quantity, price, category.

Text:
{text}

Return only a valid JSON array and nothing else.
"""

CSV_TRANSACTIONS_PROMPT = """
Parse the following CSV data into stock movement records.
Each record must contain these fields: sku or name, type (IN or OUT), quantity.

CSV:
{csv_text}

Return only a valid JSON array and nothing else.
"""


class InventoryAssistantService:
    """
    Every public method degrades instead of raising: summaries fall back to a
    fixed message, parsers return None.
    """

    def __init__(self, api_client: GeminiApiClient) -> None:
        self.api_client = api_client

    def summarize_inventory(self, items: Iterable[InventoryItem]) -> str:
        """Returns a natural-language health summary of the given items, or a fallback message."""
        items = list(items)
        if not items:
            return NO_ITEMS_MESSAGE
        if not self.api_client.is_configured:
            logger.warning("Inventory insights requested but GEMINI_API_KEY is not set.")
            return MISSING_KEY_MESSAGE

        prompt = INSIGHTS_PROMPT.format(item_lines="\n".join(self._describe_item(item) for item in items))
        try:
            return self.api_client.generate_text(prompt)
        except APITimeoutError as e:
            logger.error(f"Inventory insights timed out: {e}")
            return TIMEOUT_MESSAGE
        except APIError as e:
            logger.error(f"Inventory insights failed: {e}")
            return FAILURE_MESSAGE

    def parse_bulk_inventory(self, text: str) -> Optional[list[ParsedItemRecordDTO]]:
        """Turns free-form text into item records. None if the call fails or the output is malformed."""
        return self._parse_records(
            BULK_INVENTORY_PROMPT.format(text=text), ParsedItemRecordDTO.from_model_output, "Bulk inventory"
        )

    def parse_csv_transactions(self, csv_text: str) -> Optional[list[ParsedTransactionRecordDTO]]:
        """Turns raw CSV text into stock movement records. None if the call fails or the output is malformed."""
        return self._parse_records(
            CSV_TRANSACTIONS_PROMPT.format(csv_text=csv_text),
            ParsedTransactionRecordDTO.from_model_output,
            "CSV transactions",
        )

    def _parse_records(self, prompt: str, build: Callable[[Any], R], label: str) -> Optional[list[R]]:
        if not self.api_client.is_configured:
            logger.warning(f"{label} parsing requested but GEMINI_API_KEY is not set.")
            return None

        try:
            raw_text = self.api_client.generate_text(prompt)
        except APIError as e:
            logger.error(f"{label} parse error: {e}")
            return None

        try:
            payload = self.extract_json_array(raw_text)
            records = [build(entry) for entry in payload]
        except (ValueError, TypeError, OverflowError) as e:
            # No partial acceptance: one bad record rejects the whole output
            logger.error(f"{label} parse error, malformed model output: {e}")
            return None

        logger.info(f"{label} parsed into {len(records)} records.")
        return records

    @staticmethod
    def extract_json_array(raw_text: str) -> list:
        """Strips Markdown code fences and decodes a JSON array. Raises ValueError otherwise."""
        json_text = _CODE_FENCE_PATTERN.sub("", raw_text).strip()
        payload = json.loads(json_text)
        if not isinstance(payload, list):
            raise ValueError(f"Expected a JSON array, got {type(payload).__name__}")
        return payload

    @staticmethod
    def _describe_item(item: InventoryItem) -> str:
        return (
            f"- {item.brand} {item.name} ({item.size}/{item.color}): stock {item.quantity}, "
            f"minimum {item.min_quantity}, optimal {item.optimal_quantity}, unit price {item.price}"
        )
