"""Application settings and environment variables."""

import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

CONFIG_DIR = os.path.dirname(__file__)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Storage: "json" keeps the two snapshot files under DATA_DIR, "mysql" keeps them in one table
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "json")
    DATA_DIR: str = os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data"))
    ITEMS_FILE: str = os.getenv("ITEMS_FILE", "smart-stock-items.json")
    TRANSACTIONS_FILE: str = os.getenv("TRANSACTIONS_FILE", "smart-stock-transactions.json")
    SEED_ITEMS_PATH: str = os.getenv("SEED_ITEMS_PATH", os.path.join(CONFIG_DIR, "seed_items.json"))

    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_DATABASE: str = os.getenv("DB_NAME", "smart_stock_db")
    DB_USER: str = os.getenv("DB_USER", "user")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "password")

    # Language model collaborator; without a key every call falls back to fixed text
    GEMINI_API_KEY: Optional[str] = os.getenv("GEMINI_API_KEY")
    GEMINI_API_BASE_URL: str = os.getenv("GEMINI_API_BASE_URL", "https://generativelanguage.googleapis.com/v1beta")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))
    LLM_MAX_RETRIES: int = int(os.getenv("LLM_MAX_RETRIES", "1"))

    # Defaults applied to items created by bulk import
    DEFAULT_MIN_QUANTITY: int = int(os.getenv("DEFAULT_MIN_QUANTITY", "5"))
    OPTIMAL_QUANTITY_MARGIN: int = int(os.getenv("OPTIMAL_QUANTITY_MARGIN", "10"))

    ENFORCE_UNIQUE_SKU: bool = _env_bool("ENFORCE_UNIQUE_SKU", "true")

    # Logging settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")  # INFO, DEBUG, WARNING, ERROR, CRITICAL


settings = Settings()
