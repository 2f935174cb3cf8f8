"""Application configuration via pydantic-settings.

Reads from environment variables and .env file at project root.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from .defaults import DEFAULT_CUSTOMER_NAME

# Project root is 4 levels up from this file:
# src/kiosk/kiosk/config.py -> project root
PROJECT_ROOT = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Persistence ---
    data_dir: Path = PROJECT_ROOT / "data"
    items_key: str = "kiosk_db_items"
    orders_key: str = "kiosk_db_orders"

    # --- Checkout ---
    default_customer_name: str = DEFAULT_CUSTOMER_NAME

    # --- Logging ---
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached Settings instance (created once)."""
    return Settings()
