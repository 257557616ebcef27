"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables, with an optional .env file
as a fallback. Pydantic Settings resolves values in this order:
  1. Environment variables (highest priority)
  2. .env file values
  3. Defaults defined here (lowest priority)

Only the wiring code (dependencies, lifespan) reads this module. Validators and
the bank client receive their configuration through constructor arguments so
tests can pass fixed values.

Usage:
    from app.config import settings
    print(settings.BANK_SIMULATOR_URL)
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.validation.currency import is_iso_currency


class Settings(BaseSettings):
    """Central configuration for the Payment Gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    APP_NAME: str = "Payment Gateway"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    # --- Database ---
    # Any async SQLAlchemy URL; the payments table is created on startup
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/payments.db"

    # --- Acquiring bank ---
    BANK_SIMULATOR_URL: str = "http://localhost:8080"
    # None waits for the bank forever
    BANK_TIMEOUT_SECONDS: float | None = 10.0

    # --- Payments ---
    SUPPORTED_CURRENCIES: list[str] = ["GBP", "USD", "EUR"]

    @field_validator("SUPPORTED_CURRENCIES")
    @classmethod
    def normalize_currencies(cls, value: list[str]) -> list[str]:
        codes = [code.strip().upper() for code in value]
        for code in codes:
            if not is_iso_currency(code):
                raise ValueError(f"Invalid currency code in SUPPORTED_CURRENCIES: {code!r}")
        return codes


# Singleton: import this instance everywhere instead of creating new Settings()
settings = Settings()
