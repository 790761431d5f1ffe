"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode secrets or connection strings in code.
"""

import os
from datetime import date, datetime
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


def _cutoff(name: str, default: str) -> datetime:
    """Read a YYYY-MM-DD cutoff as naive UTC midnight."""
    raw = os.getenv(name, default)
    try:
        day = date.fromisoformat(raw)
    except ValueError:
        raise ValueError(f"{name} must be a YYYY-MM-DD date, got {raw!r}")
    return datetime(day.year, day.month, day.day)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # Application
        self.APP_NAME: str = "Ledger Sync"
        self.APP_VERSION: str = "0.1.0"
        self.DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # Server
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "8000"))

        # Database
        self.DATABASE_URL: str = os.getenv(
            "DATABASE_URL",
            "sqlite:///./ledger_sync.db"
        )

        # Environment
        self.ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

        # Shared secret used by the spreadsheet sync process
        self.SYNC_API_KEY: str = os.getenv("SYNC_API_KEY", "")

        # Rows dated before these are never turned into payments/sales
        self.PAYMENTS_CUTOFF_DATE: datetime = _cutoff(
            "PAYMENTS_CUTOFF_DATE", "2025-10-01"
        )
        self.SALES_CUTOFF_DATE: datetime = _cutoff(
            "SALES_CUTOFF_DATE", "2025-10-01"
        )

        # Import control entries are keyed by file name + this suffix
        self.IMPORT_FILE_SUFFIX: str = os.getenv("IMPORT_FILE_SUFFIX", ".xlsx")

        # Upper bound for one ingestion's unit of work
        self.INGEST_TRANSACTION_TIMEOUT_SECONDS: int = int(
            os.getenv("INGEST_TRANSACTION_TIMEOUT_SECONDS", "30")
        )

        # Dashboard session tokens
        self.SESSION_TTL_HOURS: int = int(os.getenv("SESSION_TTL_HOURS", "24"))


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Using lru_cache means the Settings object is created once
    and reused for all subsequent calls. This avoids reading
    environment variables repeatedly.
    """
    return Settings()
