# ledgermatch/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEDGERMATCH_",
    )

    # App
    app_name: str = "LedgerMatch API"
    app_env: str = "development"
    debug: bool = True
    frontend_url: str = "http://localhost:3000"

    # Statement import
    max_description_length: int = 255
    stale_transaction_years: int = 2

    # Matching (HTTP layer defaults; MatchingConfig is passed per call)
    date_range_buffer_days: int = 30
    match_workers: int = 1


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
