"""Pledgeline — Central Configuration via Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables / .env file."""

    # ── Fundraising API ──
    fundraising_api_base_url: str = "https://api.givebutter.example/v1"
    fundraising_api_key: str = ""
    fundraising_api_timeout: float = 30.0

    # ── Sponsorship ──
    donation_query_limit: int = Field(default=1000, ge=1, le=1000)
    campaign_currency: str = "USD"  # Used when the caller supplies none

    # ── Database ──
    database_url: str = ""
    snapshot_history_enabled: bool = True

    # ── App ──
    log_level: str = "INFO"

    @property
    def effective_database_url(self) -> str:
        """Return the configured database URL, otherwise a local SQLite file."""
        if self.database_url:
            return self.database_url
        return "sqlite:///./pledgeline.db"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
