"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - Routes receive Settings through Depends(get_settings), never via import,
      so tests inject their own instance with dependency_overrides

Design Decisions:
    - Credentials default to "" rather than being required: a missing credential
      is reported per request as a ConfigurationError (500), the process still boots
    - save_token also read from NETLIFY_SAVE_TOKEN for existing deployments
"""

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

StorageBackend = Literal["airtable", "blobs", "sql"]


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    storage_backend: StorageBackend = "airtable"

    # Airtable
    airtable_api_key: str = ""
    airtable_base_id: str = ""
    airtable_table_name: str = "Queries"
    # Column receiving the write timestamp; "" for tables without one
    airtable_updated_at_field: str = "updatedAt"

    # Netlify Blobs
    netlify_site_id: str = ""
    netlify_blobs_token: str = ""
    blobs_store_name: str = "queries"
    blobs_api_url: str = "https://api.netlify.com"

    # SQL
    database_url: str = "postgresql+asyncpg://query:query@db:5432/query"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 5

    # Write protection; empty means POST is open
    save_token: str = Field(
        "", validation_alias=AliasChoices("save_token", "netlify_save_token"),
    )

    provider_timeout_seconds: float = 10.0

    # Spreadsheet forwarding
    sheet_endpoint_url: str = ""
    sheet_token: str = ""

    @field_validator(
        "airtable_api_key", "airtable_base_id", "netlify_site_id",
        "netlify_blobs_token", "save_token", "sheet_endpoint_url", mode="after",
    )
    @classmethod
    def strip_secrets(cls, v: str) -> str:
        return (v or "").strip()

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
