"""
Application settings using Pydantic Settings.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Adapter configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Prefer local overrides while keeping .env as the default source
        env_file=(".env.local", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Azure Storage: connection string wins, then account name/key, then account URL
    azure_storage_connection_string: SecretStr | None = None
    azure_storage_account_name: str | None = None
    azure_storage_account_key: SecretStr | None = None
    azure_storage_protocol: Literal["http", "https"] = "https"
    azure_storage_blob_endpoint: str | None = Field(
        None, description="Explicit blob endpoint, e.g. an Azurite emulator URL"
    )
    azure_storage_account_url: str | None = None

    # Listing
    list_max_results: int | None = Field(None, description="Cap on entries returned by a listing")

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @property
    def azure_connection_string_str(self) -> str | None:
        """Get Azure Storage connection string as string."""
        if self.azure_storage_connection_string:
            return self.azure_storage_connection_string.get_secret_value()
        return None

    @property
    def azure_account_key_str(self) -> str | None:
        """Get Azure Storage account key as string."""
        if self.azure_storage_account_key:
            return self.azure_storage_account_key.get_secret_value()
        return None


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
