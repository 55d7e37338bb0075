"""
Configuration Management for InvoicePro

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Each section reads its own env prefix so a deployment can override
just the storage location without touching anything else.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Browser localStorage gives each origin roughly 5 MiB.
DEFAULT_MAX_DOCUMENT_BYTES = 5 * 1024 * 1024


class StorageSettings(BaseSettings):
    """Where and how the single JSON document is persisted."""
    
    model_config = SettingsConfigDict(
        env_prefix="INVOICEPRO_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Key-value backend holding the document slot"
    )
    data_dir: str = Field(
        default=".invoicepro",
        description="Directory for the file backend"
    )
    document_key: str = Field(
        default="InvoiceProDB",
        min_length=1,
        description="Key of the slot holding the document"
    )
    max_document_bytes: Optional[int] = Field(
        default=DEFAULT_MAX_DOCUMENT_BYTES,
        ge=1,
        description="Quota for one serialized document (None = unlimited)"
    )
    
    @field_validator("document_key")
    @classmethod
    def validate_document_key(cls, v: str) -> str:
        """The key doubles as a file name for the file backend."""
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"document_key must be a plain name, got {v!r}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.
    
    Loads configuration from environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="INVOICEPRO_APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug logging"
    )
    activity_log_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Number of activity entries kept in the document"
    )
    seed_demo_user: bool = Field(
        default=True,
        description="Seed the demo user when the document is first created"
    )


class Settings(BaseSettings):
    """
    Root settings container.
    
    Aggregates all sub-settings for easy access.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()
    
    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.
    
    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the sections that failed.
    """
    results = {}
    
    settings = get_settings()
    
    for name in ("storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)
    
    return results
