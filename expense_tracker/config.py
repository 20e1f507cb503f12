# expense_tracker/config.py
"""
Service configuration, loaded from environment variables or a .env file.

The listener port honours the conventional PORT variable; everything else
uses the EXPENSES_ prefix (EXPENSES_DATA_PATH, EXPENSES_LOG_LEVEL, ...).
"""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EXPENSES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "EXPENSES_PORT"),
        description="TCP port for the HTTP listener",
    )
    data_path: Path = Field(
        default=Path("data") / "entries.json",
        description="JSON document holding every entry",
    )
    static_dir: Path = Field(
        default=PACKAGE_DIR / "static",
        description="Directory served verbatim under /",
    )
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, v: str) -> str:
        return v.strip().upper()


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings (cached). Call get_settings.cache_clear() to reload.
    """
    return Settings()
