"""Configuration Management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Builder settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional file receiving JSON log lines")

    # Persistence
    storage_backend: Literal["memory", "file"] = Field(
        default="memory", description="Key-value storage backend"
    )
    storage_dir: str = Field(
        default=".builder-storage", description="Directory for the file storage backend"
    )
    max_blob_size: int = Field(
        default=1024 * 1024, gt=0, description="Max size of a persisted blob (bytes)"
    )
    max_tree_depth: int = Field(
        default=64, gt=0, description="Max JSON nesting depth accepted on load"
    )

    # Builder
    duplicate_offset: float = Field(
        default=20.0, description="Position offset applied to duplicated components"
    )
    default_theme: str = Field(default="modern", description="Theme id selected at startup")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
