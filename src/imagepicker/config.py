"""Configuration management using pydantic-settings."""

from enum import Enum
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InsertionPolicy(str, Enum):
    """Where a newly created record lands in the sequence."""

    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All variables carry the ``IMAGEPICKER_`` prefix, e.g.
    ``IMAGEPICKER_DATA_DIR`` or ``IMAGEPICKER_STORE_FILENAME``.
    """

    # Service configuration
    host: str = "0.0.0.0"
    port: int = 3004

    # Storage configuration
    data_dir: str = "./data"
    store_filename: str = "images.plist"
    insertion_policy: InsertionPolicy = InsertionPolicy.NEWEST_FIRST

    # Image intake
    normalize_jpeg: bool = True
    jpeg_quality: int = Field(default=100, ge=1, le=100)
    max_upload_bytes: int = Field(default=20 * 1024 * 1024, gt=0)

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # text | json

    model_config = SettingsConfigDict(
        env_prefix="IMAGEPICKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def data_path(self) -> Path:
        """Get the data directory path."""
        return Path(self.data_dir)

    @property
    def store_path(self) -> Path:
        """Get the backing plist path."""
        return self.data_path / self.store_filename


settings = Settings()
