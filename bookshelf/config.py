# bookshelf/config.py
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from ``BOOKSHELF_*`` environment variables."""

    app_title: str = "Bookshelf"
    app_version: str = "1.0.0"

    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)

    # Single JSON document holding the whole catalog
    books_file: str = "./public/books.json"

    # Hold a lock around load + check + save on create (last write wins otherwise)
    serialize_writes: bool = False

    log_level: str = "INFO"
    log_file: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="BOOKSHELF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
