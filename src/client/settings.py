"""Client settings loaded from the environment."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typesense connection settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TYPESENSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(default="http://localhost:8108", description="Typesense server URL")
    api_key: str = Field(..., description="API key sent with every request")
    connection_timeout: float = Field(
        default=5.0, gt=0, description="Request timeout in seconds"
    )
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
