"""Settings for the users Lambda, read from its environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # DynamoDB
    dynamodb_table_name: str = "users"
    dynamodb_endpoint_url: Optional[str] = None
    aws_region: Optional[str] = None

    # When true, creates and updates use conditional puts instead of
    # relying only on the read-before-write existence check.
    conditional_writes: bool = False

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
