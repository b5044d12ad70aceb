"""Application configuration using Pydantic Settings.

Environment variables are loaded with CITE_API_ prefix.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service configuration
    service_name: str = "cite-references"
    port: int = 8090
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Reference store
    reference_store_backend: Literal["memory", "page_props", "http"] = Field(
        default="memory",
        description="Backend used to read stored reference data"
    )
    reference_data_path: Optional[str] = Field(
        default=None,
        description="JSON data file seeding the in-memory page directory and stores"
    )
    references_service_url: str = Field(
        default="http://localhost:8091",
        description="Remote reference store URL (http backend)"
    )
    references_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Remote reference store request timeout"
    )

    # Result limits
    max_result_size: int = Field(
        default=8 * 1024 * 1024,
        gt=0,
        description="Maximum accumulated size of a single query result"
    )

    # Cache headers for public responses
    cache_max_age: int = Field(default=0, ge=0, description="Client cache max-age in seconds")
    cache_s_maxage: int = Field(default=0, ge=0, description="Shared cache s-maxage in seconds")

    # Reference id rendering
    reference_link_prefix: str = Field(default="cite_note-", description="Prefix of reference ids")
    reference_link_suffix: str = Field(default="", description="Suffix of reference ids")
    id_encoding: Literal["html5", "legacy"] = Field(
        default="html5",
        description="Escaping applied to reference ids"
    )

    model_config = SettingsConfigDict(
        env_prefix="CITE_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Application settings singleton
    """
    return Settings()
