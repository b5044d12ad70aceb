"""Cite Feature Flags.

Environment-based switches for the Cite reference features. The lookup
endpoint reads them through the ConfigLookupProtocol (get_boolean) so tests
can substitute a fake configuration.

Environment Variables:
    CITE_REFERENCE_STORAGE_ENABLED=false   # Serve stored reference data
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CiteFeatureFlags(BaseSettings):
    """Site-level Cite feature flags.

    All flags default to False, matching a fresh Cite installation where
    reference data is not stored.

    Attributes:
        reference_storage_enabled: Whether stored reference data may be served.

    Example:
        >>> flags = CiteFeatureFlags()
        >>> flags.get_boolean("reference_storage_enabled")
        False
    """

    model_config = SettingsConfigDict(
        env_prefix="CITE_",
        case_sensitive=False,
        extra="ignore",
    )

    reference_storage_enabled: bool = Field(
        default=False,
        description="Serve reference data stored alongside page properties",
    )

    def get_boolean(self, name: str) -> bool:
        """Look up a boolean flag by name.

        Args:
            name: Flag name, e.g. "reference_storage_enabled".

        Returns:
            The flag value.

        Raises:
            KeyError: If no flag with that name exists.
        """
        if name not in type(self).model_fields:
            raise KeyError(f"Unknown feature flag: {name}")
        return bool(getattr(self, name))


@lru_cache
def get_feature_flags() -> CiteFeatureFlags:
    """Get cached CiteFeatureFlags instance.

    Usable with FastAPI's Depends() pattern; the lru_cache decorator returns
    a singleton for the lifetime of the application.

    Returns:
        CiteFeatureFlags: Cached singleton instance loaded from environment.
    """
    return CiteFeatureFlags()
