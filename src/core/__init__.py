"""Core module - Configuration, logging, and exceptions.

Exports:
    - Settings, get_settings: Pydantic Settings configuration
    - configure_logging, get_logger: Structured logging (structlog)
    - Exception classes: CiteError, FeatureDisabledError, etc.
"""

from src.core.config import Settings, get_settings
from src.core.exceptions import (
    CiteError,
    FeatureDisabledError,
    InvalidContinuationError,
    ReferenceStoreError,
)
from src.core.logging import configure_logging, get_logger


__all__ = [
    # Exceptions
    "CiteError",
    "FeatureDisabledError",
    "InvalidContinuationError",
    "ReferenceStoreError",
    # Configuration
    "Settings",
    # Logging
    "configure_logging",
    "get_logger",
    "get_settings",
]
