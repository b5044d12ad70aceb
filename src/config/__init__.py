"""Configuration module for the reference lookup service.

This module contains:
- feature_flags.py: Site-level Cite feature flags
"""

from src.config.feature_flags import CiteFeatureFlags, get_feature_flags

__all__ = [
    "CiteFeatureFlags",
    "get_feature_flags",
]
