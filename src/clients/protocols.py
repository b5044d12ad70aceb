"""Collaborator Protocols for the reference lookup endpoint.

Duck typing protocols for configuration, page resolution and reference
storage - enables in-memory fake substitution in tests.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from src.references.models import Page, PageSet, StoredReferenceSet


@runtime_checkable
class ConfigLookupProtocol(Protocol):
    """Protocol for site configuration lookups.

    Implemented by CiteFeatureFlags.
    """

    def get_boolean(self, name: str) -> bool:
        """Return the boolean configuration value called name."""
        ...


@runtime_checkable
class ReferenceStoreProtocol(Protocol):
    """Protocol for stored reference data backends.

    Methods:
        get_stored_references: Fetch the decoded reference set for a page
        close: Release backend resources
    """

    async def get_stored_references(self, page: Page) -> StoredReferenceSet | None:
        """Fetch stored references for a page.

        Args:
            page: Page to look up

        Returns:
            Decoded reference set, or None when nothing is stored
        """
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...


@runtime_checkable
class PagePropsSourceProtocol(Protocol):
    """Protocol for raw page property access."""

    async def get_property(self, page_id: int, name: str) -> bytes | None:
        """Return the raw property value, or None if the property is not set."""
        ...


@runtime_checkable
class PageDirectoryProtocol(Protocol):
    """Protocol for resolving requested page ids and titles to pages."""

    async def resolve(
        self,
        page_ids: Sequence[int] = (),
        titles: Sequence[str] = (),
    ) -> PageSet:
        """Resolve page ids and titles; unknown ones are reported as missing."""
        ...
