"""Data models for stored reference lookup.

Stored reference data is owned by the reference store and is only read here.
Its shape, as persisted by the Cite parser hooks, is::

    {
        "refs": {list_index: {group: {member_name: record}}},
        "version": 1,
    }

where a member name is either an explicit ``name=`` attribute (string) or a
positional integer for unnamed references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


StoredReferenceSet = dict[str, Any]
"""Decoded stored reference data for a single page."""

MemberName = int | str
"""Member key inside a group: explicit name or positional index."""

REFERENCES_DATA_VERSION = 1


@dataclass(frozen=True, order=True)
class Page:
    """A page known to the page directory.

    Ordering follows the page id so page lists sort ascending.
    """

    page_id: int
    title: str = field(default="", compare=False)


@dataclass
class PageSet:
    """Result of resolving requested page ids and titles.

    Attributes:
        pages: Existing pages, in request order
        missing_ids: Requested page ids with no matching page
        missing_titles: Requested titles with no matching page
    """

    pages: list[Page] = field(default_factory=list)
    missing_ids: list[int] = field(default_factory=list)
    missing_titles: list[str] = field(default_factory=list)

    @property
    def missing(self) -> list[dict[str, Any]]:
        """Missing entries in API form."""
        return [{"pageid": page_id} for page_id in self.missing_ids] + [
            {"title": title} for title in self.missing_titles
        ]


@dataclass
class ReferenceRecord:
    """A stored reference enriched for output.

    Attributes:
        id: Derived anchor id, unique within a page
        key: Position of the reference within its group
        name: Explicit name, or the positional index for unnamed references
        group: Group name ("" for the default group)
        reflist: Index of the references list the record came from
        content: Remaining stored fields (text, count, number, ...)
    """

    id: str
    key: Any
    name: MemberName
    group: str
    reflist: int | str
    content: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the keyed-collection value used in API responses."""
        return {
            **self.content,
            "key": self.key,
            "name": self.name,
            "group": self.group,
            "reflist": self.reflist,
        }


@dataclass
class LookupResult:
    """Outcome of one lookup call.

    Attributes:
        pages: Page id -> ordered {reference id: record dict}, for every page
            that fit into the result
        next_cursor: Page id to resume from, or None when pagination is complete
    """

    pages: dict[int, dict[str, dict[str, Any]]] = field(default_factory=dict)
    next_cursor: int | None = None

    @property
    def complete(self) -> bool:
        return self.next_cursor is None
