"""In-memory page directory.

Resolves requested page ids and titles to known pages. Titles are compared
in normalized form (underscores as spaces, first letter upper-cased).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from src.clients.memory_store import load_pages_file
from src.references.models import Page, PageSet


def normalize_title(title: str) -> str:
    """Normalize a page title for lookup.

    >>> normalize_title("albert_einstein")
    'Albert einstein'
    """
    normalized = " ".join(title.replace("_", " ").split())
    return normalized[:1].upper() + normalized[1:]


class InMemoryPageDirectory:
    """Page directory backed by a dict of known pages."""

    def __init__(self, pages: Iterable[Page] = ()) -> None:
        self._by_id: dict[int, Page] = {}
        self._by_title: dict[str, Page] = {}
        for page in pages:
            self.add(page)

    @classmethod
    def from_file(cls, path: str | Path) -> InMemoryPageDirectory:
        return cls(
            Page(page_id=int(entry["pageid"]), title=str(entry.get("title", "")))
            for entry in load_pages_file(path)
        )

    def add(self, page: Page) -> None:
        self._by_id[page.page_id] = page
        if page.title:
            self._by_title[normalize_title(page.title)] = page

    async def resolve(
        self,
        page_ids: Sequence[int] = (),
        titles: Sequence[str] = (),
    ) -> PageSet:
        page_set = PageSet()
        seen: set[int] = set()

        def _take(page: Page) -> None:
            if page.page_id not in seen:
                seen.add(page.page_id)
                page_set.pages.append(page)

        for page_id in page_ids:
            page = self._by_id.get(page_id)
            if page is None:
                page_set.missing_ids.append(page_id)
            else:
                _take(page)
        for title in titles:
            page = self._by_title.get(normalize_title(title))
            if page is None:
                page_set.missing_titles.append(title)
            else:
                _take(page)
        return page_set
