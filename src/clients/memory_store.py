"""In-memory reference store.

Holds decoded reference sets keyed by page id. Seeded either directly or
from a JSON data file of the form::

    {"pages": [{"pageid": 7, "title": "Example", "references": {"refs": ...}}]}

Pages without a "references" entry have nothing stored.
"""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any

from src.core.logging import get_logger
from src.references.models import Page, StoredReferenceSet


logger = get_logger(__name__)


def load_pages_file(path: str | Path) -> list[dict[str, Any]]:
    """Read the page entries of a reference data file.

    Raises:
        ValueError: If the file has no "pages" list.
    """
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    pages = data.get("pages") if isinstance(data, dict) else None
    if not isinstance(pages, list):
        raise ValueError(f"Reference data file {path} has no 'pages' list")
    return pages


class InMemoryReferenceStore:
    """Thread-safe in-memory reference store.

    Attributes:
        _references: Page id -> decoded reference set
        _lock: Threading lock for concurrent access
    """

    def __init__(self, references: dict[int, StoredReferenceSet] | None = None) -> None:
        self._references: dict[int, StoredReferenceSet] = dict(references or {})
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, path: str | Path) -> InMemoryReferenceStore:
        """Build a store from a reference data file."""
        store = cls()
        for entry in load_pages_file(path):
            if entry.get("references") is not None:
                store.put(int(entry["pageid"]), entry["references"])
        logger.info("Loaded reference data", path=str(path), pages=len(store))
        return store

    def put(self, page_id: int, references: StoredReferenceSet) -> None:
        with self._lock:
            self._references[page_id] = references

    def __len__(self) -> int:
        with self._lock:
            return len(self._references)

    async def get_stored_references(self, page: Page) -> StoredReferenceSet | None:
        with self._lock:
            return self._references.get(page.page_id)

    async def close(self) -> None:
        return None
