"""Page-property reference store.

Reference data is persisted as gzip-compressed JSON in page properties. A
compressed blob larger than one property value is split across consecutive
properties ``references-1``, ``references-2``, ... Reading concatenates parts
until the buffer decompresses.
"""

from __future__ import annotations

import base64
import gzip
import json
import threading
import zlib
from pathlib import Path
from typing import Any

from src.clients.memory_store import load_pages_file
from src.clients.protocols import PagePropsSourceProtocol
from src.core.logging import get_logger
from src.references.models import REFERENCES_DATA_VERSION, Page, StoredReferenceSet


logger = get_logger(__name__)


PROPERTY_PREFIX = "references-"

# Largest value a single page property row can hold
MAX_STORAGE_LENGTH = 65535


def property_name(index: int) -> str:
    return f"{PROPERTY_PREFIX}{index}"


def encode_references_data(
    refs: Any,
    chunk_size: int = MAX_STORAGE_LENGTH,
) -> dict[str, bytes]:
    """Encode a refs structure into page property values.

    Args:
        refs: The "refs" structure (list index -> group -> member -> record)
        chunk_size: Maximum bytes per property value

    Returns:
        Property name -> compressed chunk, starting at references-1
    """
    payload = json.dumps(
        {"refs": refs, "version": REFERENCES_DATA_VERSION},
        ensure_ascii=False,
        separators=(",", ":"),
    )
    compressed = gzip.compress(payload.encode("utf-8"), compresslevel=9)
    return {
        property_name(index + 1): compressed[offset:offset + chunk_size]
        for index, offset in enumerate(range(0, len(compressed), chunk_size))
    }


class InMemoryPageProps:
    """In-memory page property table."""

    def __init__(self) -> None:
        self._props: dict[tuple[int, str], bytes] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, path: str | Path) -> InMemoryPageProps:
        """Load base64-encoded property values from a reference data file.

        Entries carry ``"props": {"references-1": "<base64>", ...}``.
        """
        source = cls()
        for entry in load_pages_file(path):
            for name, value in (entry.get("props") or {}).items():
                source.set_property(int(entry["pageid"]), name, base64.b64decode(value))
        return source

    def set_property(self, page_id: int, name: str, value: bytes) -> None:
        with self._lock:
            self._props[(page_id, name)] = value

    def set_properties(self, page_id: int, values: dict[str, bytes]) -> None:
        for name, value in values.items():
            self.set_property(page_id, name, value)

    async def get_property(self, page_id: int, name: str) -> bytes | None:
        with self._lock:
            return self._props.get((page_id, name))


class PagePropsReferenceStore:
    """Reads reference data stored as split gzip JSON page properties.

    Attributes:
        source: Raw page property access
    """

    def __init__(self, source: PagePropsSourceProtocol) -> None:
        self.source = source

    async def get_stored_references(self, page: Page) -> StoredReferenceSet | None:
        """Fetch and decode the stored reference set for a page.

        Returns:
            The decoded set; None when nothing is stored or the stored parts
            are truncated or corrupted.
        """
        buffer = b""
        index = 1
        while True:
            part = await self.source.get_property(page.page_id, property_name(index))
            if part is None:
                if index > 1:
                    logger.warning(
                        "Stored references truncated",
                        page_id=page.page_id,
                        parts=index - 1,
                    )
                return None
            buffer += part
            try:
                decoded = gzip.decompress(buffer)
            except (EOFError, OSError, zlib.error):
                # Incomplete stream, the next property holds the rest
                index += 1
                continue
            try:
                stored = json.loads(decoded)
            except ValueError:
                stored = None
            if not isinstance(stored, dict):
                logger.warning("Corrupted stored references json", page_id=page.page_id)
                return None
            return stored

    async def close(self) -> None:
        return None
