"""Flatten stored reference data into one keyed list per page.

A page may carry several ``<references>`` lists, each split into groups.
Keys are unique across all of them, so the nested structure flattens into a
single ordered mapping keyed by the derived anchor id.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from src.references.keys import ReferenceKeyFormatter, php_array_key
from src.references.models import ReferenceRecord, StoredReferenceSet


def _entries(container: Any) -> Iterator[tuple[Any, Any]]:
    """Iterate a decoded PHP array that may have been encoded as a JSON list."""
    if isinstance(container, list):
        yield from enumerate(container)
    elif isinstance(container, dict):
        for name, value in container.items():
            yield php_array_key(name), value


def iter_reference_records(
    stored: StoredReferenceSet | None,
    formatter: ReferenceKeyFormatter,
) -> Iterator[ReferenceRecord]:
    """Yield enriched records in stored order (list, then group, then member)."""
    if not stored:
        return
    for index, grouping in _entries(stored.get("refs")):
        for group, members in _entries(grouping):
            for name, ref in _entries(members):
                content = {k: v for k, v in dict(ref).items() if k not in ("key", "name")}
                key = ref.get("key")
                yield ReferenceRecord(
                    id=formatter.reference_id(name, key),
                    key=key,
                    name=name,
                    group=str(group),
                    reflist=index,
                    content=content,
                )


def flatten_stored_references(
    stored: StoredReferenceSet | None,
    formatter: ReferenceKeyFormatter,
) -> dict[str, dict[str, Any]]:
    """Return ``{id: record}`` for one page; empty when nothing is stored.

    A repeated id keeps its first position and takes the later record.
    """
    flattened: dict[str, dict[str, Any]] = {}
    for record in iter_reference_records(stored, formatter):
        flattened[record.id] = record.to_dict()
    return flattened
