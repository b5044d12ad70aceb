"""Stored reference lookup.

Exports:
    - ReferenceLookupEndpoint: Paginated per-page reference lookup
    - QueryResult: Size-bounded result sink
    - ReferenceKeyFormatter: Reference anchor id derivation
"""

from src.references.flatten import flatten_stored_references
from src.references.keys import ReferenceKeyFormatter
from src.references.lookup import ReferenceLookupEndpoint, parse_continuation
from src.references.models import LookupResult, Page, PageSet, ReferenceRecord
from src.references.result import QueryResult, ResultSinkProtocol


__all__ = [
    "LookupResult",
    "Page",
    "PageSet",
    "QueryResult",
    "ReferenceKeyFormatter",
    "ReferenceLookupEndpoint",
    "ReferenceRecord",
    "ResultSinkProtocol",
    "flatten_stored_references",
    "parse_continuation",
]
