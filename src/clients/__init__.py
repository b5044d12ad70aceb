"""Reference lookup collaborators.

Reference stores (in-memory, page properties, remote HTTP service), the page
directory, and the protocols they implement.
"""

from src.clients.factory import create_page_directory, create_reference_store
from src.clients.memory_store import InMemoryReferenceStore
from src.clients.page_directory import InMemoryPageDirectory
from src.clients.page_props import (
    InMemoryPageProps,
    PagePropsReferenceStore,
    encode_references_data,
)
from src.clients.protocols import (
    ConfigLookupProtocol,
    PageDirectoryProtocol,
    PagePropsSourceProtocol,
    ReferenceStoreProtocol,
)
from src.clients.references_service import ReferencesServiceClient


__all__ = [
    "ConfigLookupProtocol",
    "InMemoryPageDirectory",
    "InMemoryPageProps",
    "InMemoryReferenceStore",
    "PageDirectoryProtocol",
    "PagePropsReferenceStore",
    "PagePropsSourceProtocol",
    "ReferenceStoreProtocol",
    "ReferencesServiceClient",
    "create_page_directory",
    "create_reference_store",
    "encode_references_data",
]
