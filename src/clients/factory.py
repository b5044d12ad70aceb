"""Backend construction from settings."""

from __future__ import annotations

from src.clients.memory_store import InMemoryReferenceStore
from src.clients.page_directory import InMemoryPageDirectory
from src.clients.page_props import InMemoryPageProps, PagePropsReferenceStore
from src.clients.protocols import ReferenceStoreProtocol
from src.clients.references_service import ReferencesServiceClient
from src.core.config import Settings
from src.core.logging import get_logger


logger = get_logger(__name__)


def create_reference_store(settings: Settings) -> ReferenceStoreProtocol:
    """Create the reference store selected by reference_store_backend.

    Args:
        settings: Application settings

    Returns:
        Configured reference store
    """
    backend = settings.reference_store_backend
    path = settings.reference_data_path
    logger.info("Creating reference store", backend=backend, data_path=path)

    if backend == "http":
        return ReferencesServiceClient(
            base_url=settings.references_service_url,
            timeout=settings.references_timeout_seconds,
        )
    if backend == "page_props":
        source = InMemoryPageProps.from_file(path) if path else InMemoryPageProps()
        return PagePropsReferenceStore(source)
    return InMemoryReferenceStore.from_file(path) if path else InMemoryReferenceStore()


def create_page_directory(settings: Settings) -> InMemoryPageDirectory:
    """Create the page directory, seeded from reference_data_path when set."""
    if settings.reference_data_path:
        return InMemoryPageDirectory.from_file(settings.reference_data_path)
    return InMemoryPageDirectory()
