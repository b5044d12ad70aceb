"""Remote reference store HTTP client.

Reads stored reference data from a references service exposing
``GET /v1/pages/{page_id}/references``. A 404 means nothing is stored for
the page; any other failure is a lookup error.
"""

from __future__ import annotations

import logging

import httpx

from src.core.config import get_settings
from src.core.exceptions import ReferenceStoreError
from src.references.models import Page, StoredReferenceSet


logger = logging.getLogger(__name__)


class ReferencesServiceClient:
    """HTTP client for a remote reference store.

    Attributes:
        base_url: Base URL for the references service
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the references service client.

        Args:
            base_url: Service base URL. Defaults to config.
            timeout: Request timeout in seconds. Defaults to config.
            transport: Optional httpx transport (tests use httpx.MockTransport).
        """
        settings = get_settings()
        self.base_url = base_url or settings.references_service_url
        self.timeout = timeout if timeout is not None else settings.references_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_stored_references(self, page: Page) -> StoredReferenceSet | None:
        """Fetch stored references for a page.

        Raises:
            ReferenceStoreError: On HTTP errors other than 404, transport
                failures, or a non-object response body.
        """
        client = await self._get_client()
        try:
            response = await client.get(f"/v1/pages/{page.page_id}/references")
            if response.status_code == 404:
                return None
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Reference store request failed",
                extra={"page_id": page.page_id, "status": e.response.status_code},
            )
            raise ReferenceStoreError(
                f"Reference store returned HTTP {e.response.status_code}",
                page_id=page.page_id,
                status_code=e.response.status_code,
                cause=e,
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "Reference store unreachable",
                extra={"page_id": page.page_id, "error": str(e)},
            )
            raise ReferenceStoreError(
                f"Reference store unreachable: {e}",
                page_id=page.page_id,
                cause=e,
            ) from e
        except ValueError as e:
            raise ReferenceStoreError(
                "Reference store returned invalid JSON",
                page_id=page.page_id,
                cause=e,
            ) from e

        if data is None:
            return None
        if not isinstance(data, dict):
            raise ReferenceStoreError(
                "Reference store returned a non-object body",
                page_id=page.page_id,
            )
        return data
