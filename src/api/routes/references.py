"""Stored references API route.

GET /v1/query/references returns the stored reference lists of the requested
pages, paginated by page with the ``rfcontinue`` parameter.

Anti-Patterns Avoided:
- ANTI_PATTERN_ANALYSIS §3.1: No bare except clauses
- ANTI_PATTERN_ANALYSIS §4.1: Cognitive complexity < 15 per function
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Query, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, Field

from src.api.error_handlers import ErrorResponse
from src.clients.protocols import PageDirectoryProtocol
from src.core.config import get_settings
from src.references.lookup import ReferenceLookupEndpoint
from src.references.result import QueryResult


logger = logging.getLogger(__name__)


# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/v1/query",
    tags=["References"],
)


# =============================================================================
# Response Models
# =============================================================================


class PageReferences(BaseModel):
    """Stored references of one page, keyed by reference id."""

    pageid: int = Field(..., description="Page id")
    title: str = Field(default="", description="Page title")
    references: dict[str, dict[str, Any]] = Field(
        default_factory=dict,
        description="Reference id -> stored reference record",
    )


class QueryBlock(BaseModel):
    """Query results block."""

    pages: list[PageReferences] = Field(default_factory=list)
    missing: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Requested page ids or titles that do not exist",
    )


class ReferencesResponse(BaseModel):
    """Response model for the references query."""

    model_config = ConfigDict(populate_by_name=True)

    batchcomplete: bool = Field(default=True, description="All pages were processed")
    continue_: dict[str, str] | None = Field(
        default=None,
        alias="continue",
        description="Parameters to pass to resume the query",
    )
    query: QueryBlock = Field(default_factory=QueryBlock)


# =============================================================================
# Dependency Wiring
# =============================================================================

_endpoint: ReferenceLookupEndpoint | None = None
_directory: PageDirectoryProtocol | None = None


def set_lookup_endpoint(endpoint: ReferenceLookupEndpoint | None) -> None:
    """Set the lookup endpoint (application startup and tests)."""
    global _endpoint
    _endpoint = endpoint


def set_page_directory(directory: PageDirectoryProtocol | None) -> None:
    """Set the page directory (application startup and tests)."""
    global _directory
    _directory = directory


def get_lookup_endpoint() -> ReferenceLookupEndpoint:
    if _endpoint is None:
        raise RuntimeError("Reference lookup endpoint is not configured")
    return _endpoint


def get_page_directory() -> PageDirectoryProtocol:
    if _directory is None:
        raise RuntimeError("Page directory is not configured")
    return _directory


# =============================================================================
# Helpers
# =============================================================================


def split_multi_value(value: str | None) -> list[str]:
    """Split a pipe-separated parameter, dropping empty items."""
    if not value:
        return []
    return [item for item in value.split("|") if item.strip()]


def parse_page_ids(value: str | None) -> list[int]:
    """Parse the pageids parameter.

    Raises:
        RequestValidationError: If an item is not an integer.
    """
    page_ids = []
    for item in split_multi_value(value):
        try:
            page_ids.append(int(item))
        except ValueError:
            raise RequestValidationError([{
                "loc": ("query", "pageids"),
                "msg": f"Invalid page id: {item!r}",
                "type": "int_parsing",
            }]) from None
    return page_ids


def cache_control_header(max_age: int, s_maxage: int) -> str:
    return f"public, max-age={max_age}, s-maxage={s_maxage}"


# =============================================================================
# Endpoints
# =============================================================================


@router.get(
    "/references",
    response_model=ReferencesResponse,
    responses={
        200: {"description": "Stored references of the requested pages"},
        400: {"model": ErrorResponse, "description": "Invalid continuation token"},
        422: {"model": ErrorResponse, "description": "Invalid parameters"},
        502: {"model": ErrorResponse, "description": "Reference store failure"},
        503: {"model": ErrorResponse, "description": "Reference storage disabled"},
    },
)
async def query_references(
    response: Response,
    pageids: str | None = Query(default=None, description="Pipe-separated page ids"),
    titles: str | None = Query(default=None, description="Pipe-separated page titles"),
    rfcontinue: str | None = Query(
        default=None,
        description="When more results are available, use this to continue",
    ),
) -> ReferencesResponse:
    """Return stored references for the requested pages.

    Pages are processed in ascending id order. When the result size limit
    is reached, ``continue.rfcontinue`` holds the page id to resume from.
    """
    page_ids = parse_page_ids(pageids)
    requested_titles = split_multi_value(titles)

    endpoint = get_lookup_endpoint()
    page_set = await get_page_directory().resolve(page_ids, requested_titles)

    settings = get_settings()
    sink = QueryResult(max_size=settings.max_result_size)
    result = await endpoint.lookup(page_set.pages, continue_token=rfcontinue, sink=sink)

    titles_by_id = {page.page_id: page.title for page in page_set.pages}
    pages = [
        PageReferences(pageid=page_id, title=titles_by_id.get(page_id, ""), references=references)
        for page_id, references in result.pages.items()
    ]

    logger.info(
        "References query served",
        extra={
            "pages": len(pages),
            "missing": len(page_set.missing),
            "continue": result.next_cursor,
        },
    )

    if endpoint.cache_mode == "public":
        response.headers["Cache-Control"] = cache_control_header(
            settings.cache_max_age, settings.cache_s_maxage
        )

    return ReferencesResponse(
        batchcomplete=sink.batch_complete,
        continue_=sink.continue_block(),
        query=QueryBlock(pages=pages, missing=page_set.missing),
    )
