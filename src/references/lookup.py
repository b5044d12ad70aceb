"""Stored reference lookup (prop=references).

Returns the stored footnote data of each requested page as a keyed list,
visiting pages one at a time in ascending id order so that a full result
sink leaves a deterministic continuation point.
"""

from __future__ import annotations

from collections.abc import Iterable

from src.clients.protocols import ConfigLookupProtocol, ReferenceStoreProtocol
from src.core.exceptions import FeatureDisabledError, InvalidContinuationError
from src.core.logging import get_logger
from src.references.flatten import flatten_stored_references
from src.references.keys import ReferenceKeyFormatter
from src.references.models import LookupResult, Page
from src.references.result import QueryResult, ResultSinkProtocol


logger = get_logger(__name__)


STORAGE_FLAG = "reference_storage_enabled"
CONTINUE_PARAM = "rfcontinue"


def parse_continuation(token: str | None, parameter: str = CONTINUE_PARAM) -> int | None:
    """Parse a continuation token into a page id.

    The token must round-trip exactly through int(), so leading zeros,
    signs other than "-", and surrounding whitespace are rejected.

    Raises:
        InvalidContinuationError: If the token is not integer-formatted.
    """
    if token is None:
        return None
    try:
        start_id = int(token)
    except ValueError:
        raise InvalidContinuationError(token, parameter) from None
    if str(start_id) != token:
        raise InvalidContinuationError(token, parameter)
    return start_id


class ReferenceLookupEndpoint:
    """Paginated lookup of stored references for a set of pages.

    Attributes:
        config: Site configuration lookup
        store: Stored reference backend
        formatter: Reference anchor id builder
        cache_mode: Responses do not vary per requester
    """

    cache_mode = "public"

    def __init__(
        self,
        config: ConfigLookupProtocol,
        store: ReferenceStoreProtocol,
        formatter: ReferenceKeyFormatter | None = None,
    ) -> None:
        self.config = config
        self.store = store
        self.formatter = formatter or ReferenceKeyFormatter()

    async def lookup(
        self,
        pages: Iterable[Page],
        continue_token: str | None = None,
        sink: ResultSinkProtocol | None = None,
    ) -> LookupResult:
        """Look up stored references for pages, resuming at continue_token.

        Args:
            pages: Pages to look up; duplicates by id are visited once
            continue_token: Page id returned by a previous partial response
            sink: Result sink; a default-sized QueryResult when omitted

        Returns:
            LookupResult with the pages that fit and the resume cursor

        Raises:
            FeatureDisabledError: If reference storage is disabled.
            InvalidContinuationError: If continue_token is malformed.
        """
        if not self.config.get_boolean(STORAGE_FLAG):
            raise FeatureDisabledError(flag=STORAGE_FLAG)
        start_id = parse_continuation(continue_token)
        if sink is None:
            sink = QueryResult()

        ordered = sorted({page.page_id: page for page in pages}.values())
        if start_id is not None:
            ordered = [page for page in ordered if page.page_id >= start_id]

        result = LookupResult()
        for page in ordered:
            stored = await self.store.get_stored_references(page)
            references = flatten_stored_references(stored, self.formatter)
            if not sink.append(page.page_id, references):
                sink.set_continue(CONTINUE_PARAM, page.page_id)
                result.next_cursor = page.page_id
                if not result.pages:
                    logger.warning(
                        "First page does not fit into result",
                        page_id=page.page_id,
                        references=len(references),
                    )
                break
            result.pages[page.page_id] = references

        logger.debug(
            "Reference lookup finished",
            requested=len(ordered),
            returned=len(result.pages),
            next_cursor=result.next_cursor,
        )
        return result
