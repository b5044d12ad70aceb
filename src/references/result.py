"""Size-bounded query result sink.

Mirrors the host API result container: page data is accepted only while the
accumulated result stays within a byte budget, and a rejected page becomes
the continuation point.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


DEFAULT_MAX_RESULT_SIZE = 8 * 1024 * 1024


@runtime_checkable
class ResultSinkProtocol(Protocol):
    """Protocol for paginated result sinks.

    Methods:
        append: Add a page's keyed collection if it fits
        set_continue: Record a continuation parameter
    """

    def append(self, page_id: int, items: dict[str, Any]) -> bool:
        """Add items under page_id.

        Returns:
            False (and adds nothing) when the items would exceed the limit.
        """
        ...

    def set_continue(self, parameter: str, value: int | str) -> None:
        """Record a continuation parameter for the next request."""
        ...


def value_size(value: Any) -> int:
    """Size of a result value: string length of every scalar leaf.

    Mapping keys are not counted. None and False count zero, True counts one.
    """
    if isinstance(value, dict):
        return sum(value_size(item) for item in value.values())
    if isinstance(value, (list, tuple)):
        return sum(value_size(item) for item in value)
    if value is None or value is False:
        return 0
    if value is True:
        return 1
    return len(str(value))


class QueryResult:
    """In-memory result sink with a size budget.

    Attributes:
        max_size: Byte budget for all accepted page data
        size: Accumulated size of accepted data
        pages: Page id -> accepted items, in insertion order
        continuation: Continuation parameters set during execution
    """

    def __init__(self, max_size: int = DEFAULT_MAX_RESULT_SIZE) -> None:
        self.max_size = max_size
        self.size = 0
        self.pages: dict[int, dict[str, Any]] = {}
        self.continuation: dict[str, str] = {}

    def append(self, page_id: int, items: dict[str, Any]) -> bool:
        new_size = value_size(items)
        if self.size + new_size > self.max_size:
            return False
        self.size += new_size
        self.pages.setdefault(page_id, {}).update(items)
        return True

    def set_continue(self, parameter: str, value: int | str) -> None:
        self.continuation[parameter] = str(value)

    @property
    def batch_complete(self) -> bool:
        return not self.continuation

    def continue_block(self) -> dict[str, str] | None:
        """Continuation block for the response, or None when complete.

        The ``continue`` entry tells clients which generator and prop
        modules are still in progress; there is no generator here.
        """
        if not self.continuation:
            return None
        return {**self.continuation, "continue": "||"}
