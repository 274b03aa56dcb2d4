"""
LOS Python Client - Pagination

This module normalizes the response envelopes returned by list-style
endpoints into result objects callers can use without knowing which
backend behavior produced them.

The envelope shape is always chosen before the request is sent, from the
``Behavior`` the version guard resolved. Responses are never inspected to
guess their shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    TypeVar,
    Union,
)

from losclient.exceptions import ResponseFormatError
from losclient.models import SearchHighlight
from losclient.versioning import Behavior


T = TypeVar("T")


@dataclass
class PaginationResult(Generic[T]):
    """
    Result of a ``find`` call.

    Offset-paginated results carry ``page`` and ``page_size``; search
    results carry ``highlights``. ``items`` and ``total`` are always set.

    Attributes:
        items: Items on this page
        total: Total number of matching items
        page: Page number, for offset results
        page_size: Page size, for offset results
        highlights: Matched spans, for search results
    """
    items: List[T]
    total: int
    page: Optional[int] = None
    page_size: Optional[int] = None
    highlights: List[SearchHighlight] = field(default_factory=list)

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)


@dataclass
class CursorPaginationResult(Generic[T]):
    """
    Result of a ``list`` call.

    Attributes:
        items: Items in this batch
        next_cursor: Token for the next batch; ``None`` when exhausted
        has_more: Whether more items exist
    """
    items: List[T]
    next_cursor: Optional[str] = None
    has_more: bool = False

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)


ParseItem = Callable[[Dict[str, Any]], T]


def _require_mapping(payload: Any, behavior: Behavior) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ResponseFormatError(
            f"Expected a {behavior.value} envelope object, got {type(payload).__name__}"
        )
    return payload


def _require_items(envelope: Mapping[str, Any], behavior: Behavior) -> List[Any]:
    items = envelope.get("items")
    if not isinstance(items, list):
        raise ResponseFormatError(f"{behavior.value} envelope is missing 'items'")
    return items


def _require_total(envelope: Mapping[str, Any], behavior: Behavior) -> int:
    total = envelope.get("total")
    if not isinstance(total, int) or isinstance(total, bool):
        raise ResponseFormatError(f"{behavior.value} envelope is missing 'total'")
    return total


class PaginationResolver:
    """Turns raw envelopes into result objects for a pre-selected behavior."""

    @staticmethod
    def resolve_offset(
        payload: Any,
        parse_item: ParseItem,
        request: Optional[Mapping[str, Any]] = None,
    ) -> PaginationResult:
        envelope = _require_mapping(payload, Behavior.OFFSET)
        request = request or {}
        return PaginationResult(
            items=[parse_item(item) for item in _require_items(envelope, Behavior.OFFSET)],
            total=_require_total(envelope, Behavior.OFFSET),
            page=envelope.get("page", request.get("page")),
            page_size=envelope.get("pageSize", request.get("pageSize")),
        )

    @staticmethod
    def resolve_search(payload: Any, parse_item: ParseItem) -> PaginationResult:
        envelope = _require_mapping(payload, Behavior.SEARCH)
        return PaginationResult(
            items=[parse_item(item) for item in _require_items(envelope, Behavior.SEARCH)],
            total=_require_total(envelope, Behavior.SEARCH),
            highlights=[
                SearchHighlight.from_dict(h) for h in envelope.get("highlights") or []
            ],
        )

    @staticmethod
    def resolve_cursor(payload: Any, parse_item: ParseItem) -> CursorPaginationResult:
        envelope = _require_mapping(payload, Behavior.CURSOR)
        return CursorPaginationResult(
            items=[parse_item(item) for item in _require_items(envelope, Behavior.CURSOR)],
            next_cursor=envelope.get("nextCursor"),
            has_more=bool(envelope.get("hasMore", False)),
        )

    @staticmethod
    def resolve_plain(payload: Any, parse_item: ParseItem) -> List[Any]:
        if not isinstance(payload, list):
            raise ResponseFormatError(
                f"Expected a list response, got {type(payload).__name__}"
            )
        return [parse_item(item) for item in payload]

    @classmethod
    def resolve(
        cls,
        behavior: Behavior,
        payload: Any,
        parse_item: ParseItem,
        request: Optional[Mapping[str, Any]] = None,
    ) -> Union[PaginationResult, CursorPaginationResult, List[Any]]:
        """
        Interpret ``payload`` as the envelope belonging to ``behavior``.

        Args:
            behavior: Behavior selected before the request was dispatched
            payload: Parsed response body
            parse_item: Converts one raw item into a model
            request: Encoded request parameters, used as a fallback for
                offset page metadata

        Raises:
            ResponseFormatError: If the payload does not match the envelope
        """
        if behavior is Behavior.OFFSET:
            return cls.resolve_offset(payload, parse_item, request)
        if behavior is Behavior.SEARCH:
            return cls.resolve_search(payload, parse_item)
        if behavior is Behavior.CURSOR:
            return cls.resolve_cursor(payload, parse_item)
        if behavior is Behavior.PLAIN:
            return cls.resolve_plain(payload, parse_item)
        raise ValueError(f"Unknown behavior: {behavior}")


async def paginate_cursor(
    fetch: Callable[[Optional[str]], Awaitable[CursorPaginationResult[T]]],
    max_items: Optional[int] = None,
) -> AsyncIterator[T]:
    """
    Iterate over every item of a cursor listing.

    Args:
        fetch: Called with the current cursor (``None`` first) and returns
            one batch
        max_items: Stop after yielding this many items

    Example:
        >>> async for application in paginate_cursor(
        ...     lambda cursor: client.applications.list(ListApplicationParams(cursor=cursor))
        ... ):
        ...     print(application.display_id)
    """
    cursor: Optional[str] = None
    yielded = 0
    while True:
        batch = await fetch(cursor)
        for item in batch.items:
            if max_items is not None and yielded >= max_items:
                return
            yield item
            yielded += 1
        if not batch.has_more or not batch.next_cursor:
            return
        cursor = batch.next_cursor
