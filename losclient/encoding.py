"""
LOS Python Client - Query Encoding

This module turns structured filter, sort and pagination parameters into
the ordered ``(key, value)`` pairs sent as a query string.

Encoding rules:

- A scalar becomes one pair ``(name, value)``.
- A list or tuple becomes one pair per element, all sharing ``name``, in
  input order. The backend treats repeated keys as OR-matching.
- A ``Range`` becomes ``name.from`` and ``name.to``, each emitted only
  when the bound is set. Both bounds are inclusive.
- Any other nested mapping is flattened with dots, so
  ``{"sortByFields": {"createdAt": "desc"}}`` becomes
  ``sortByFields.createdAt=desc``.
- ``None`` is omitted at every level.

Keys keep the input order. Two different parameters producing the same key
is a caller error and raises ``EncodingError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

from losclient.exceptions import EncodingError


QueryPairs = List[Tuple[str, str]]
QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


class SortDirection(str, Enum):
    """Sort direction for sort specifications."""
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Range:
    """
    Open or closed range filter.

    Attributes:
        from_: Lower bound, inclusive. ``None`` leaves the range open below.
        to: Upper bound, inclusive. ``None`` leaves the range open above.
    """
    from_: Optional[Any] = None
    to: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in (("from", self.from_), ("to", self.to)) if v is not None}


def format_scalar(value: Any) -> str:
    """Render a single scalar as query text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_scalar(value.value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _comparable(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value
    text = format_scalar(value)
    try:
        number = Decimal(text)
    except InvalidOperation:
        return text
    return text if number.is_nan() else number


def _check_range_order(name: str, lower: Any, upper: Any) -> None:
    if lower is None or upper is None:
        return
    low, high = _comparable(lower), _comparable(upper)
    if type(low) is not type(high):
        return
    if low > high:
        raise EncodingError(
            f"Range '{name}' has 'from' ({format_scalar(lower)}) greater than "
            f"'to' ({format_scalar(upper)})",
            key=name,
        )


def _encode_value(
    name: str,
    value: Any,
    origin: Tuple[Any, ...],
) -> Iterator[Tuple[str, str, Tuple[Any, ...]]]:
    if value is None:
        return

    if isinstance(value, Range):
        lower, upper = value.from_, value.to
        _check_range_order(name, lower, upper)
        if lower is not None:
            yield f"{name}.from", format_scalar(lower), origin + ("from",)
        if upper is not None:
            yield f"{name}.to", format_scalar(upper), origin + ("to",)
        return

    if isinstance(value, Mapping):
        for key, nested in value.items():
            yield from _encode_value(f"{name}.{key}", nested, origin + (key,))
        return

    if isinstance(value, (list, tuple)):
        for element in value:
            if element is None:
                continue
            if isinstance(element, (Mapping, list, tuple, Range)):
                raise EncodingError(
                    f"Parameter '{name}' must contain only scalar values",
                    key=name,
                )
            yield name, format_scalar(element), origin
        return

    yield name, format_scalar(value), origin


def encode_query(params: Optional[QueryParams]) -> QueryPairs:
    """
    Encode parameters into an ordered list of query pairs.

    Args:
        params: Mapping of parameter name to value, or an iterable of
            ``(name, value)`` pairs

    Returns:
        List of ``(key, value)`` string pairs in input order

    Raises:
        EncodingError: If two parameters produce the same key, or a range
            has its lower bound above its upper bound

    Example:
        >>> encode_query({
        ...     "status": ["active", "pending"],
        ...     "createdAt": Range(from_="2024-01-01"),
        ... })
        [('status', 'active'), ('status', 'pending'), ('createdAt.from', '2024-01-01')]
    """
    if not params:
        return []

    items = params.items() if isinstance(params, Mapping) else params

    pairs: QueryPairs = []
    origins: Dict[str, Tuple[Any, ...]] = {}

    for index, (name, value) in enumerate(items):
        for key, text, origin in _encode_value(str(name), value, (index, name)):
            owner = origins.setdefault(key, origin)
            if owner != origin:
                raise EncodingError(f"Duplicate query parameter '{key}'", key=key)
            pairs.append((key, text))

    return pairs


def build_query_string(params: Optional[QueryParams]) -> str:
    """Encode parameters into a URL query string (without the leading ``?``)."""
    return urlencode(encode_query(params))


def append_query(path: str, pairs: QueryPairs) -> str:
    """Append already encoded pairs to ``path``."""
    if not pairs:
        return path
    return f"{path}?{urlencode(pairs)}"


def with_query(path: str, params: Optional[QueryParams]) -> str:
    """Append the encoded query string for ``params`` to ``path``."""
    return append_query(path, encode_query(params))
