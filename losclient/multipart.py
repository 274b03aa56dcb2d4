"""
LOS Python Client - Multipart Payloads

This module describes multipart upload bodies as an ordered list of parts.
Byte-level framing is left to the HTTP transport; the builder only decides
which parts exist, their names and their order.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from losclient.encoding import format_scalar


DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class FieldPart:
    """A plain text form field."""
    name: str
    value: str


@dataclass(frozen=True)
class FilePart:
    """A binary form field carrying a file."""
    name: str
    content: bytes
    filename: str
    content_type: str = DEFAULT_FILE_CONTENT_TYPE


Part = Union[FieldPart, FilePart]


@dataclass(frozen=True)
class MultipartPayload:
    """Ordered, immutable multipart body description."""
    parts: Tuple[Part, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.parts)

    def __len__(self):
        return len(self.parts)

    @property
    def names(self) -> List[str]:
        return [part.name for part in self.parts]

    def get_field(self, name: str) -> Optional[str]:
        """Return the value of the first text field called ``name``."""
        for part in self.parts:
            if isinstance(part, FieldPart) and part.name == name:
                return part.value
        return None

    def to_httpx_files(self) -> List[Tuple[str, Tuple[Any, ...]]]:
        """
        Render the parts in the list form accepted by ``httpx``'s ``files=``.

        Text fields are sent without a filename, which keeps them ordinary
        form fields while preserving their position among the file parts.
        """
        rendered: List[Tuple[str, Tuple[Any, ...]]] = []
        for part in self.parts:
            if isinstance(part, FilePart):
                rendered.append((part.name, (part.filename, part.content, part.content_type)))
            else:
                rendered.append((part.name, (None, part.value.encode("utf-8"))))
        return rendered


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return format_scalar(value)


class MultipartBuilder:
    """
    Accumulates multipart parts in declaration order.

    Optional values that are ``None`` or empty are skipped, so no empty
    placeholders are ever sent.

    Example:
        >>> payload = (
        ...     MultipartBuilder()
        ...     .add_field("applicationId", "app_1")
        ...     .add_file("file", b"%PDF", "statement.pdf")
        ...     .add_field("anchor", None)
        ...     .build()
        ... )
        >>> payload.names
        ['applicationId', 'file']
    """

    def __init__(self) -> None:
        self._parts: List[Part] = []

    def add_field(self, name: str, value: Any) -> "MultipartBuilder":
        if value is None or value == "":
            return self
        self._parts.append(FieldPart(name, format_scalar(value)))
        return self

    def add_json(self, name: str, value: Any) -> "MultipartBuilder":
        """Add a structured value as a single compact JSON text part."""
        if value is None:
            return self
        text = json.dumps(value, separators=(",", ":"), default=_json_default)
        self._parts.append(FieldPart(name, text))
        return self

    def add_file(
        self,
        name: str,
        content: bytes,
        filename: str,
        content_type: str = DEFAULT_FILE_CONTENT_TYPE,
    ) -> "MultipartBuilder":
        self._parts.append(FilePart(name, bytes(content), filename, content_type))
        return self

    def add_indexed_field(
        self,
        group: str,
        index: int,
        name: str,
        value: Any,
    ) -> "MultipartBuilder":
        """Add ``group[index].name``, binding an option to the index-th file."""
        return self.add_field(indexed_field_name(group, index, name), value)

    def build(self) -> MultipartPayload:
        return MultipartPayload(tuple(self._parts))


def indexed_field_name(group: str, index: int, name: str) -> str:
    """Return the index-qualified name used for per-file batch options."""
    if index < 0:
        raise ValueError(f"Index must be non-negative, got {index}")
    return f"{group}[{index}].{name}"
