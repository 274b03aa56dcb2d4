"""
LOS Python Client - API Versioning

This module decides, per call, whether a resource method is available for
the API version a client is bound to and which backend behavior serves it.

The compatibility table is keyed by ``(method, version)``. A missing entry
means the method is not supported for that version. Resources that expose
extra version-gated methods merge their entries into this table instead of
comparing versions themselves.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from losclient.exceptions import ApiVersionError


class ApiVersion(str, Enum):
    """API versions a client can be bound to."""
    LEGACY = "legacy"
    CURRENT = "current"


class Behavior(str, Enum):
    """Backend behavior a call resolves to."""
    OFFSET = "offset"
    SEARCH = "search"
    CURSOR = "cursor"
    PLAIN = "plain"


CompatibilityTable = Mapping[Tuple[str, ApiVersion], Behavior]


COMPATIBILITY_TABLE: CompatibilityTable = MappingProxyType({
    ("find", ApiVersion.LEGACY): Behavior.OFFSET,
    ("find", ApiVersion.CURRENT): Behavior.SEARCH,
    ("search", ApiVersion.CURRENT): Behavior.SEARCH,
    ("list", ApiVersion.CURRENT): Behavior.CURSOR,
})


def for_versions(
    method: str,
    behavior: Optional[Behavior],
    versions: Iterable[ApiVersion] = tuple(ApiVersion),
) -> Dict[Tuple[str, ApiVersion], Optional[Behavior]]:
    """
    Build table entries mapping ``method`` to one behavior for several versions.

    A ``None`` behavior marks the method as unsupported for those versions
    when the entries are merged as overrides.
    """
    return {(method, version): behavior for version in versions}


def merge_tables(
    base: CompatibilityTable,
    overrides: Optional[Mapping[Tuple[str, ApiVersion], Optional[Behavior]]] = None,
) -> CompatibilityTable:
    """Return a read-only table with ``overrides`` applied on top of ``base``."""
    merged = dict(base)
    for key, behavior in (overrides or {}).items():
        if behavior is None:
            merged.pop(key, None)
        else:
            merged[key] = behavior
    return MappingProxyType(merged)


def is_method_supported(
    method: str,
    version: ApiVersion,
    table: CompatibilityTable = COMPATIBILITY_TABLE,
) -> bool:
    """Check whether ``method`` is available for ``version``."""
    return (method, version) in table


class VersionGuard:
    """
    Holds the API version bound to one client instance.

    The guard is immutable: its version and table are fixed at construction,
    so concurrent calls on the same client can read it without locking.

    Example:
        >>> guard = VersionGuard(ApiVersion.LEGACY)
        >>> guard.resolve("find")
        <Behavior.OFFSET: 'offset'>
        >>> guard.is_method_supported("list")
        False
    """

    __slots__ = ("_version", "_table")

    def __init__(
        self,
        version: ApiVersion,
        table: CompatibilityTable = COMPATIBILITY_TABLE,
    ) -> None:
        object.__setattr__(self, "_version", ApiVersion(version))
        object.__setattr__(self, "_table", table)

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @property
    def version(self) -> ApiVersion:
        return self._version

    def is_method_supported(self, method: str) -> bool:
        return is_method_supported(method, self._version, self._table)

    def resolve(self, method: str) -> Behavior:
        """
        Return the behavior serving ``method`` for the bound version.

        Raises:
            ApiVersionError: If the method is not supported for the version
        """
        behavior = self._table.get((method, self._version))
        if behavior is None:
            raise ApiVersionError(method=method, api_version=self._version.value)
        return behavior

    def __repr__(self) -> str:
        return f"VersionGuard(version='{self._version.value}')"
