"""
LOS Python Client - Base Resource

This module contains the base classes every API resource builds on.

``BaseResource`` wraps the transport with small request helpers.
``VersionedResource`` adds the version guard and the generic ``find``.
``SystemResource`` adds the rest of the CRUD surface shared by the
platform's system entities.
"""

from __future__ import annotations

import logging
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)
from urllib.parse import quote

from losclient.config import DEFAULT_API_VERSION
from losclient.encoding import QueryPairs, append_query, encode_query
from losclient.models import to_wire
from losclient.pagination import CursorPaginationResult, PaginationResolver, PaginationResult
from losclient.versioning import (
    COMPATIBILITY_TABLE,
    ApiVersion,
    Behavior,
    VersionGuard,
    merge_tables,
)

if TYPE_CHECKING:
    from losclient.transport import ApiClient, RequestOptions

logger = logging.getLogger("losclient")


T = TypeVar("T")
CreateP = TypeVar("CreateP")
UpdateP = TypeVar("UpdateP")
FindP = TypeVar("FindP")
ListP = TypeVar("ListP")

Params = Union[Mapping[str, Any], Any, None]


def params_to_dict(params: Params) -> Dict[str, Any]:
    """Turn a params object or mapping into a wire-keyed dictionary."""
    if params is None:
        return {}
    if hasattr(params, "to_query"):
        return params.to_query()
    if hasattr(params, "to_dict"):
        return params.to_dict()
    if isinstance(params, Mapping):
        return dict(params)
    raise TypeError(f"Unsupported params type: {type(params).__name__}")


class BaseResource:
    """
    Base class for all API resources.

    Provides common functionality for making API requests.
    """

    path: ClassVar[str] = ""

    def __init__(self, api_client: "ApiClient") -> None:
        """
        Initialize the resource.

        Args:
            api_client: Transport used for every call
        """
        self._api_client = api_client

    def _resource_path(self, *segments: Any) -> str:
        parts = [self.path] + [quote(str(segment), safe="") for segment in segments]
        return "/" + "/".join(parts)

    async def _get(
        self,
        path: str,
        query: Optional[QueryPairs] = None,
        options: Optional["RequestOptions"] = None,
    ) -> Any:
        """Make a GET request."""
        return await self._api_client.make_call(append_query(path, query or []), "GET", None, options)

    async def _post(
        self,
        path: str,
        body: Any = None,
        options: Optional["RequestOptions"] = None,
    ) -> Any:
        """Make a POST request."""
        return await self._api_client.make_call(path, "POST", body, options)

    async def _put(
        self,
        path: str,
        body: Any = None,
        options: Optional["RequestOptions"] = None,
    ) -> Any:
        """Make a PUT request."""
        return await self._api_client.make_call(path, "PUT", body, options)

    async def _delete(
        self,
        path: str,
        options: Optional["RequestOptions"] = None,
    ) -> Any:
        """Make a DELETE request."""
        return await self._api_client.make_call(path, "DELETE", None, options)


class VersionedResource(BaseResource, Generic[T, FindP]):
    """
    Resource bound to an API version.

    Subclasses set ``path`` and ``model`` and may add ``version_overrides``
    entries to the compatibility table. Every version-dependent method
    goes through ``_resolve`` so the bound version is the only input.
    """

    model: ClassVar[Type[Any]]
    version_overrides: ClassVar[Mapping[Tuple[str, ApiVersion], Optional[Behavior]]] = {}

    # Path suffix each backend behavior is served from.
    behavior_paths: ClassVar[Mapping[Behavior, str]] = {
        Behavior.OFFSET: "",
        Behavior.SEARCH: "search",
        Behavior.CURSOR: "list",
        Behavior.PLAIN: "",
    }

    def __init__(
        self,
        api_client: "ApiClient",
        api_version: Optional[ApiVersion] = None,
    ) -> None:
        super().__init__(api_client)
        table = merge_tables(COMPATIBILITY_TABLE, self.version_overrides)
        self._guard = VersionGuard(api_version or DEFAULT_API_VERSION, table)

    @property
    def api_version(self) -> ApiVersion:
        return self._guard.version

    @property
    def version_guard(self) -> VersionGuard:
        return self._guard

    def _parse_item(self, data: Dict[str, Any]) -> T:
        return self.model.from_dict(data)

    def _resolve(self, method: str) -> Behavior:
        behavior = self._guard.resolve(method)
        logger.debug(
            f"{self.__class__.__name__}.{method} resolved to {behavior.value} "
            f"for API version {self._guard.version.value}"
        )
        return behavior

    async def _fetch(
        self,
        behavior: Behavior,
        params: Params,
    ) -> Union[PaginationResult[T], CursorPaginationResult[T], List[T]]:
        wire_params = params_to_dict(params)
        query = encode_query(wire_params)

        suffix = self.behavior_paths[behavior]
        path = self._resource_path(suffix) if suffix else self._resource_path()

        payload = await self._get(path, query)
        return PaginationResolver.resolve(behavior, payload, self._parse_item, request=wire_params)

    async def find(self, params: FindP) -> Union[PaginationResult[T], List[T]]:
        """
        Find items matching ``params``.

        Legacy-bound clients use offset pagination and get ``page`` and
        ``page_size`` back; newer versions are served by the search backend
        and get ``highlights``. Both expose ``items`` and ``total``.

        Raises:
            ApiVersionError: If ``find`` is unavailable for the bound version
            EncodingError: If ``params`` cannot be encoded
        """
        return await self._fetch(self._resolve("find"), params)


class SystemResource(
    VersionedResource[T, FindP],
    Generic[T, CreateP, UpdateP, FindP, ListP],
):
    """
    Generic CRUD resource for a platform entity.

    Example:
        >>> applications = ApplicationsResource(api_client, ApiVersion.CURRENT)
        >>> page = await applications.find(FindApplicationsParams(search="smith"))
        >>> batch = await applications.list(ListApplicationParams(limit=50))
    """

    async def search(self, params: FindP) -> PaginationResult[T]:
        """Run a relevance-ranked search. Unavailable for legacy-bound clients."""
        return await self._fetch(self._resolve("search"), params)

    async def list(self, params: Optional[ListP] = None) -> CursorPaginationResult[T]:
        """
        Fetch one cursor-paginated batch.

        Raises:
            ApiVersionError: If the client is bound to the legacy version.
                No request is sent in that case.
        """
        return await self._fetch(self._resolve("list"), params)

    async def get(self, id: str) -> T:
        payload = await self._get(self._resource_path(id))
        return self._parse_item(payload)

    async def create(self, params: CreateP) -> T:
        payload = await self._post(self._resource_path(), to_wire(params))
        return self._parse_item(payload)

    async def update(self, id: str, params: UpdateP) -> T:
        payload = await self._put(self._resource_path(id), to_wire(params))
        return self._parse_item(payload)

    async def delete(self, id: str) -> None:
        await self._delete(self._resource_path(id))
