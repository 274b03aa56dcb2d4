"""
LOS Python Client - HTTP Transport

This module provides the transport resources use to talk to the API.

Resources depend only on the ``ApiClient`` protocol: a single
``make_call`` coroutine. ``HttpApiClient`` implements it on top of
``httpx.AsyncClient``, attaches authentication, and turns error responses
into ``TransportError`` subclasses. Timeouts and cancellation are never
retried or swallowed here beyond what the underlying httpx transport is
configured to do.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from losclient import __version__
from losclient.exceptions import NetworkError, RequestTimeoutError, raise_for_status
from losclient.models import to_wire
from losclient.multipart import MultipartPayload

logger = logging.getLogger("losclient")


JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class RequestOptions:
    """
    Per-call transport options.

    Attributes:
        headers: Extra headers for this call
        content_type: Body content type. ``None`` lets the transport frame
            the body itself, which multipart uploads require.
    """
    headers: Optional[Dict[str, str]] = None
    content_type: Optional[str] = JSON_CONTENT_TYPE


MULTIPART_OPTIONS = RequestOptions(content_type=None)


class ApiClient(Protocol):
    """Transport collaborator every resource is constructed with."""

    async def make_call(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        ...


class HttpApiClient:
    """
    ``ApiClient`` backed by ``httpx.AsyncClient``.

    Args:
        base_url: Base URL of the API
        api_key: API key sent as a bearer token
        timeout: Request timeout in seconds
        max_retries: Connection retry attempts for the httpx transport
        headers: Headers added to every request
        http_client: Pre-configured ``httpx.AsyncClient`` to use instead of
            creating one

    Example:
        >>> api_client = HttpApiClient("https://los.example.com/api", api_key="...")
        >>> application = await api_client.make_call("/applications/app_123")
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        headers: Optional[Dict[str, str]] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._max_retries = max_retries
        self._headers = dict(headers or {})
        self._http_client = http_client

    @property
    def base_url(self) -> str:
        return self._base_url

    def _default_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": JSON_CONTENT_TYPE,
            "User-Agent": f"losclient-python/{__version__}",
        }
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        headers.update(self._headers)
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._http_client is None:
            transport = httpx.AsyncHTTPTransport(retries=self._max_retries)

            self._http_client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._default_headers(),
                timeout=httpx.Timeout(self._timeout),
                transport=transport,
                follow_redirects=True,
            )

        return self._http_client

    async def make_call(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
        options: Optional[RequestOptions] = None,
    ) -> Any:
        """
        Make an HTTP request to the API.

        Args:
            path: Endpoint path, optionally with an encoded query string
            method: HTTP method (GET, POST, PUT, DELETE)
            body: JSON-compatible body, model, or ``MultipartPayload``
            options: Extra headers and body content type

        Returns:
            Parsed JSON response, response text, or ``None`` for empty bodies

        Raises:
            AuthenticationError: If authentication fails
            NotFoundError: If resource is not found
            ValidationError: If request validation fails
            RateLimitError: If rate limit is exceeded
            ServerError: If server error occurs
            RequestTimeoutError: If the request times out
            NetworkError: If the server cannot be reached
        """
        options = options or RequestOptions()
        client = await self._get_client()

        request_headers: Dict[str, str] = dict(options.headers or {})
        request_kwargs: Dict[str, Any] = {}

        if isinstance(body, MultipartPayload):
            request_kwargs["files"] = body.to_httpx_files()
        elif body is not None:
            request_kwargs["json"] = to_wire(body)

        if options.content_type is not None and "files" not in request_kwargs:
            request_headers["Content-Type"] = options.content_type

        logger.debug(f"Making {method} request to {path}")

        try:
            response = await client.request(
                method=method,
                url=path,
                headers=request_headers,
                **request_kwargs,
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request timed out: {e}", timeout_seconds=self._timeout) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request failed: {e}") from e

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        """Handle API response and raise appropriate exceptions."""
        logger.debug(f"Response status: {response.status_code}")

        if response.status_code == 204 or (response.is_success and not response.content):
            return None

        if response.is_success:
            if response.headers.get("content-type", "").startswith(JSON_CONTENT_TYPE):
                return response.json()
            return response.text

        try:
            error_data = response.json()
        except ValueError:
            error_message = response.text or f"HTTP {response.status_code}"
        else:
            if isinstance(error_data, dict):
                error_message = error_data.get("message") or error_data.get("detail") or str(error_data)
            else:
                error_message = str(error_data)

        raise_for_status(
            response.status_code,
            error_message,
            retry_after=response.headers.get("Retry-After"),
            request_id=response.headers.get("X-Request-ID"),
        )

    async def close(self) -> None:
        """Close the async HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("HttpApiClient closed")

    async def __aenter__(self) -> "HttpApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"HttpApiClient(base_url='{self._base_url}')"
