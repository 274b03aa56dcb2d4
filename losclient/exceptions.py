"""
LOS Python Client - Exceptions

This module contains all custom exceptions used by the client.

Errors fall into three groups:

- ``ApiVersionError``: a method was invoked against an API version that
  does not support it. Raised before any request is sent.
- ``EncodingError``: a filter, sort or multipart input could not be
  encoded (duplicate keys, reversed ranges).
- ``TransportError`` and its children: failures raised by the HTTP
  transport. Resources never catch or reinterpret these.
"""

from typing import Optional, Dict, Any


class LosClientError(Exception):
    """
    Base exception for all LOS client errors.

    Attributes:
        message: Human-readable error message
        code: Error code if available
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', code='{self.code}')"


class ApiVersionError(LosClientError):
    """
    Raised when a method is not supported for the bound API version.

    Attributes:
        method: Name of the rejected method
        api_version: The version the client is bound to
    """

    def __init__(
        self,
        message: str = "Method is not supported for this API version",
        method: Optional[str] = None,
        api_version: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="API_VERSION_ERROR",
            details={"method": method, "api_version": api_version},
        )
        self.method = method
        self.api_version = api_version

    def __str__(self) -> str:
        base = super().__str__()
        if self.method and self.api_version:
            return f"{base} (method '{self.method}', version '{self.api_version}')"
        return base


class EncodingError(LosClientError):
    """
    Raised when request parameters cannot be encoded.

    This can occur when:
    - The same query key is produced by two different parameters
    - A range filter has its lower bound above its upper bound

    Attributes:
        key: The offending parameter name
    """

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message, code="ENCODING_ERROR", details={"key": key})
        self.key = key


class ResponseFormatError(LosClientError):
    """Raised when a response body does not have the expected envelope shape."""

    def __init__(self, message: str = "Unexpected response format") -> None:
        super().__init__(message, code="RESPONSE_FORMAT_ERROR")


class TransportError(LosClientError):
    """
    Base class for errors raised by the HTTP transport.

    Attributes:
        status_code: HTTP status code, if a response was received
    """

    def __init__(
        self,
        message: str = "Request failed",
        code: str = "TRANSPORT_ERROR",
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """
    Raised when authentication fails.

    This can occur when:
    - API key is invalid or expired
    - Account access token is missing or expired
    """

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, code="AUTHENTICATION_ERROR", status_code=401)


class AuthorizationError(TransportError):
    """Raised when the caller lacks permission for an action."""

    def __init__(self, message: str = "Authorization failed") -> None:
        super().__init__(message, code="AUTHORIZATION_ERROR", status_code=403)


class NotFoundError(TransportError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="NOT_FOUND", status_code=404)


class ConflictError(TransportError):
    """Raised when there's a resource conflict."""

    def __init__(self, message: str = "Resource conflict") -> None:
        super().__init__(message, code="CONFLICT", status_code=409)


class ValidationError(TransportError):
    """
    Raised when the backend rejects the request payload.

    Attributes:
        field_errors: Dictionary mapping field names to error messages
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, str]] = None,
        status_code: int = 422,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            status_code=status_code,
            details=field_errors,
        )
        self.field_errors = field_errors or {}

    def __str__(self) -> str:
        base = super().__str__()
        if self.field_errors:
            errors = ", ".join(f"{k}: {v}" for k, v in self.field_errors.items())
            return f"{base} ({errors})"
        return base


class RateLimitError(TransportError):
    """
    Raised when the API rate limit is exceeded.

    Attributes:
        retry_after: Number of seconds to wait before retrying
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: Optional[str] = None,
    ) -> None:
        super().__init__(message, code="RATE_LIMIT_ERROR", status_code=429)
        self.retry_after = int(retry_after) if retry_after and retry_after.isdigit() else None

    def __str__(self) -> str:
        base = super().__str__()
        if self.retry_after:
            return f"{base}. Retry after {self.retry_after} seconds."
        return base


class ServerError(TransportError):
    """
    Raised when a server error occurs.

    Attributes:
        request_id: Request ID for debugging
    """

    def __init__(
        self,
        message: str = "Server error",
        status_code: int = 500,
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(message, code="SERVER_ERROR", status_code=status_code)
        self.request_id = request_id

    def __str__(self) -> str:
        base = super().__str__()
        if self.request_id:
            return f"{base} (Request ID: {self.request_id})"
        return base


class RequestTimeoutError(TransportError):
    """Raised when a request times out."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout_seconds: Optional[float] = None,
    ) -> None:
        super().__init__(message, code="TIMEOUT")
        self.timeout_seconds = timeout_seconds

    def __str__(self) -> str:
        base = super().__str__()
        if self.timeout_seconds:
            return f"{base} after {self.timeout_seconds}s"
        return base


class NetworkError(TransportError):
    """Raised when the request could not reach the server."""

    def __init__(self, message: str = "Network error") -> None:
        super().__init__(message, code="NETWORK_ERROR")


def raise_for_status(
    status_code: int,
    message: str,
    retry_after: Optional[str] = None,
    request_id: Optional[str] = None,
) -> None:
    """
    Raise the exception matching an HTTP error status.

    Args:
        status_code: HTTP status code of the response
        message: Error message extracted from the response body
        retry_after: Value of the Retry-After header, if any
        request_id: Value of the request ID header, if any

    Raises:
        TransportError: The subclass matching ``status_code``
    """
    if status_code == 400:
        raise ValidationError(message, status_code=400)
    elif status_code == 401:
        raise AuthenticationError(message)
    elif status_code == 403:
        raise AuthorizationError(message)
    elif status_code == 404:
        raise NotFoundError(message)
    elif status_code == 409:
        raise ConflictError(message)
    elif status_code == 422:
        raise ValidationError(message)
    elif status_code == 429:
        raise RateLimitError(message, retry_after=retry_after)
    elif status_code >= 500:
        raise ServerError(message, status_code=status_code, request_id=request_id)
    else:
        raise TransportError(f"HTTP {status_code}: {message}", status_code=status_code)
