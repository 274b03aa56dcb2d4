"""
LOS Python Client

An async Python client for the loan origination platform API. Provides
typed access to applications, application documents, statuses, product
calculations and portal accounts.

Example:
    >>> from losclient import LosClient, ApiVersion, FindApplicationsParams, Range
    >>> async with LosClient(api_key="your-api-key", api_version=ApiVersion.CURRENT) as client:
    ...     result = await client.applications.find(
    ...         FindApplicationsParams(
    ...             status_ids=["st_new"],
    ...             filter_by_variables={"loan_amount": Range(from_=1000)},
    ...         )
    ...     )
    ...     print(result.total)
"""

__version__ = "1.0.0"
__license__ = "MIT"

from losclient.client import LosClient
from losclient.config import ClientConfig, DEFAULT_API_VERSION
from losclient.encoding import Range, SortDirection, encode_query, build_query_string
from losclient.models import (
    AccessPermissionEntityType,
    AccountInfo,
    AccountStatus,
    Application,
    ApplicationDocument,
    ApplicationDocumentAccessPermission,
    ApplicationDocumentType,
    ApplicationSortField,
    ApplicationStatus,
    AuthResponse,
    BorrowerType,
    CreateAccountParams,
    CreateApplicationDocumentFolderParams,
    CreateApplicationDocumentParams,
    CreateApplicationParams,
    CreateBorrowerParams,
    CreateIntermediaryParams,
    CreateManyApplicationDocumentParams,
    DocumentFileUpload,
    FindAccountsParams,
    FindApplicationDocumentsParams,
    FindApplicationsParams,
    ListApplicationParams,
    ProductCalculation,
    SearchHighlight,
    UpdateApplicationDocumentParams,
    UpdateApplicationParams,
)
from losclient.multipart import MultipartBuilder, MultipartPayload
from losclient.pagination import CursorPaginationResult, PaginationResult, paginate_cursor
from losclient.transport import ApiClient, HttpApiClient, RequestOptions
from losclient.versioning import ApiVersion, Behavior, VersionGuard
from losclient.exceptions import (
    LosClientError,
    ApiVersionError,
    EncodingError,
    ResponseFormatError,
    TransportError,
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ConflictError,
    ValidationError,
    RateLimitError,
    ServerError,
    RequestTimeoutError,
    NetworkError,
)

__all__ = [
    # Main client
    "LosClient",
    "ClientConfig",
    "DEFAULT_API_VERSION",

    # Versioning
    "ApiVersion",
    "Behavior",
    "VersionGuard",

    # Encoding
    "Range",
    "SortDirection",
    "encode_query",
    "build_query_string",
    "MultipartBuilder",
    "MultipartPayload",

    # Pagination
    "PaginationResult",
    "CursorPaginationResult",
    "paginate_cursor",

    # Transport
    "ApiClient",
    "HttpApiClient",
    "RequestOptions",

    # Models
    "AccessPermissionEntityType",
    "AccountInfo",
    "AccountStatus",
    "Application",
    "ApplicationDocument",
    "ApplicationDocumentAccessPermission",
    "ApplicationDocumentType",
    "ApplicationSortField",
    "ApplicationStatus",
    "AuthResponse",
    "BorrowerType",
    "CreateAccountParams",
    "CreateApplicationDocumentFolderParams",
    "CreateApplicationDocumentParams",
    "CreateApplicationParams",
    "CreateBorrowerParams",
    "CreateIntermediaryParams",
    "CreateManyApplicationDocumentParams",
    "DocumentFileUpload",
    "FindAccountsParams",
    "FindApplicationDocumentsParams",
    "FindApplicationsParams",
    "ListApplicationParams",
    "ProductCalculation",
    "SearchHighlight",
    "UpdateApplicationDocumentParams",
    "UpdateApplicationParams",

    # Exceptions
    "LosClientError",
    "ApiVersionError",
    "EncodingError",
    "ResponseFormatError",
    "TransportError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "ValidationError",
    "RateLimitError",
    "ServerError",
    "RequestTimeoutError",
    "NetworkError",
]
