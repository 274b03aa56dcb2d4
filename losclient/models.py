"""
LOS Python Client - Data Models

This module contains the entity models returned by the API and the
parameter objects accepted by resource methods.

Models are dataclasses with snake_case attributes. The API speaks
camelCase; ``from_dict`` and ``to_dict`` translate between the two.
Free-form mappings such as application variables keep their keys as-is.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from losclient.encoding import Range, SortDirection


_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase``."""
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def to_snake(name: str) -> str:
    """Convert ``camelCase`` to ``snake_case``."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def parse_datetime(value: Any) -> Any:
    """Parse an ISO-8601 timestamp, leaving anything else untouched."""
    if not isinstance(value, str):
        return value
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value


def to_wire(value: Any, keep_ranges: bool = False) -> Any:
    """
    Convert a value into JSON-compatible data for request bodies.

    With ``keep_ranges`` set, ``Range`` values are left as they are so the
    query encoder can tell them apart from nested mappings.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Range):
        return value if keep_ranges else value.to_dict()
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {k: to_wire(v, keep_ranges) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(v, keep_ranges) for v in value]
    return value


class BaseModel:
    """Base class for all models with common functionality."""

    # Attribute name -> wire name, for fields that don't follow camelCase.
    _wire_names: ClassVar[Dict[str, str]] = {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert model to a camelCase dictionary, omitting ``None`` values."""
        return self._wire_fields(keep_ranges=False)

    def to_query(self) -> Dict[str, Any]:
        """Like ``to_dict``, but keeps ``Range`` values for query encoding."""
        return self._wire_fields(keep_ranges=True)

    def _wire_fields(self, keep_ranges: bool) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            data[self._wire_names.get(f.name, to_camel(f.name))] = to_wire(value, keep_ranges)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create model instance from a camelCase dictionary."""
        reverse = {wire: attr for attr, wire in cls._wire_names.items()}
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = reverse.get(key, to_snake(key))
            if name not in known:
                continue
            values[name] = parse_datetime(value) if name.endswith("_at") else value
        return cls(**values)


# =============================================================================
# Enums
# =============================================================================

class BorrowerType(str, Enum):
    """Type of borrower on an application."""
    PERSON = "person"
    COMPANY = "company"


class ApplicationDefaultVariable(str, Enum):
    """System variables every application carries."""
    LOAN_AMOUNT = "loan_amount"


class ApplicationSortField(str, Enum):
    """Fields applications can be sorted by."""
    BORROWER_FULL_NAME = "borrowerFullName"
    DISPLAY_ID = "displayId"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    STATUS = "status"
    BORROWER_PHONE_NUMBER = "borrowerPhoneNumber"
    BORROWER_EMAIL = "borrowerEmail"
    LOAN_AMOUNT = "loanAmount"
    INTERMEDIARY = "intermediaryName"
    PRODUCT = "productName"
    SEARCH_RELEVANCE = "searchRelevance"


class ApplicationDocumentType(str, Enum):
    """Kind of node in an application's document tree."""
    FILE = "file"
    FOLDER = "folder"


class AccessPermissionEntityType(str, Enum):
    """Portal users a document can be shared with."""
    BORROWER = "borrower"
    INTERMEDIARY = "intermediary"


class AccountStatus(str, Enum):
    """Status of a portal account."""
    ACTIVE = "active"
    BLOCKED = "blocked"
    PENDING = "pending"


# =============================================================================
# Shared Models
# =============================================================================

@dataclass
class SearchHighlight(BaseModel):
    """Which parts of a field matched a search query."""
    field: str
    matches: List[str] = field(default_factory=list)


@dataclass
class UserShort(BaseModel):
    """Minimal user reference attached to audited entities."""
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_id: Optional[str] = None


# =============================================================================
# Applications
# =============================================================================

@dataclass
class Application(BaseModel):
    """Loan application."""
    id: str
    organization_id: Optional[str] = None
    display_id: Optional[str] = None
    variables: Dict[str, Any] = field(default_factory=dict)
    status: Dict[str, Any] = field(default_factory=dict)
    borrower_id: Optional[str] = None
    coborrower_ids: List[str] = field(default_factory=list)
    intermediary_id: Optional[str] = None
    decline_reasons: Optional[List[str]] = None
    team_members: List[Dict[str, Any]] = field(default_factory=list)
    labels: List[Dict[str, Any]] = field(default_factory=list)
    borrower_type: Optional[BorrowerType] = None
    coborrower_types: List[BorrowerType] = field(default_factory=list)
    product: Dict[str, Any] = field(default_factory=dict)
    testing: Optional[bool] = None
    created_by: Optional[UserShort] = None
    updated_by: Optional[UserShort] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    rejected_at: Optional[datetime] = None
    original_application_id: Optional[str] = None
    transitioned_to_status_at: Optional[datetime] = None
    highlights: Optional[List[SearchHighlight]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Application":
        application = super().from_dict(data)
        if application.borrower_type:
            application.borrower_type = BorrowerType(application.borrower_type)
        application.coborrower_types = [BorrowerType(t) for t in application.coborrower_types]
        if isinstance(application.created_by, dict):
            application.created_by = UserShort.from_dict(application.created_by)
        if isinstance(application.updated_by, dict):
            application.updated_by = UserShort.from_dict(application.updated_by)
        if application.highlights is not None:
            application.highlights = [SearchHighlight.from_dict(h) for h in application.highlights]
        return application

    @property
    def loan_amount(self) -> Any:
        return self.variables.get(ApplicationDefaultVariable.LOAN_AMOUNT.value)


@dataclass
class CreateBorrowerParams(BaseModel):
    """Inline borrower created together with an application."""
    type: BorrowerType
    variables: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CreateIntermediaryParams(BaseModel):
    """Inline intermediary created together with an application."""
    variables: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CreateApplicationParams(BaseModel):
    """Parameters for creating an application."""
    product_id: str
    borrower: Union[str, CreateBorrowerParams]
    co_borrowers: List[Union[str, CreateBorrowerParams]] = field(default_factory=list)
    variables: Dict[str, Any] = field(default_factory=dict)
    status_id: Optional[str] = None
    intermediary: Optional[Union[str, CreateIntermediaryParams]] = None
    team_members: Optional[List[str]] = None
    labels_ids: Optional[List[str]] = None


@dataclass
class UpdateApplicationParams(BaseModel):
    """Parameters for updating an application."""
    status_id: Optional[str] = None
    decline_reasons: Optional[List[str]] = None
    team_members: Optional[List[str]] = None
    labels_ids: Optional[List[str]] = None
    variables: Optional[Dict[str, Any]] = None


@dataclass
class PaginationParams(BaseModel):
    """Offset pagination and sorting shared by ``find`` calls."""
    page: Optional[int] = None
    page_size: Optional[int] = None
    sort_field: Optional[str] = None
    sort_direction: Optional[SortDirection] = None
    search: Optional[str] = None


@dataclass
class CursorPaginationParams(BaseModel):
    """Cursor pagination shared by ``list`` calls."""
    cursor: Optional[str] = None
    limit: Optional[int] = None


@dataclass
class FindApplicationsParams(PaginationParams):
    """
    Filters for searching applications.

    ``filter_by_variables`` maps a variable name to a value, a list of
    values (any may match) or a ``Range``. ``sort_by_fields`` and
    ``sort_by_variables`` are applied in mapping order.
    """
    display_id: Optional[str] = None
    status_ids: Optional[List[str]] = None
    label_ids: Optional[List[str]] = None
    intermediary_ids: Optional[List[str]] = None
    team_member_ids: Optional[List[str]] = None
    created_at_from: Optional[datetime] = None
    created_at_to: Optional[datetime] = None
    updated_at_from: Optional[datetime] = None
    updated_at_to: Optional[datetime] = None
    borrower_id: Optional[str] = None
    borrower_ids: Optional[List[str]] = None
    product_id: Optional[str] = None
    formatted_search: Optional[str] = None
    visible_on_board: Optional[bool] = None
    original_application: Optional[str] = None
    only_in_progress: Optional[bool] = None
    only_in_final_status: Optional[bool] = None
    search_by_fields: Optional[List[str]] = None
    search_by_variables: Optional[List[str]] = None
    filter_by_variables: Optional[Dict[str, Union[str, List[str], Range]]] = None
    sort_by_fields: Optional[Dict[str, SortDirection]] = None
    sort_by_variables: Optional[Dict[str, SortDirection]] = None
    borrower_id_targets: Optional[List[str]] = None


@dataclass
class ListApplicationParams(CursorPaginationParams):
    """Filters for cursor-listing applications."""
    borrower_id: Optional[str] = None
    statuses_ids: Optional[List[str]] = None
    product_id: Optional[str] = None


# =============================================================================
# Application Documents
# =============================================================================

@dataclass
class ApplicationDocumentAccessPermission(BaseModel):
    """Grants or revokes portal access to a document."""
    entity_id: str
    entity_type: AccessPermissionEntityType
    access_granted: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApplicationDocumentAccessPermission":
        permission = super().from_dict(data)
        permission.entity_type = AccessPermissionEntityType(permission.entity_type)
        return permission


@dataclass
class ApplicationDocument(BaseModel):
    """File or folder attached to an application."""
    id: str
    type: ApplicationDocumentType
    name: str
    application_id: str
    parent_id: Optional[str] = None
    organization_id: Optional[str] = None
    configuration_anchor: Optional[str] = None
    extension: Optional[str] = None
    size: Optional[int] = None
    task_id: Optional[str] = None
    testing: Optional[bool] = None
    created_by: Optional[UserShort] = None
    updated_by: Optional[UserShort] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    duplicated_from: Optional[str] = None
    access_permissions: Optional[List[ApplicationDocumentAccessPermission]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApplicationDocument":
        document = super().from_dict(data)
        document.type = ApplicationDocumentType(document.type)
        if isinstance(document.created_by, dict):
            document.created_by = UserShort.from_dict(document.created_by)
        if isinstance(document.updated_by, dict):
            document.updated_by = UserShort.from_dict(document.updated_by)
        if document.access_permissions is not None:
            document.access_permissions = [
                ApplicationDocumentAccessPermission.from_dict(p)
                for p in document.access_permissions
            ]
        return document


@dataclass
class DocumentFileUpload:
    """One file to upload, with its optional placement."""
    file: bytes
    file_name: str
    parent_id: Optional[str] = None
    anchor: Optional[str] = None
    content_type: str = "application/octet-stream"


@dataclass
class CreateApplicationDocumentParams:
    """Parameters for uploading a single application document."""
    application_id: str
    file: bytes
    file_name: str
    parent_id: Optional[str] = None
    anchor: Optional[str] = None
    content_type: str = "application/octet-stream"
    task_id: Optional[str] = None
    access_permissions: Optional[List[ApplicationDocumentAccessPermission]] = None


@dataclass
class CreateManyApplicationDocumentParams:
    """Parameters for uploading several documents in one request."""
    files: List[DocumentFileUpload]
    task_id: Optional[str] = None
    access_permissions: Optional[List[ApplicationDocumentAccessPermission]] = None


@dataclass
class FindApplicationDocumentsParams(BaseModel):
    """Filters for listing an application's documents."""
    application_id: str
    task_id: Optional[str] = None
    access_permission_entity_type: Optional[AccessPermissionEntityType] = None
    access_permission_entity_id: Optional[str] = None


@dataclass
class UpdateApplicationDocumentParams(BaseModel):
    """Parameters for renaming, moving or re-sharing a document."""
    name: Optional[str] = None
    parent_id: Optional[str] = None
    access_permissions: Optional[List[ApplicationDocumentAccessPermission]] = None


@dataclass
class CreateApplicationDocumentFolderParams(BaseModel):
    """Parameters for creating a document folder."""
    application_id: str
    name: str
    parent_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        # The backend expects an explicit null for top-level folders.
        data = super().to_dict()
        data["parentId"] = self.parent_id or None
        return data


# =============================================================================
# Statuses & Calculations
# =============================================================================

@dataclass
class ApplicationStatusRule(BaseModel):
    """Condition that must hold to move an application into a status."""
    id: str
    status_id: str
    product_id: Optional[str] = None
    organization_id: Optional[str] = None
    organization_version: Optional[int] = None
    condition: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ApplicationStatus(BaseModel):
    """Board column an application can be in."""
    id: str
    product_id: str
    name: str
    position: int = 0
    organization_id: Optional[str] = None
    organization_version: Optional[int] = None
    permission_groups_to_move_application_into_status: Dict[str, Any] = field(default_factory=dict)
    permission_groups_to_edit_application: Dict[str, Any] = field(default_factory=dict)
    permission_groups_able_to_view_application_on_board: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    rules: List[ApplicationStatusRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApplicationStatus":
        status = super().from_dict(data)
        status.rules = [ApplicationStatusRule.from_dict(r) for r in status.rules]
        return status


@dataclass
class ProductCalculation(BaseModel):
    """Formula computing one variable of a product."""
    id: str
    code: str
    product_id: str
    organization_id: Optional[str] = None
    organization_version: Optional[int] = None
    required_variables: List[str] = field(default_factory=list)
    variable: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# =============================================================================
# Accounts
# =============================================================================

@dataclass
class AccountPhone(BaseModel):
    """Phone number registered on an account."""
    value: str
    verified: bool = False
    deleted_at: Optional[datetime] = None


@dataclass
class AccountInfo(BaseModel):
    """
    Portal account.

    Attributes beyond the fixed ones (borrower or intermediary ids, custom
    profile fields) are kept in ``extra`` under their wire names.
    """
    id: str
    email: str
    status: AccountStatus = AccountStatus.ACTIVE
    phones: List[AccountPhone] = field(default_factory=list)
    is_email_not_verified: Optional[bool] = None
    is_mfa_incomplete: Optional[bool] = None
    last_active_at: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountInfo":
        known = {to_camel(f.name) for f in fields(cls)}
        account = super().from_dict(data)
        account.status = AccountStatus(account.status)
        account.phones = [AccountPhone.from_dict(p) for p in account.phones]
        account.extra = {k: v for k, v in data.items() if k not in known}
        return account


@dataclass
class AuthResponse(BaseModel):
    """Tokens issued for an account."""
    account_access_token: str
    refresh_token: Optional[str] = None


@dataclass
class CreateAccountParams(BaseModel):
    """Parameters for creating a portal account."""
    email: str
    phone: Optional[str] = None
    password: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {k: v for k, v in super().to_dict().items() if k != "extra"}
        data.update(self.extra)
        return data


@dataclass
class FindAccountsParams(BaseModel):
    """Filters for searching portal accounts."""
    ids: Optional[List[str]] = None
    emails: Optional[List[str]] = None
    phones: Optional[List[str]] = None
    borrower_ids: Optional[List[str]] = None
    intermediary_ids: Optional[List[str]] = None
