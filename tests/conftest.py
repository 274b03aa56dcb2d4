"""Shared pytest fixtures for testing."""

from typing import Any, Dict
from unittest.mock import AsyncMock

import pytest

from losclient.versioning import ApiVersion


# =============================================================================
# Transport Fixtures
# =============================================================================


@pytest.fixture
def api_client() -> AsyncMock:
    """Create a mock transport collaborator."""
    client = AsyncMock()
    client.make_call = AsyncMock(return_value=None)
    return client


@pytest.fixture(params=[ApiVersion.LEGACY, ApiVersion.CURRENT])
def any_version(request) -> ApiVersion:
    """Every supported API version."""
    return request.param


# =============================================================================
# Test Data Fixtures
# =============================================================================


@pytest.fixture
def application_data() -> Dict[str, Any]:
    """Raw application as returned by the API."""
    return {
        "id": "app_123",
        "organizationId": "org_1",
        "displayId": "1001",
        "variables": {"loan_amount": 25000, "borrower_first_name": "Ada"},
        "status": {"id": "st_new", "name": "New Application"},
        "borrowerId": "brw_1",
        "coborrowerIds": [],
        "teamMembers": [],
        "labels": [],
        "borrowerType": "person",
        "coborrowerTypes": [],
        "product": {"id": "prd_1", "name": "Personal Loan"},
        "createdAt": "2024-01-15T10:30:00.000Z",
        "updatedAt": "2024-01-16T08:00:00.000Z",
    }


@pytest.fixture
def document_data() -> Dict[str, Any]:
    """Raw application document as returned by the API."""
    return {
        "id": "doc_1",
        "type": "file",
        "name": "statement.pdf",
        "applicationId": "app_123",
        "parentId": None,
        "organizationId": "org_1",
        "extension": "pdf",
        "size": 1024,
        "createdAt": "2024-01-15T10:30:00Z",
        "updatedAt": "2024-01-15T10:30:00Z",
        "accessPermissions": [
            {"entityId": "brw_1", "entityType": "borrower", "accessGranted": True},
        ],
    }
