"""Unit tests for models and exceptions."""

from datetime import datetime

import pytest

from losclient.encoding import Range, SortDirection
from losclient.exceptions import (
    ApiVersionError,
    EncodingError,
    LosClientError,
    NotFoundError,
    RateLimitError,
    TransportError,
    ValidationError,
    raise_for_status,
)
from losclient.models import (
    Application,
    CreateApplicationDocumentFolderParams,
    FindApplicationsParams,
    SearchHighlight,
    to_camel,
    to_snake,
    to_wire,
)


class TestNameConversion:
    """Tests for camelCase/snake_case conversion."""

    def test_to_camel(self):
        """Test snake_case becomes camelCase."""
        assert to_camel("filter_by_variables") == "filterByVariables"
        assert to_camel("id") == "id"

    def test_to_snake(self):
        """Test camelCase becomes snake_case."""
        assert to_snake("coborrowerIds") == "coborrower_ids"
        assert to_snake("transitionedToStatusAt") == "transitioned_to_status_at"


class TestApplicationModel:
    """Tests for the Application model."""

    def test_from_dict(self, application_data):
        """Test parsing an application."""
        application = Application.from_dict(application_data)

        assert application.id == "app_123"
        assert application.product["name"] == "Personal Loan"
        assert isinstance(application.updated_at, datetime)
        assert application.loan_amount == 25000

    def test_unknown_keys_ignored(self, application_data):
        """Test fields added by newer API versions do not break parsing."""
        application = Application.from_dict({**application_data, "newField": 1})

        assert application.id == "app_123"

    def test_item_highlights(self, application_data):
        """Test per-item search highlights are parsed."""
        application = Application.from_dict(
            {**application_data, "highlights": [{"field": "displayId", "matches": ["10"]}]}
        )

        assert application.highlights == [SearchHighlight(field="displayId", matches=["10"])]


class TestParams:
    """Tests for parameter serialization."""

    def test_find_params_to_dict(self):
        """Test find params use wire names and drop unset fields."""
        params = FindApplicationsParams(
            page_size=10,
            sort_by_variables={"loan_amount": SortDirection.ASC},
            filter_by_variables={"credit_score": Range(to=700)},
            visible_on_board=True,
        )

        assert params.to_dict() == {
            "pageSize": 10,
            "visibleOnBoard": True,
            "filterByVariables": {"credit_score": {"to": 700}},
            "sortByVariables": {"loan_amount": "asc"},
        }

    def test_to_query_keeps_ranges(self):
        """Test query params keep Range values while bodies unwrap them."""
        params = FindApplicationsParams(filter_by_variables={"credit_score": Range(to=700)})

        assert params.to_query() == {"filterByVariables": {"credit_score": Range(to=700)}}
        assert params.to_dict() == {"filterByVariables": {"credit_score": {"to": 700}}}

    def test_folder_parent(self):
        """Test nested folders keep their parent id."""
        params = CreateApplicationDocumentFolderParams(
            application_id="app_1", name="Income", parent_id="fld_1"
        )

        assert params.to_dict()["parentId"] == "fld_1"

    def test_to_wire_nested(self):
        """Test nested values become JSON-compatible."""
        assert to_wire({"when": datetime(2024, 1, 1), "dir": [SortDirection.DESC]}) == {
            "when": "2024-01-01T00:00:00",
            "dir": ["desc"],
        }


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_hierarchy(self):
        """Test every error shares the client base class."""
        assert issubclass(ApiVersionError, LosClientError)
        assert issubclass(EncodingError, LosClientError)
        assert issubclass(NotFoundError, TransportError)
        assert not issubclass(ApiVersionError, TransportError)

    def test_api_version_error_message(self):
        """Test the message names the method and version."""
        error = ApiVersionError(method="list", api_version="legacy")

        assert str(error) == (
            "[API_VERSION_ERROR] Method is not supported for this API version "
            "(method 'list', version 'legacy')"
        )

    def test_validation_error_fields(self):
        """Test field errors are listed in the message."""
        error = ValidationError("Invalid", field_errors={"productId": "required"})

        assert "productId: required" in str(error)
        assert error.status_code == 422

    def test_rate_limit_non_numeric_retry_after(self):
        """Test HTTP-date Retry-After values are ignored."""
        error = RateLimitError(retry_after="Wed, 21 Oct 2015 07:28:00 GMT")

        assert error.retry_after is None

    def test_raise_for_status(self):
        """Test status codes map to exception classes."""
        with pytest.raises(NotFoundError):
            raise_for_status(404, "missing")

        with pytest.raises(TransportError) as exc_info:
            raise_for_status(418, "teapot")

        assert exc_info.value.message == "HTTP 418: teapot"
