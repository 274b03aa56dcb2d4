"""Unit tests for the application documents resource."""

import pytest

from losclient.exceptions import ApiVersionError
from losclient.models import (
    AccessPermissionEntityType,
    ApplicationDocument,
    ApplicationDocumentType,
    CreateApplicationDocumentFolderParams,
    CreateApplicationDocumentParams,
    CreateManyApplicationDocumentParams,
    DocumentFileUpload,
    FindApplicationDocumentsParams,
    UpdateApplicationDocumentParams,
)
from losclient.multipart import MultipartPayload
from losclient.resources.application_documents import ApplicationDocumentsResource
from losclient.transport import MULTIPART_OPTIONS


class TestApplicationDocumentsFind:
    """Tests for listing documents."""

    @pytest.mark.asyncio
    async def test_find_returns_plain_list(self, api_client, any_version, document_data):
        """Test every version gets a plain list from the collection path."""
        api_client.make_call.return_value = [document_data]
        resource = ApplicationDocumentsResource(api_client, any_version)

        documents = await resource.find(
            FindApplicationDocumentsParams(
                application_id="app_123",
                access_permission_entity_type=AccessPermissionEntityType.BORROWER,
            )
        )

        api_client.make_call.assert_awaited_once_with(
            "/application-documents?applicationId=app_123&accessPermissionEntityType=borrower",
            "GET",
            None,
            None,
        )
        assert len(documents) == 1
        document = documents[0]
        assert isinstance(document, ApplicationDocument)
        assert document.type is ApplicationDocumentType.FILE
        assert document.access_permissions[0].entity_type is AccessPermissionEntityType.BORROWER

    @pytest.mark.asyncio
    async def test_no_cursor_listing(self, api_client, any_version):
        """Test documents have no cursor listing in any version."""
        resource = ApplicationDocumentsResource(api_client, any_version)

        with pytest.raises(ApiVersionError):
            await resource.list()

        api_client.make_call.assert_not_awaited()


class TestApplicationDocumentsUpload:
    """Tests for uploads."""

    @pytest.mark.asyncio
    async def test_create_sends_multipart(self, api_client, document_data):
        """Test single uploads are posted as multipart without a JSON content type."""
        api_client.make_call.return_value = document_data
        resource = ApplicationDocumentsResource(api_client)

        document = await resource.create(
            CreateApplicationDocumentParams(
                application_id="app_123",
                file=b"%PDF",
                file_name="statement.pdf",
                anchor="bank_statements",
            )
        )

        path, method, body, options = api_client.make_call.await_args.args
        assert (path, method) == ("/application-documents", "POST")
        assert isinstance(body, MultipartPayload)
        assert body.names == ["applicationId", "file", "anchor"]
        assert options is MULTIPART_OPTIONS
        assert options.content_type is None
        assert document.id == "doc_1"

    @pytest.mark.asyncio
    async def test_create_many(self, api_client):
        """Test batch uploads go to the batch path with indexed options."""
        resource = ApplicationDocumentsResource(api_client)

        result = await resource.create_many(
            "app_123",
            CreateManyApplicationDocumentParams(
                files=[
                    DocumentFileUpload(file=b"1", file_name="one.pdf", parent_id="fld_1"),
                    DocumentFileUpload(file=b"2", file_name="two.pdf"),
                ],
                task_id="tsk_1",
            ),
        )

        path, method, body, options = api_client.make_call.await_args.args
        assert (path, method) == ("/application-documents/batch", "POST")
        assert body.names == [
            "files",
            "options[0].parentId",
            "files",
            "applicationId",
            "taskId",
        ]
        assert options is MULTIPART_OPTIONS
        assert result is None


class TestApplicationDocumentsManage:
    """Tests for folders and updates."""

    @pytest.mark.asyncio
    async def test_create_top_level_folder(self, api_client, document_data):
        """Test top-level folders send an explicit null parent."""
        api_client.make_call.return_value = {**document_data, "type": "folder"}
        resource = ApplicationDocumentsResource(api_client)

        folder = await resource.create_folder(
            CreateApplicationDocumentFolderParams(application_id="app_123", name="Income")
        )

        api_client.make_call.assert_awaited_once_with(
            "/application-documents/document-folders",
            "POST",
            {"applicationId": "app_123", "name": "Income", "parentId": None},
            None,
        )
        assert folder.type is ApplicationDocumentType.FOLDER

    @pytest.mark.asyncio
    async def test_update(self, api_client, document_data):
        """Test renaming a document."""
        api_client.make_call.return_value = document_data
        resource = ApplicationDocumentsResource(api_client)

        await resource.update("doc_1", UpdateApplicationDocumentParams(name="renamed.pdf"))

        api_client.make_call.assert_awaited_once_with(
            "/application-documents/doc_1", "PUT", {"name": "renamed.pdf"}, None
        )

    @pytest.mark.asyncio
    async def test_delete(self, api_client):
        """Test deleting a document."""
        resource = ApplicationDocumentsResource(api_client)

        await resource.delete("doc_1")

        api_client.make_call.assert_awaited_once_with(
            "/application-documents/doc_1", "DELETE", None, None
        )
