"""
LOS Python Client - Application Documents Resource

This module provides methods for uploading and organizing the documents
attached to an application.
"""

from __future__ import annotations

from typing import List, Optional

from losclient.config import Endpoints
from losclient.models import (
    ApplicationDocument,
    CreateApplicationDocumentFolderParams,
    CreateApplicationDocumentParams,
    CreateManyApplicationDocumentParams,
    FindApplicationDocumentsParams,
    UpdateApplicationDocumentParams,
    to_wire,
)
from losclient.multipart import MultipartBuilder, MultipartPayload
from losclient.resources.base import SystemResource
from losclient.transport import MULTIPART_OPTIONS
from losclient.versioning import Behavior, for_versions


BATCH_OPTIONS_GROUP = "options"


def build_document_upload(params: CreateApplicationDocumentParams) -> MultipartPayload:
    """Build the multipart body for a single document upload."""
    return (
        MultipartBuilder()
        .add_field("applicationId", params.application_id)
        .add_file("file", params.file, params.file_name, params.content_type)
        .add_field("parentId", params.parent_id)
        .add_field("anchor", params.anchor)
        .add_field("taskId", params.task_id)
        .add_json("accessPermissions", params.access_permissions)
        .build()
    )


def build_batch_document_upload(
    application_id: str,
    params: CreateManyApplicationDocumentParams,
) -> MultipartPayload:
    """
    Build the multipart body for a batch document upload.

    Each file is followed by its own options, named
    ``options[i].parentId`` and ``options[i].anchor`` where ``i`` is the
    file's position in ``params.files``. Shared fields come last.
    """
    builder = MultipartBuilder()

    for index, upload in enumerate(params.files):
        builder.add_file("files", upload.file, upload.file_name, upload.content_type)
        builder.add_indexed_field(BATCH_OPTIONS_GROUP, index, "parentId", upload.parent_id)
        builder.add_indexed_field(BATCH_OPTIONS_GROUP, index, "anchor", upload.anchor)

    return (
        builder
        .add_field("applicationId", application_id)
        .add_field("taskId", params.task_id)
        .add_json("accessPermissions", params.access_permissions)
        .build()
    )


class ApplicationDocumentsResource(
    SystemResource[
        ApplicationDocument,
        CreateApplicationDocumentParams,
        UpdateApplicationDocumentParams,
        FindApplicationDocumentsParams,
        None,
    ]
):
    """
    Resource for managing application documents.

    The documents endpoint returns plain arrays for every API version and
    has no search or cursor listing.

    Example:
        >>> document = await client.application_documents.create(
        ...     CreateApplicationDocumentParams(
        ...         application_id="app_123",
        ...         file=open("statement.pdf", "rb").read(),
        ...         file_name="statement.pdf",
        ...     )
        ... )
    """

    path = Endpoints.APPLICATION_DOCUMENTS
    model = ApplicationDocument
    version_overrides = {
        **for_versions("find", Behavior.PLAIN),
        **for_versions("search", None),
        **for_versions("list", None),
    }

    async def find(self, params: FindApplicationDocumentsParams) -> List[ApplicationDocument]:
        return await super().find(params)

    async def create(self, params: CreateApplicationDocumentParams) -> ApplicationDocument:
        """Upload a single document."""
        payload = await self._post(
            self._resource_path(),
            build_document_upload(params),
            MULTIPART_OPTIONS,
        )
        return self._parse_item(payload)

    async def create_many(
        self,
        application_id: str,
        params: CreateManyApplicationDocumentParams,
    ) -> None:
        """Upload several documents in one request."""
        await self._post(
            self._resource_path("batch"),
            build_batch_document_upload(application_id, params),
            MULTIPART_OPTIONS,
        )

    async def create_folder(self, params: CreateApplicationDocumentFolderParams) -> ApplicationDocument:
        payload = await self._post(self._resource_path("document-folders"), to_wire(params))
        return self._parse_item(payload)

    async def update(
        self,
        id: str,
        params: Optional[UpdateApplicationDocumentParams] = None,
    ) -> ApplicationDocument:
        return await super().update(id, params or UpdateApplicationDocumentParams())
