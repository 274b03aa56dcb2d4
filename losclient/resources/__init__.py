"""
LOS Python Client - Resources

This module contains all API resource classes.
"""

from losclient.resources.base import BaseResource, SystemResource, VersionedResource
from losclient.resources.applications import ApplicationsResource
from losclient.resources.application_documents import ApplicationDocumentsResource
from losclient.resources.application_statuses import ApplicationStatusesResource
from losclient.resources.product_calculations import ProductCalculationsResource
from losclient.resources.accounts import AccountsResource

__all__ = [
    "BaseResource",
    "VersionedResource",
    "SystemResource",
    "ApplicationsResource",
    "ApplicationDocumentsResource",
    "ApplicationStatusesResource",
    "ProductCalculationsResource",
    "AccountsResource",
]
