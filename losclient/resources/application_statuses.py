"""
LOS Python Client - Application Statuses Resource
"""

from __future__ import annotations

from typing import List

from losclient.config import Endpoints
from losclient.models import ApplicationStatus
from losclient.resources.base import VersionedResource
from losclient.versioning import Behavior, for_versions


class ApplicationStatusesResource(VersionedResource[ApplicationStatus, str]):
    """Read access to the statuses configured for a product."""

    path = Endpoints.APPLICATION_STATUSES
    model = ApplicationStatus
    version_overrides = for_versions("find", Behavior.PLAIN)

    async def find(self, product_id: str) -> List[ApplicationStatus]:
        """
        List a product's statuses, with their rules.

        Args:
            product_id: The product's unique identifier

        Returns:
            List of ApplicationStatus objects ordered by board position
        """
        return await super().find({"productId": product_id})
