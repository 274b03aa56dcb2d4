"""
LOS Python Client - Product Calculations Resource
"""

from __future__ import annotations

from typing import List

from losclient.config import Endpoints
from losclient.models import ProductCalculation
from losclient.resources.base import VersionedResource
from losclient.versioning import Behavior, for_versions


class ProductCalculationsResource(VersionedResource[ProductCalculation, str]):
    """Read access to the calculated variables of a product."""

    path = Endpoints.PRODUCT_CALCULATIONS
    model = ProductCalculation
    version_overrides = for_versions("find", Behavior.PLAIN)

    async def find(self, product_id: str) -> List[ProductCalculation]:
        return await super().find({"productId": product_id})
