"""
LOS Python Client - Main Client

This module provides the main LosClient class that serves as the entry
point for all API interactions.
"""

from __future__ import annotations

import logging
import os
from typing import List, Optional, Union

from losclient.config import ClientConfig, parse_api_version
from losclient.exceptions import AuthenticationError
from losclient.resources.accounts import AccountsResource
from losclient.resources.application_documents import ApplicationDocumentsResource
from losclient.resources.application_statuses import ApplicationStatusesResource
from losclient.resources.applications import ApplicationsResource
from losclient.resources.product_calculations import ProductCalculationsResource
from losclient.transport import ApiClient, HttpApiClient
from losclient.versioning import ApiVersion

logger = logging.getLogger("losclient")


class LosClient:
    """
    Async client for the loan origination platform API.

    Args:
        api_key: Your API key. If not provided, will look for the
            LOS_API_KEY environment variable.
        base_url: Base URL of the LOS API. Defaults to LOS_BASE_URL or the
            configured default.
        auth_base_url: Base URL of the auth API used by ``accounts``.
        api_version: API version every resource is bound to. Defaults to
            LOS_API_VERSION, then to the legacy version.
        timeout: Request timeout in seconds.
        max_retries: Connection retry attempts.
        debug: Enable debug logging.
        api_client: Transport for the LOS API, replacing the default one.
        auth_api_client: Transport for the auth API, replacing the default one.

    Example:
        >>> async with LosClient(api_key="...", api_version="current") as client:
        ...     batch = await client.applications.list(ListApplicationParams(limit=20))
        ...     for application in batch:
        ...         print(application.display_id)

    Attributes:
        applications: Resource for managing applications
        application_documents: Resource for managing application documents
        application_statuses: Resource for reading product statuses
        product_calculations: Resource for reading product calculations
        accounts: Resource for managing portal accounts
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        auth_base_url: Optional[str] = None,
        api_version: Optional[Union[ApiVersion, str]] = None,
        timeout: float = 30.0,
        max_retries: int = 3,
        debug: bool = False,
        api_client: Optional[ApiClient] = None,
        auth_api_client: Optional[ApiClient] = None,
    ) -> None:
        self._api_key = api_key or os.environ.get("LOS_API_KEY")
        if not self._api_key and (api_client is None or auth_api_client is None):
            raise AuthenticationError(
                "API key is required. Provide it as a parameter or set "
                "the LOS_API_KEY environment variable."
            )

        if isinstance(api_version, str) and not isinstance(api_version, ApiVersion):
            api_version = parse_api_version(api_version)

        self._config = ClientConfig.from_env(
            base_url=base_url,
            auth_base_url=auth_base_url,
            api_version=api_version,
            timeout=timeout,
            max_retries=max_retries,
            debug=debug,
        )

        if debug:
            logging.basicConfig(level=logging.DEBUG)
            logger.setLevel(logging.DEBUG)

        self._owned_clients: List[HttpApiClient] = []
        self._api_client = api_client or self._create_api_client(self._config.base_url)
        self._auth_api_client = auth_api_client or self._create_api_client(self._config.auth_base_url)

        self._init_resources()

        logger.debug(
            f"LosClient initialized with base URL: {self._config.base_url}, "
            f"API version: {self._config.api_version.value}"
        )

    def _create_api_client(self, base_url: str) -> HttpApiClient:
        api_client = HttpApiClient(
            base_url=base_url,
            api_key=self._api_key,
            timeout=self._config.timeout,
            max_retries=self._config.max_retries,
        )
        self._owned_clients.append(api_client)
        return api_client

    def _init_resources(self) -> None:
        """Initialize all API resources."""
        version = self._config.api_version

        self.applications = ApplicationsResource(self._api_client, version)
        self.application_documents = ApplicationDocumentsResource(self._api_client, version)
        self.application_statuses = ApplicationStatusesResource(self._api_client, version)
        self.product_calculations = ProductCalculationsResource(self._api_client, version)
        self.accounts = AccountsResource(self._auth_api_client)

    @property
    def api_version(self) -> ApiVersion:
        return self._config.api_version

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def close(self) -> None:
        """Close the transports this client owns."""
        for api_client in self._owned_clients:
            await api_client.close()
        logger.debug("LosClient closed")

    async def __aenter__(self) -> "LosClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    def __repr__(self) -> str:
        return (
            f"LosClient(base_url='{self._config.base_url}', "
            f"api_version='{self._config.api_version.value}')"
        )
