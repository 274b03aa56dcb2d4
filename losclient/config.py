"""
LOS Python Client - Configuration

This module contains configuration classes and defaults for the client.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from losclient.versioning import ApiVersion


# Clients built without an explicit version never assume newer capabilities.
DEFAULT_API_VERSION = ApiVersion.LEGACY


@dataclass
class ClientConfig:
    """
    Configuration for the LOS client.

    Attributes:
        base_url: Base URL for the LOS API
        auth_base_url: Base URL for the account/auth API
        timeout: Request timeout in seconds
        max_retries: Maximum number of connection retry attempts
        api_version: API version the resources are bound to
        debug: Enable debug logging
    """
    base_url: str = "https://los.example.com/api"
    auth_base_url: str = "https://auth.example.com/api"
    timeout: float = 30.0
    max_retries: int = 3
    api_version: ApiVersion = field(default=DEFAULT_API_VERSION)
    debug: bool = False

    @classmethod
    def from_env(cls, **overrides) -> "ClientConfig":
        """
        Build a configuration from ``LOS_*`` environment variables.

        Explicit keyword arguments win over the environment; ``None``
        values are ignored.
        """
        values = {
            "base_url": os.environ.get("LOS_BASE_URL", DEFAULT_CONFIG.base_url),
            "auth_base_url": os.environ.get("LOS_AUTH_BASE_URL", DEFAULT_CONFIG.auth_base_url),
            "api_version": parse_api_version(os.environ.get("LOS_API_VERSION")),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def parse_api_version(value: Optional[str]) -> ApiVersion:
    """Parse an API version name, falling back to the default when empty."""
    if not value:
        return DEFAULT_API_VERSION
    return ApiVersion(value.strip().lower())


# Default configuration
DEFAULT_CONFIG = ClientConfig()


# Endpoints
class Endpoints:
    """API endpoint paths, relative to the API base URL."""

    # Applications
    APPLICATIONS = "applications"

    # Application documents
    APPLICATION_DOCUMENTS = "application-documents"

    # Application statuses
    APPLICATION_STATUSES = "application-statuses"

    # Product calculations
    PRODUCT_CALCULATIONS = "product-calculations"

    # Accounts (auth API)
    ACCOUNTS = "accounts"

