"""Unit tests for LosClient and its configuration."""

from unittest.mock import AsyncMock

import pytest

from losclient import LosClient
from losclient.config import DEFAULT_API_VERSION, ClientConfig, parse_api_version
from losclient.exceptions import ApiVersionError, AuthenticationError
from losclient.models import ListApplicationParams
from losclient.resources.accounts import AccountsResource
from losclient.transport import HttpApiClient
from losclient.versioning import ApiVersion


@pytest.fixture
def clean_env(monkeypatch):
    """Remove LOS_* variables from the environment."""
    for name in ("LOS_API_KEY", "LOS_BASE_URL", "LOS_AUTH_BASE_URL", "LOS_API_VERSION"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestClientConfig:
    """Tests for configuration loading."""

    def test_defaults(self, clean_env):
        """Test defaults when nothing is configured."""
        config = ClientConfig.from_env()

        assert config.api_version is DEFAULT_API_VERSION
        assert config.api_version is ApiVersion.LEGACY
        assert config.timeout == 30.0

    def test_environment(self, clean_env):
        """Test LOS_* variables are read."""
        clean_env.setenv("LOS_BASE_URL", "https://los.test/api")
        clean_env.setenv("LOS_API_VERSION", "current")

        config = ClientConfig.from_env()

        assert config.base_url == "https://los.test/api"
        assert config.api_version is ApiVersion.CURRENT

    def test_overrides_win(self, clean_env):
        """Test explicit values win and None values are ignored."""
        clean_env.setenv("LOS_BASE_URL", "https://env.test/api")

        config = ClientConfig.from_env(base_url="https://arg.test/api", auth_base_url=None)

        assert config.base_url == "https://arg.test/api"
        assert config.auth_base_url == ClientConfig().auth_base_url

    def test_parse_api_version(self):
        """Test version names are parsed case-insensitively."""
        assert parse_api_version(" Current ") is ApiVersion.CURRENT
        assert parse_api_version("") is DEFAULT_API_VERSION
        assert parse_api_version(None) is DEFAULT_API_VERSION

    def test_unknown_version(self):
        """Test unknown version names are rejected."""
        with pytest.raises(ValueError):
            parse_api_version("v2")


class TestLosClient:
    """Tests for LosClient."""

    def test_requires_api_key(self, clean_env):
        """Test a key is required when transports are not injected."""
        with pytest.raises(AuthenticationError):
            LosClient()

    def test_api_key_from_environment(self, clean_env):
        """Test the key can come from LOS_API_KEY."""
        clean_env.setenv("LOS_API_KEY", "env-key")

        client = LosClient()

        assert isinstance(client._api_client, HttpApiClient)
        assert client.api_version is ApiVersion.LEGACY

    def test_resources_share_version(self, clean_env):
        """Test every versioned resource is bound to the client's version."""
        client = LosClient(api_key="key", api_version="current")

        assert client.api_version is ApiVersion.CURRENT
        assert client.applications.api_version is ApiVersion.CURRENT
        assert client.application_documents.api_version is ApiVersion.CURRENT
        assert client.application_statuses.api_version is ApiVersion.CURRENT
        assert client.product_calculations.api_version is ApiVersion.CURRENT
        assert isinstance(client.accounts, AccountsResource)

    def test_accounts_use_auth_api(self, clean_env):
        """Test accounts talk to the auth API base URL."""
        client = LosClient(
            api_key="key",
            base_url="https://los.test/api",
            auth_base_url="https://auth.test/api",
        )

        assert client._api_client.base_url == "https://los.test/api"
        assert client.accounts._api_client.base_url == "https://auth.test/api"

    @pytest.mark.asyncio
    async def test_injected_transports(self, clean_env):
        """Test injected transports are used and not closed by the client."""
        api_client = AsyncMock()
        auth_api_client = AsyncMock()

        async with LosClient(api_client=api_client, auth_api_client=auth_api_client) as client:
            with pytest.raises(ApiVersionError):
                await client.applications.list(ListApplicationParams())

        api_client.make_call.assert_not_awaited()
        api_client.close.assert_not_awaited()
        auth_api_client.close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_close_owned_transports(self, clean_env):
        """Test closing the client closes the transports it created."""
        client = LosClient(api_key="key")
        owned = list(client._owned_clients)

        for api_client in owned:
            await api_client._get_client()

        await client.close()

        assert len(owned) == 2
        assert all(api_client._http_client is None for api_client in owned)

    def test_repr(self, clean_env):
        """Test string representation."""
        client = LosClient(api_key="key", base_url="https://los.test/api")

        assert repr(client) == "LosClient(base_url='https://los.test/api', api_version='legacy')"
