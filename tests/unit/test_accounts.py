"""Unit tests for the accounts resource."""

import pytest

from losclient.exceptions import AuthenticationError
from losclient.models import AccountStatus, CreateAccountParams, FindAccountsParams
from losclient.resources.accounts import (
    ACCOUNT_ACCESS_TOKEN_HEADER,
    PASSWORD_VALIDATION_TOKEN_HEADER,
    AccountsResource,
    account_options,
)
from losclient.transport import RequestOptions


@pytest.fixture
def account_data():
    """Raw account as returned by the auth API."""
    return {
        "id": "acc_1",
        "email": "ada@example.com",
        "status": "active",
        "phones": [{"value": "+15550100", "verified": True}],
        "isEmailNotVerified": False,
        "borrowerId": "brw_1",
    }


class TestAccountOptions:
    """Tests for account token headers."""

    def test_access_token_only(self):
        """Test only the access token header is set by default."""
        options = account_options("tok")

        assert options == RequestOptions(headers={ACCOUNT_ACCESS_TOKEN_HEADER: "tok"})

    def test_with_password_validation_token(self):
        """Test both tokens are sent when given."""
        options = account_options("tok", "pwd")

        assert options.headers == {
            ACCOUNT_ACCESS_TOKEN_HEADER: "tok",
            PASSWORD_VALIDATION_TOKEN_HEADER: "pwd",
        }


class TestAccountsResource:
    """Tests for AccountsResource."""

    @pytest.mark.asyncio
    async def test_find_by_email(self, api_client, account_data):
        """Test looking up an account by email."""
        api_client.make_call.return_value = account_data
        resource = AccountsResource(api_client)

        account = await resource.find_account_by_email("ada@example.com")

        api_client.make_call.assert_awaited_once_with(
            "/accounts/ada%40example.com", "GET", None, None
        )
        assert account.status is AccountStatus.ACTIVE
        assert account.phones[0].verified is True
        assert account.extra == {"borrowerId": "brw_1"}

    @pytest.mark.asyncio
    async def test_create_account(self, api_client):
        """Test creating an account with custom fields and token lifetime."""
        api_client.make_call.return_value = {
            "accountAccessToken": "access",
            "refreshToken": "refresh",
        }
        resource = AccountsResource(api_client)

        tokens = await resource.create_account(
            CreateAccountParams(
                email="ada@example.com",
                password="s3cret",
                extra={"borrowerId": "brw_1"},
            ),
            refresh_token_expiration_time_minutes=60,
        )

        api_client.make_call.assert_awaited_once_with(
            "/accounts",
            "POST",
            {
                "email": "ada@example.com",
                "password": "s3cret",
                "borrowerId": "brw_1",
                "refreshTokenExpirationTimeMinutes": 60,
            },
            None,
        )
        assert tokens.account_access_token == "access"
        assert tokens.refresh_token == "refresh"

    @pytest.mark.asyncio
    async def test_get_current_user(self, api_client, account_data):
        """Test the current user is read with the access token."""
        api_client.make_call.return_value = account_data
        resource = AccountsResource(api_client)

        account = await resource.get_current_user("tok")

        api_client.make_call.assert_awaited_once_with(
            "/accounts", "GET", None, account_options("tok")
        )
        assert account.id == "acc_1"

    @pytest.mark.asyncio
    async def test_send_update_email_code(self, api_client):
        """Test sensitive changes carry the password validation token."""
        resource = AccountsResource(api_client)

        await resource.send_update_email_code("new@example.com", "tok", "pwd")

        api_client.make_call.assert_awaited_once_with(
            "/accounts/email",
            "PUT",
            {"email": "new@example.com"},
            account_options("tok", "pwd"),
        )

    @pytest.mark.asyncio
    async def test_confirm_codes(self, api_client):
        """Test confirmation codes are sent as path segments."""
        resource = AccountsResource(api_client)

        await resource.update_email_address("123456", "tok")
        await resource.add_phone_number("654321", "tok")

        calls = api_client.make_call.await_args_list
        assert calls[0].args == ("/accounts/email/123456", "PUT", None, account_options("tok"))
        assert calls[1].args == ("/accounts/phone/654321", "POST", None, account_options("tok"))

    @pytest.mark.asyncio
    async def test_phone_flows(self, api_client):
        """Test adding, changing and deleting phone numbers."""
        resource = AccountsResource(api_client)
        options = account_options("tok", "pwd")

        await resource.send_add_phone_number_code("+15550100", "tok", "pwd")
        await resource.send_update_phone_number_code("+15550101", "tok", "pwd")
        await resource.update_phone_number("111111", "tok")
        await resource.delete_phone_number("+15550100", "tok", "pwd")

        calls = [call.args for call in api_client.make_call.await_args_list]
        assert calls == [
            ("/accounts/phone", "POST", {"phone": "+15550100"}, options),
            ("/accounts/phone", "PUT", {"phone": "+15550101"}, options),
            ("/accounts/phone/111111", "PUT", None, account_options("tok")),
            ("/accounts/delete-phone", "PUT", {"phone": "+15550100"}, options),
        ]

    @pytest.mark.asyncio
    async def test_password_validation_token(self, api_client):
        """Test the validation token is unwrapped from the response."""
        api_client.make_call.return_value = {"passwordValidationToken": "pwd"}
        resource = AccountsResource(api_client)

        token = await resource.create_password_validation_token("s3cret", "tok")

        api_client.make_call.assert_awaited_once_with(
            "/accounts/password-validation-token",
            "POST",
            {"password": "s3cret"},
            account_options("tok"),
        )
        assert token == "pwd"

    @pytest.mark.asyncio
    async def test_update_password(self, api_client):
        """Test changing the password."""
        resource = AccountsResource(api_client)

        await resource.update_password("old", "new", "tok")

        api_client.make_call.assert_awaited_once_with(
            "/accounts/password",
            "PUT",
            {"oldPassword": "old", "newPassword": "new"},
            account_options("tok"),
        )

    @pytest.mark.asyncio
    async def test_find(self, api_client, account_data):
        """Test searching accounts by borrower."""
        api_client.make_call.return_value = [account_data]
        resource = AccountsResource(api_client)

        accounts = await resource.find(FindAccountsParams(borrower_ids=["brw_1", "brw_2"]))

        api_client.make_call.assert_awaited_once_with(
            "/accounts/search?borrowerIds=brw_1&borrowerIds=brw_2", "GET", None, None
        )
        assert accounts[0].email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_expired_token(self, api_client):
        """Test authentication failures propagate."""
        api_client.make_call.side_effect = AuthenticationError("Token expired")
        resource = AccountsResource(api_client)

        with pytest.raises(AuthenticationError):
            await resource.get_current_user("expired")
