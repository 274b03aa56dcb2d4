"""
LOS Python Client - Accounts Resource

This module provides methods for managing borrower and intermediary portal
accounts. Accounts live on the auth API, and most calls act on behalf of
the account holder, authenticated by the account access token.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from losclient.config import Endpoints
from losclient.encoding import encode_query
from losclient.models import AccountInfo, AuthResponse, CreateAccountParams, FindAccountsParams
from losclient.resources.base import BaseResource
from losclient.transport import RequestOptions


ACCOUNT_ACCESS_TOKEN_HEADER = "accountAccessToken"
PASSWORD_VALIDATION_TOKEN_HEADER = "accountPasswordValidationToken"


def account_options(
    account_access_token: str,
    password_validation_token: Optional[str] = None,
) -> RequestOptions:
    """Build request options carrying the account holder's tokens."""
    headers = {ACCOUNT_ACCESS_TOKEN_HEADER: account_access_token}
    if password_validation_token is not None:
        headers[PASSWORD_VALIDATION_TOKEN_HEADER] = password_validation_token
    return RequestOptions(headers=headers)


class AccountsResource(BaseResource):
    """
    Resource for managing portal accounts.

    Changing a phone number, email or password is a two-step flow: the
    first call sends a verification code (and needs a password validation
    token from ``create_password_validation_token``), the second confirms
    it with the code.

    Example:
        >>> token = await client.accounts.create_password_validation_token(
        ...     password="...", account_access_token=access_token
        ... )
        >>> await client.accounts.send_update_email_code(
        ...     "new@example.com", access_token, token
        ... )
        >>> await client.accounts.update_email_address("123456", access_token)
    """

    path = Endpoints.ACCOUNTS

    async def find_account_by_email(self, email: str) -> AccountInfo:
        payload = await self._get(self._resource_path(email))
        return AccountInfo.from_dict(payload)

    async def create_account(
        self,
        params: CreateAccountParams,
        refresh_token_expiration_time_minutes: Optional[int] = None,
    ) -> AuthResponse:
        """
        Create an account and sign it in.

        Args:
            params: Email, optional phone and password, plus custom fields
            refresh_token_expiration_time_minutes: Lifetime of the issued
                refresh token

        Returns:
            Tokens for the new account
        """
        body: Dict[str, Any] = params.to_dict()
        if refresh_token_expiration_time_minutes is not None:
            body["refreshTokenExpirationTimeMinutes"] = refresh_token_expiration_time_minutes

        payload = await self._post(self._resource_path(), body)
        return AuthResponse.from_dict(payload)

    async def get_current_user(self, account_access_token: str) -> AccountInfo:
        payload = await self._get(
            self._resource_path(),
            options=account_options(account_access_token),
        )
        return AccountInfo.from_dict(payload)

    async def send_update_phone_number_code(
        self,
        phone: str,
        account_access_token: str,
        password_validation_token: str,
    ) -> None:
        await self._put(
            self._resource_path("phone"),
            {"phone": phone},
            account_options(account_access_token, password_validation_token),
        )

    async def update_phone_number(self, code: str, account_access_token: str) -> None:
        await self._put(
            self._resource_path("phone", code),
            options=account_options(account_access_token),
        )

    async def send_add_phone_number_code(
        self,
        phone: str,
        account_access_token: str,
        password_validation_token: str,
    ) -> None:
        await self._post(
            self._resource_path("phone"),
            {"phone": phone},
            account_options(account_access_token, password_validation_token),
        )

    async def add_phone_number(self, code: str, account_access_token: str) -> None:
        await self._post(
            self._resource_path("phone", code),
            options=account_options(account_access_token),
        )

    async def delete_phone_number(
        self,
        phone: str,
        account_access_token: str,
        password_validation_token: str,
    ) -> None:
        await self._put(
            self._resource_path("delete-phone"),
            {"phone": phone},
            account_options(account_access_token, password_validation_token),
        )

    async def send_update_email_code(
        self,
        email: str,
        account_access_token: str,
        password_validation_token: str,
    ) -> None:
        await self._put(
            self._resource_path("email"),
            {"email": email},
            account_options(account_access_token, password_validation_token),
        )

    async def update_email_address(self, code: str, account_access_token: str) -> None:
        await self._put(
            self._resource_path("email", code),
            options=account_options(account_access_token),
        )

    async def create_password_validation_token(
        self,
        password: str,
        account_access_token: str,
    ) -> str:
        """
        Exchange the account password for a short-lived validation token.

        Returns:
            Token to pass as ``password_validation_token`` to sensitive calls
        """
        payload = await self._post(
            self._resource_path("password-validation-token"),
            {"password": password},
            account_options(account_access_token),
        )
        return payload["passwordValidationToken"]

    async def update_password(
        self,
        old_password: str,
        new_password: str,
        account_access_token: str,
    ) -> None:
        await self._put(
            self._resource_path("password"),
            {"oldPassword": old_password, "newPassword": new_password},
            account_options(account_access_token),
        )

    async def find(self, params: FindAccountsParams) -> List[AccountInfo]:
        """Find accounts by ids, emails, phones or linked borrowers/intermediaries."""
        query = encode_query(params.to_query())
        payload = await self._get(self._resource_path("search"), query)
        return [AccountInfo.from_dict(item) for item in payload]
