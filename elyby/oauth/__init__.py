"""OAuth2 authorization-code flow for Ely.by accounts"""

from typing import Iterable, Optional, Union

import httpx

from ..base_client import BaseClient
from ..logging_utils import ErrorSink
from ..models import OAuthAccount, OAuthTokenPair, Prompt, Scope
from ..result import Result
from .account import fetch_account
from .authorization import AuthorizationURLBuilder, normalize_scopes
from .credentials import OAuthCredentials
from .token_exchange import exchange_code
from .token_refresh import refresh_access_token


class OAuthClient(BaseClient):
    """OAuth2 authorization-code grant (https://docs.ely.by/en/oauth.html)

    The flow is two independent steps with no state kept in between:
    send the user to generate_link(), then pass the code from the redirect
    to exchange_code(). The caller owns the ``state`` check and every
    token lifecycle decision.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        http_client: Optional[httpx.AsyncClient] = None,
        error_sink: Optional[ErrorSink] = None,
    ):
        """
        Args:
            client_id: Application identifier
            client_secret: Application secret
            redirect_uri: Registered callback URL
            http_client: Caller-owned async client
            error_sink: Receiver of failure descriptors

        Raises:
            ConfigurationError: If any credential is empty
        """
        self.credentials = OAuthCredentials(client_id, client_secret, redirect_uri)
        super().__init__(http_client=http_client, error_sink=error_sink)
        self.auth_builder = AuthorizationURLBuilder(self.credentials, self.error_sink)

    # Authorization URLs
    def generate_link(
        self,
        scope: Optional[Iterable[Union[Scope, str]]],
        state: Optional[str] = None,
        description: Optional[str] = None,
        prompt: Optional[Union[Prompt, str]] = None,
        login_hint: Optional[str] = None,
    ) -> str:
        """Build the authorization URL to redirect the user to

        Returns:
            Full authorization URL
        """
        return self.auth_builder.build(scope, state, description, prompt, login_hint)

    # Token exchange
    async def exchange_code(self, code: str) -> Result[OAuthTokenPair]:
        """Exchange the authorization code from the redirect for tokens

        Args:
            code: Authorization code

        Returns:
            Token pair; refresh_token is set only if offline_access was requested
        """
        if not code:
            return self._missing_parameter("code")
        return self._report(await exchange_code(code, self.credentials, self.http_client))

    # Account information
    async def fetch_account(self, access_token: str) -> Result[OAuthAccount]:
        """Fetch account information (needs the account_info scope)

        Args:
            access_token: Access token from exchange_code or refresh_token
        """
        if not access_token:
            return self._missing_parameter("access_token")
        return self._report(await fetch_account(access_token, self.http_client))

    # Token refresh
    async def refresh_token(self, refresh_token: str) -> Result[OAuthTokenPair]:
        """Get a new access token (needs the offline_access scope)

        Args:
            refresh_token: Refresh token from exchange_code; stays valid
        """
        if not refresh_token:
            return self._missing_parameter("refresh_token")
        return self._report(await refresh_access_token(refresh_token, self.credentials, self.http_client))


__all__ = [
    "OAuthClient",
    "OAuthCredentials",
    "AuthorizationURLBuilder",
    "normalize_scopes",
    "exchange_code",
    "refresh_access_token",
    "fetch_account",
]
