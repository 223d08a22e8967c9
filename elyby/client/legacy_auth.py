"""Yggdrasil-compatible authentication against authserver.ely.by"""

import logging
from typing import Optional

import httpx

from ..base_client import BaseClient
from ..errors import ConfigurationError
from ..logging_utils import ErrorSink
from ..models import AuthenticateSession, AuthSession
from ..result import ErrorKind, Result, Success
from ..settings import AUTH_SERVER_BASE
from ..transport import discard_body, parse_response, send_request

logger = logging.getLogger(__name__)


def join_totp(password: str, totp: Optional[str] = None) -> str:
    """Embed a two-factor code in the password field

    Yggdrasil has no field for TOTP codes, so Ely.by accepts them as
    ``password:totp``.
    """
    if not totp:
        return password
    return f"{password}:{totp}"


class LegacyAuthClient(BaseClient):
    """Launcher authentication (https://docs.ely.by/en/minecraft-auth.html)"""

    def __init__(
        self,
        client_token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        error_sink: Optional[ErrorSink] = None,
    ):
        """
        Args:
            client_token: Identifier of this launcher instance, sent with
                every authenticate/refresh call
            http_client: Caller-owned async client
            error_sink: Receiver of failure descriptors

        Raises:
            ConfigurationError: If client_token is empty
        """
        if not client_token:
            raise ConfigurationError("client_token")

        super().__init__(http_client=http_client, error_sink=error_sink)
        self.client_token = client_token

    def _check_client_token(self, session: AuthSession) -> None:
        if session.clientToken != self.client_token:
            logger.warning("Server echoed a different clientToken than the one sent")

    async def authenticate(
        self,
        username: str,
        password: str,
        request_user: bool = False,
        totp: Optional[str] = None,
    ) -> Result[AuthenticateSession]:
        """Authenticate with login and password

        Args:
            username: Nickname or (preferably) e-mail
            password: Password, or ``password:totp`` when 2FA is enabled
            request_user: Include the ``user`` record in the response
            totp: Two-factor code to append to the password

        Returns:
            Session with the access token and available profiles
        """
        result = await send_request(
            "POST",
            f"{AUTH_SERVER_BASE}/auth/authenticate",
            json_body={
                "username": username,
                "password": join_totp(password, totp),
                "clientToken": self.client_token,
                "requestUser": request_user,
            },
            http_client=self.http_client,
        )
        result = self._report(parse_response(result, AuthenticateSession))
        if result.ok:
            self._check_client_token(result.value)
            logger.info(f"Authenticated as {result.value.selectedProfile.name}")
        return result

    async def refresh(self, access_token: str, request_user: bool = False) -> Result[AuthSession]:
        """Exchange a valid access token for a fresh one

        A failure here means the stored token is unusable and the user must
        authenticate with credentials again.

        Args:
            access_token: Token from a previous authenticate/refresh
            request_user: Include the ``user`` record in the response

        Returns:
            Session with the new access token
        """
        result = await send_request(
            "POST",
            f"{AUTH_SERVER_BASE}/auth/refresh",
            json_body={
                "accessToken": access_token,
                "clientToken": self.client_token,
                "requestUser": request_user,
            },
            http_client=self.http_client,
        )
        result = self._report(parse_response(result, AuthSession))
        if result.ok:
            self._check_client_token(result.value)
            logger.info("Access token refreshed")
        return result

    async def validate(self, access_token: str) -> Result[bool]:
        """Check whether an access token is still valid

        The token and its lifetime are left untouched.

        Returns:
            Success(True) if valid, Success(False) if the server answered
            401, Failure if validity could not be determined
        """
        result = await send_request(
            "POST",
            f"{AUTH_SERVER_BASE}/auth/validate",
            json_body={"accessToken": access_token},
            http_client=self.http_client,
        )
        if result.ok:
            return Success(True)
        if result.error.kind is ErrorKind.UNAUTHORIZED:
            logger.debug(f"Access token rejected: {result.error}")
            return Success(False)
        return self._report(result)

    async def signout(self, username: str, password: str, totp: Optional[str] = None) -> Result[None]:
        """Invalidate every token issued to the account

        Args:
            username: Nickname or (preferably) e-mail
            password: Password, or ``password:totp``
            totp: Two-factor code to append to the password
        """
        result = await send_request(
            "POST",
            f"{AUTH_SERVER_BASE}/auth/signout",
            json_body={
                "username": username,
                "password": join_totp(password, totp),
            },
            http_client=self.http_client,
        )
        return self._report(discard_body(result))

    async def invalidate(self, access_token: str, client_token: Optional[str] = None) -> Result[None]:
        """Invalidate a single access token

        Unknown tokens are not an error upstream, so this succeeds for them.

        Args:
            access_token: Token to invalidate
            client_token: Client the token was issued to; defaults to this
                client's token
        """
        result = await send_request(
            "POST",
            f"{AUTH_SERVER_BASE}/auth/invalidate",
            json_body={
                "accessToken": access_token,
                "clientToken": client_token or self.client_token,
            },
            http_client=self.http_client,
        )
        return self._report(discard_body(result))
