"""OAuth token exchange functionality"""

import logging
from typing import Optional

import httpx

from ..models import OAuthTokenPair
from ..result import Result
from ..settings import OAUTH_TOKEN_URL
from ..transport import ACCOUNT_MESSAGE_KEY, parse_response, send_request
from .credentials import OAuthCredentials

logger = logging.getLogger(__name__)


async def exchange_code(
    code: str,
    credentials: OAuthCredentials,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Result[OAuthTokenPair]:
    """Exchange an authorization code for tokens

    The response only contains a refresh token if offline_access was among
    the scopes of the authorization request that produced the code. Which
    scopes were requested is up to the caller to remember.

    Args:
        code: Authorization code from the redirect's query string
        credentials: Application credentials
        http_client: Caller-owned async client

    Returns:
        Token pair, or Failure
    """
    result = await send_request(
        "POST",
        OAUTH_TOKEN_URL,
        json_body={
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "redirect_uri": credentials.redirect_uri,
            "grant_type": "authorization_code",
            "code": code,
        },
        http_client=http_client,
        message_key=ACCOUNT_MESSAGE_KEY,
    )
    tokens = parse_response(result, OAuthTokenPair)

    if tokens.ok:
        logger.info(
            "Exchanged authorization code for tokens"
            + (" (with refresh token)" if tokens.value.has_refresh_token else "")
        )
    return tokens
