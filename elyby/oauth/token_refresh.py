"""OAuth token refresh functionality"""

import logging
from typing import Optional

import httpx

from ..models import OAuthTokenPair
from ..result import Result
from ..settings import OAUTH_TOKEN_URL
from ..transport import ACCOUNT_MESSAGE_KEY, parse_response, send_request
from .credentials import OAuthCredentials

logger = logging.getLogger(__name__)


async def refresh_access_token(
    refresh_token: str,
    credentials: OAuthCredentials,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Result[OAuthTokenPair]:
    """Obtain a new access token with a refresh token

    Refresh tokens do not expire and stay usable after this call; the
    response carries no new one.

    Args:
        refresh_token: Refresh token from exchange_code
        credentials: Application credentials
        http_client: Caller-owned async client

    Returns:
        Token pair without refresh_token, or Failure
    """
    logger.debug("Attempting to refresh OAuth access token...")
    result = await send_request(
        "POST",
        OAUTH_TOKEN_URL,
        json_body={
            "client_id": credentials.client_id,
            "client_secret": credentials.client_secret,
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        },
        http_client=http_client,
        message_key=ACCOUNT_MESSAGE_KEY,
    )
    tokens = parse_response(result, OAuthTokenPair)

    if tokens.ok:
        logger.info("Successfully refreshed OAuth access token")
    return tokens
