"""Account information for OAuth access tokens"""

from typing import Optional

import httpx

from ..headers import bearer_header
from ..models import OAuthAccount
from ..result import Result
from ..settings import ACCOUNT_INFO_URL
from ..transport import ACCOUNT_MESSAGE_KEY, parse_response, send_request


async def fetch_account(
    access_token: str,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Result[OAuthAccount]:
    """Fetch the account the token was issued for

    Requires the account_info scope; e-mail is included only with
    account_email. A token lacking the scope is rejected upstream and
    returned as Failure.
    """
    result = await send_request(
        "GET",
        ACCOUNT_INFO_URL,
        headers=bearer_header(access_token),
        http_client=http_client,
        message_key=ACCOUNT_MESSAGE_KEY,
    )
    return parse_response(result, OAuthAccount)
