"""OAuth authorization URL construction"""

import logging
from typing import Iterable, Optional, Union
from urllib.parse import quote, urlencode

from ..logging_utils import ErrorSink, log_api_error
from ..models import Prompt, Scope
from ..result import ApiError, ErrorKind
from ..settings import OAUTH_AUTHORIZE_URL
from .credentials import OAuthCredentials

logger = logging.getLogger(__name__)


def normalize_scopes(scope: Optional[Iterable[Union[Scope, str]]]) -> list:
    """Convert scope names to Scope members, keeping order and dropping repeats

    A single scope given as a string is treated as a one-item list.

    Raises:
        ValueError: If a name is not a scope Ely.by knows
    """
    if isinstance(scope, str):
        scope = [scope]

    scopes = []
    for item in scope or ():
        member = Scope(item)
        if member not in scopes:
            scopes.append(member)
    return scopes


class AuthorizationURLBuilder:
    """Builds the URL users are redirected to for consent"""

    def __init__(self, credentials: OAuthCredentials, error_sink: Optional[ErrorSink] = None):
        self.credentials = credentials
        self.error_sink = error_sink or log_api_error

    def build(
        self,
        scope: Optional[Iterable[Union[Scope, str]]],
        state: Optional[str] = None,
        description: Optional[str] = None,
        prompt: Optional[Union[Prompt, str]] = None,
        login_hint: Optional[str] = None,
    ) -> str:
        """Construct the authorization URL

        No request is made. Optional parameters that are not given are left
        out of the query string entirely.

        Args:
            scope: Permissions to request
            state: Opaque value returned unchanged on the redirect
            description: Localized application description override
            prompt: Force the consent screen or the account chooser
            login_hint: Username or e-mail to preselect an account

        Returns:
            Full authorization URL

        Raises:
            ValueError: If scope or prompt holds an unknown value
        """
        scopes = normalize_scopes(scope)
        if not scopes:
            # Ely.by still shows the page, so only warn
            self.error_sink(ApiError(
                ErrorKind.VALIDATION,
                "Required parameter is missing: scope",
                severity=logging.WARNING,
            ))

        params = {
            "client_id": self.credentials.client_id,
            "redirect_uri": self.credentials.redirect_uri,
            "response_type": "code",
        }
        if scopes:
            params["scope"] = " ".join(s.value for s in scopes)
        if state:
            params["state"] = state
        if description:
            params["description"] = description
        if prompt:
            params["prompt"] = Prompt(prompt).value
        if login_hint:
            params["login_hint"] = login_hint

        logger.debug(f"Built authorization URL with scopes {params.get('scope', '')!r}")
        return f"{OAUTH_AUTHORIZE_URL}?{urlencode(params, quote_via=quote)}"
