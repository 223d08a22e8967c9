"""Client library for the Ely.by identity service

Three independent components, one per upstream API family:

- ProfileDirectory: username/UUID lookups
- LegacyAuthClient: Yggdrasil-compatible launcher authentication
- OAuthClient: OAuth2 authorization-code flow

Every API call is a coroutine returning a Result (Success or Failure).
"""

__version__ = "1.0.0"

from .api import ProfileDirectory
from .client import LegacyAuthClient, join_totp
from .errors import ConfigurationError, ElybyError
from .logging_utils import configure_logging, log_api_error
from .models import (
    AuthenticateSession,
    AuthSession,
    OAuthAccount,
    OAuthTokenPair,
    Profile,
    ProfileProperty,
    ProfileWithProperties,
    Prompt,
    Scope,
    UserRecord,
    UsernameHistoryEntry,
)
from .oauth import OAuthClient
from .result import ApiError, ErrorKind, Failure, Result, Success
from .settings import MAX_USERNAMES_PER_REQUEST

__all__ = [
    "__version__",
    "ProfileDirectory",
    "LegacyAuthClient",
    "OAuthClient",
    "join_totp",
    "ConfigurationError",
    "ElybyError",
    "configure_logging",
    "log_api_error",
    "AuthenticateSession",
    "AuthSession",
    "OAuthAccount",
    "OAuthTokenPair",
    "Profile",
    "ProfileProperty",
    "ProfileWithProperties",
    "Prompt",
    "Scope",
    "UserRecord",
    "UsernameHistoryEntry",
    "ApiError",
    "ErrorKind",
    "Failure",
    "Result",
    "Success",
    "MAX_USERNAMES_PER_REQUEST",
]
