"""
Pydantic models for Ely.by API payloads.

Field names follow the wire format exactly; unknown fields are ignored so
upstream additions do not break parsing.
"""
import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ElybyModel(BaseModel):
    """Immutable base for every payload"""
    model_config = ConfigDict(frozen=True, extra="ignore")


class Profile(ElybyModel):
    """Minecraft profile: UUID without hyphens and current username"""
    id: str
    name: str


class ProfileProperty(ElybyModel):
    """Name/value metadata entry, e.g. base64 encoded textures"""
    name: str
    value: str
    signature: Optional[str] = None


class ProfileWithProperties(Profile):
    """Profile returned by the session server"""
    properties: List[ProfileProperty] = []


class UsernameHistoryEntry(ElybyModel):
    """One entry of an account's username history

    changedToAt is absent for the name the account was registered with.
    """
    name: str
    changedToAt: Optional[int] = None  # epoch milliseconds

    @property
    def is_original(self) -> bool:
        return self.changedToAt is None

    @property
    def changed_to_at_datetime(self) -> Optional[datetime.datetime]:
        if self.changedToAt is None:
            return None
        return datetime.datetime.fromtimestamp(self.changedToAt / 1000, datetime.timezone.utc)


class UserRecord(ElybyModel):
    """Account record included when requestUser is true"""
    id: str
    username: str
    properties: List[ProfileProperty] = []


class AuthSession(ElybyModel):
    """Yggdrasil session returned by refresh"""
    accessToken: str
    clientToken: str
    selectedProfile: Profile
    user: Optional[UserRecord] = None


class AuthenticateSession(AuthSession):
    """Yggdrasil session returned by authenticate"""
    availableProfiles: List[Profile] = []


class Scope(str, Enum):
    """OAuth2 permissions Ely.by can grant"""
    ACCOUNT_INFO = "account_info"
    ACCOUNT_EMAIL = "account_email"
    OFFLINE_ACCESS = "offline_access"
    MINECRAFT_SERVER_SESSION = "minecraft_server_session"


class Prompt(str, Enum):
    """Forced behaviour of the authorization page"""
    CONSENT = "consent"
    SELECT_ACCOUNT = "select_account"


class OAuthTokenPair(ElybyModel):
    """Token endpoint response

    refresh_token is only issued by the authorization_code grant and only
    when offline_access was among the requested scopes.
    """
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"
    expires_in: int

    @property
    def has_refresh_token(self) -> bool:
        return bool(self.refresh_token)


class OAuthAccount(ElybyModel):
    """Account information available with the account_info scope"""
    id: int
    uuid: str
    username: str
    registeredAt: int
    profileLink: str
    preferredLanguage: str
    email: Optional[str] = None  # only with the account_email scope
