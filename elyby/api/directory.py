"""Profile lookups served by the Ely.by authorization server"""

import logging
from typing import List, Optional, Sequence
from urllib.parse import quote

import httpx

from ..base_client import BaseClient
from ..logging_utils import ErrorSink
from ..models import Profile, ProfileWithProperties, UsernameHistoryEntry
from ..result import Result, Success
from ..settings import AUTH_SERVER_BASE
from ..transport import parse_response, send_request

logger = logging.getLogger(__name__)


class ProfileDirectory(BaseClient):
    """Username and UUID lookups (https://docs.ely.by/en/api.html)

    Every method returns a Result. A username or UUID that Ely.by does not
    know yields a NOT_FOUND failure rather than an exception.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        uuid: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        error_sink: Optional[ErrorSink] = None,
    ):
        """
        Args:
            username: Default username for calls that omit one
            uuid: Default UUID for calls that omit one
            http_client: Caller-owned async client
            error_sink: Receiver of failure descriptors
        """
        super().__init__(http_client=http_client, error_sink=error_sink)
        self.username = username or ""
        self.uuid = uuid or ""

    async def uuid_by_username(self, username: Optional[str] = None) -> Result[Profile]:
        """Find the UUID of a user by their username

        Args:
            username: Searched username, case-insensitive. Falls back to the
                default username.

        Returns:
            Profile, or NOT_FOUND when no such user exists
        """
        username = username or self.username
        if not username:
            return self._missing_parameter("username")

        result = await send_request(
            "GET",
            f"{AUTH_SERVER_BASE}/api/users/profiles/minecraft/{quote(username, safe='')}",
            http_client=self.http_client,
        )
        return self._report(parse_response(result, Profile))

    async def username_history_by_uuid(self, uuid: Optional[str] = None) -> Result[List[UsernameHistoryEntry]]:
        """List every username an account has used

        Args:
            uuid: Account UUID, with or without hyphens. Falls back to the
                default UUID.

        Returns:
            History entries, or NOT_FOUND for an unknown UUID
        """
        uuid = uuid or self.uuid
        if not uuid:
            return self._missing_parameter("uuid")

        result = await send_request(
            "GET",
            f"{AUTH_SERVER_BASE}/api/user/profiles/{quote(uuid, safe='')}/names",
            http_client=self.http_client,
        )
        return self._report(parse_response(result, List[UsernameHistoryEntry]))

    async def usernames_to_uuids(self, usernames: Sequence[str]) -> Result[List[Profile]]:
        """Resolve a batch of usernames in one call

        Unknown usernames are skipped by the server, and the order of the
        returned profiles is not tied to the input. The server rejects more
        than MAX_USERNAMES_PER_REQUEST names; that rejection is returned as
        an HTTP failure.

        Args:
            usernames: Usernames to resolve. A bare string is rejected
                rather than split into characters.

        Returns:
            Profiles of the usernames that exist
        """
        if isinstance(usernames, str):
            return self._invalid_argument("usernames must be a sequence of names, not a single string")
        if not usernames:
            return self._missing_parameter("usernames")

        logger.debug(f"Resolving {len(usernames)} username(s) to UUIDs")

        result = await send_request(
            "POST",
            f"{AUTH_SERVER_BASE}/api/profiles/minecraft",
            json_body=list(usernames),
            http_client=self.http_client,
        )
        if result.ok and not result.value.content.strip():
            # A batch where nothing matched is an empty answer, not a miss
            return Success([])
        return self._report(parse_response(result, List[Profile]))

    async def profile_by_uuid(self, uuid: Optional[str] = None) -> Result[ProfileWithProperties]:
        """Fetch a profile together with its properties (skin, cape)

        Args:
            uuid: Account UUID. Falls back to the default UUID.

        Returns:
            Profile with properties, or NOT_FOUND
        """
        uuid = uuid or self.uuid
        if not uuid:
            return self._missing_parameter("uuid")

        result = await send_request(
            "GET",
            f"{AUTH_SERVER_BASE}/session/profile/{quote(uuid, safe='')}",
            http_client=self.http_client,
        )
        return self._report(parse_response(result, ProfileWithProperties))
