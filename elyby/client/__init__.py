"""Yggdrasil-compatible launcher authentication"""

from .legacy_auth import LegacyAuthClient, join_totp

__all__ = [
    "LegacyAuthClient",
    "join_totp",
]
