"""HTTP request headers sent with every Ely.by API call"""

from typing import Dict

from .. import __version__

# User-Agent string for API requests
USER_AGENT = f"elyby-python/{__version__}"

DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": USER_AGENT,
    "Accept": "application/json",
}


def bearer_header(access_token: str) -> Dict[str, str]:
    """Build the Authorization header for OAuth-protected endpoints"""
    return {"Authorization": f"Bearer {access_token}"}
