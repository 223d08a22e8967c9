from .config.loader import get_config_loader

# Tunables are resolved on each call, never at import time


def log_level() -> str:
    """Level name for configure_logging (ELYBY_LOG_LEVEL)"""
    return get_config_loader().get("LOG_LEVEL", "warning")


def connect_timeout() -> float:
    """Time to establish the TCP connection (ELYBY_CONNECT_TIMEOUT)"""
    return get_config_loader().get("CONNECT_TIMEOUT", 10.0)


def request_timeout() -> float:
    """Total timeout for a single API call (ELYBY_REQUEST_TIMEOUT)"""
    return get_config_loader().get("REQUEST_TIMEOUT", 30.0)


# Ely.by endpoints (hardcoded - not user configurable)
# authserver hosts the Yggdrasil-compatible API and the profile lookups,
# account.ely.by hosts OAuth2 and the account API
AUTH_SERVER_BASE = "https://authserver.ely.by"
ACCOUNT_BASE = "https://account.ely.by"
OAUTH_AUTHORIZE_URL = f"{ACCOUNT_BASE}/oauth2/v1"
OAUTH_TOKEN_URL = f"{ACCOUNT_BASE}/api/oauth2/v1/token"
ACCOUNT_INFO_URL = f"{ACCOUNT_BASE}/api/account/v1/info"

# Upstream refuses larger username batches
MAX_USERNAMES_PER_REQUEST = 100
