"""HTTP headers and constants package for the Ely.by client"""

from .constants import (
    USER_AGENT,
    DEFAULT_HEADERS,
    bearer_header,
)

__all__ = [
    "USER_AGENT",
    "DEFAULT_HEADERS",
    "bearer_header",
]
