"""
Logging utilities: the default error sink, request body redaction and an
opt-in handler setup.
"""
import logging
from typing import Any, Callable, Optional

from .result import ApiError
from .settings import log_level

logger = logging.getLogger(__name__)

# Failures reported by the default sink go through this logger so that
# applications can silence or reroute them independently of debug tracing
error_logger = logging.getLogger("elyby.errors")

ErrorSink = Callable[[ApiError], None]

SENSITIVE_FIELDS = frozenset({
    "password",
    "accessToken",
    "clientToken",
    "access_token",
    "refresh_token",
    "client_secret",
    "code",
})


def log_api_error(error: ApiError) -> None:
    """Default error sink: report the failure through ``elyby.errors``"""
    error_logger.log(error.severity, str(error))


def redact(body: Any) -> Any:
    """Return a copy of a request body safe to write to debug logs"""
    if isinstance(body, dict):
        return {
            key: "[REDACTED]" if key in SENSITIVE_FIELDS and value else value
            for key, value in body.items()
        }
    return body


class ElybyStreamHandler(logging.StreamHandler):
    """Stream handler installed by configure_logging"""


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stream handler to the package logger

    Libraries should not configure logging on import; call this from an
    application or an interactive session when the package's own output is
    wanted.

    Args:
        level: Level name (e.g. "debug"). Defaults to ELYBY_LOG_LEVEL.

    Returns:
        The configured ``elyby`` logger
    """
    package_logger = logging.getLogger("elyby")
    package_logger.setLevel((level or log_level()).upper())
    if not any(isinstance(h, ElybyStreamHandler) for h in package_logger.handlers):
        handler = ElybyStreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        package_logger.addHandler(handler)
    return package_logger
