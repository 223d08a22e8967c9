"""
Base class shared by the Ely.by API components.
Holds the injected HTTP client and error sink; carries no session state.
"""
import logging
from typing import Optional

import httpx

from .logging_utils import ErrorSink, log_api_error
from .result import ApiError, ErrorKind, Failure, Result


class BaseClient:
    """Common plumbing for ProfileDirectory, LegacyAuthClient and OAuthClient"""

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        error_sink: Optional[ErrorSink] = None,
    ):
        """
        Args:
            http_client: Caller-owned async client used for every request.
                When None, each call opens and closes its own client.
            error_sink: Callable receiving every ApiError. Defaults to
                logging through the ``elyby.errors`` logger.
        """
        self.http_client = http_client
        self.error_sink = error_sink or log_api_error

    def _report(self, result: Result) -> Result:
        """Hand a failed result to the error sink and pass it through"""
        if not result.ok:
            self.error_sink(result.error)
        return result

    def _invalid_argument(self, message: str, severity: int = logging.ERROR) -> Failure:
        """Report a rejected argument; nothing is sent upstream"""
        failure = Failure(ApiError(ErrorKind.VALIDATION, message, severity=severity))
        self.error_sink(failure.error)
        return failure

    def _missing_parameter(self, name: str, severity: int = logging.ERROR) -> Failure:
        return self._invalid_argument(f"Required parameter is missing: {name}", severity)
