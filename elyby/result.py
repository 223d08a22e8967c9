"""Tagged results returned by every Ely.by API call

A call either succeeds with a payload (``Success``) or fails with an
``ApiError`` describing what went wrong (``Failure``). ``Failure`` is falsy
and ``Success`` is truthy, so ``if result:`` tests whether the call went
through. Note that a successful ``validate()`` may carry ``False``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Classification of a failed call"""

    VALIDATION = "validation"      # required parameter missing, nothing was sent
    NOT_FOUND = "not_found"        # upstream answered 204 with an empty body
    UNAUTHORIZED = "unauthorized"  # upstream answered 401
    HTTP = "http"                  # any other non-2xx status
    TIMEOUT = "timeout"
    TRANSPORT = "transport"        # connection, DNS, TLS, protocol errors
    DECODE = "decode"              # body was not the expected JSON


@dataclass(frozen=True)
class ApiError:
    """Describes a failed call

    Attributes:
        kind: Failure classification
        message: Human readable description of the failure
        status_code: HTTP status of the response, when one was received
        upstream_message: errorMessage/message reported by Ely.by, if any
        severity: logging level the default error sink reports this at
    """
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    upstream_message: Optional[str] = None
    severity: int = logging.ERROR

    def __str__(self) -> str:
        if self.upstream_message:
            return f"{self.message}. {self.upstream_message}"
        return self.message


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful call carrying the parsed payload"""
    value: T

    ok: ClassVar[bool] = True
    error: ClassVar[None] = None

    def __bool__(self) -> bool:
        return True

    def value_or(self, default: Any = None) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """Failed call carrying the error descriptor"""
    error: ApiError

    ok: ClassVar[bool] = False
    value: ClassVar[None] = None

    def __bool__(self) -> bool:
        return False

    def value_or(self, default: Any = None) -> Any:
        """Return ``default``; ``value_or(None)`` gives the classic null sentinel"""
        return default

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


Result = Union[Success[T], Failure]
