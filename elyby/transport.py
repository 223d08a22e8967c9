"""Shared HTTP call helper used by every Ely.by API family"""

import json
import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from .headers import DEFAULT_HEADERS
from .logging_utils import redact
from .result import ApiError, ErrorKind, Failure, Result, Success
from .settings import connect_timeout, request_timeout

logger = logging.getLogger(__name__)

T = TypeVar("T")

# authserver reports failures in "errorMessage", account.ely.by in "message"
AUTHSERVER_MESSAGE_KEY = "errorMessage"
ACCOUNT_MESSAGE_KEY = "message"

# Upper bound on raw body text copied into an error
ERROR_TEXT_LIMIT = 200


def build_timeout() -> httpx.Timeout:
    """Timeout applied to clients the library creates itself"""
    return httpx.Timeout(request_timeout(), connect=connect_timeout())


def extract_upstream_message(response: httpx.Response, message_key: str) -> Optional[str]:
    """Pull the service's explanation out of an error response

    Args:
        response: Non-2xx response
        message_key: Field the API family uses for its error text

    Returns:
        The upstream message, the truncated body text, or None for an empty body
    """
    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    if isinstance(payload, dict):
        for key in (message_key, AUTHSERVER_MESSAGE_KEY, ACCOUNT_MESSAGE_KEY, "error"):
            if payload.get(key):
                return str(payload[key])

    text = response.text.strip()
    return text[:ERROR_TEXT_LIMIT] if text else None


async def send_request(
    method: str,
    url: str,
    *,
    json_body: Any = None,
    headers: Optional[Dict[str, str]] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    message_key: str = AUTHSERVER_MESSAGE_KEY,
) -> Result[httpx.Response]:
    """Perform exactly one HTTP request

    Cancellation is not intercepted; it reaches the caller unchanged.

    Args:
        method: HTTP method
        url: Absolute endpoint URL
        json_body: Payload serialized as the JSON request body
        headers: Extra headers merged over the defaults
        http_client: Caller-owned client; a short-lived one is created if None
        message_key: Field holding the upstream error text

    Returns:
        Success with the 2xx response, or Failure describing the error
    """
    request_headers = {**DEFAULT_HEADERS, **(headers or {})}
    logger.debug(f"{method} {url} body={redact(json_body)}")

    try:
        if http_client is not None:
            response = await http_client.request(method, url, json=json_body, headers=request_headers)
        else:
            async with httpx.AsyncClient(timeout=build_timeout()) as client:
                response = await client.request(method, url, json=json_body, headers=request_headers)
    except httpx.TimeoutException as e:
        return Failure(ApiError(ErrorKind.TIMEOUT, f"{method} {url} timed out: {e!r}"))
    except httpx.RequestError as e:
        return Failure(ApiError(ErrorKind.TRANSPORT, f"{method} {url} failed: {e!r}"))

    logger.debug(f"{method} {url} -> {response.status_code}")

    if response.is_success:
        return Success(response)

    kind = ErrorKind.UNAUTHORIZED if response.status_code == 401 else ErrorKind.HTTP
    return Failure(ApiError(
        kind,
        f"{method} {url} failed with status {response.status_code}",
        status_code=response.status_code,
        upstream_message=extract_upstream_message(response, message_key),
    ))


def parse_response(result: Result[httpx.Response], model: Type[T]) -> Result[T]:
    """Decode a successful response body into ``model``

    A 204 or an empty body is Ely.by's way of saying "nothing matched" and
    becomes a NOT_FOUND failure.

    Args:
        result: Outcome of send_request
        model: pydantic model or type expression (e.g. List[Profile])

    Returns:
        Success with the parsed payload, or Failure
    """
    if not result.ok:
        return result

    response = result.value
    request = response.request
    if response.status_code == 204 or not response.content.strip():
        return Failure(ApiError(
            ErrorKind.NOT_FOUND,
            f"{request.method} {request.url} returned no content",
            status_code=response.status_code,
            severity=logging.INFO,
        ))

    try:
        payload = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Failure(ApiError(
            ErrorKind.DECODE,
            f"{request.method} {request.url} returned invalid JSON: {e}",
            status_code=response.status_code,
        ))

    try:
        return Success(TypeAdapter(model).validate_python(payload))
    except ValidationError as e:
        return Failure(ApiError(
            ErrorKind.DECODE,
            f"{request.method} {request.url} returned an unexpected payload: {e.error_count()} validation error(s)",
            status_code=response.status_code,
        ))


def discard_body(result: Result[httpx.Response]) -> Result[None]:
    """Map a call whose success body is empty onto Success(None)"""
    if not result.ok:
        return result
    return Success(None)
