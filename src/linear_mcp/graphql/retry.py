"""Retry with exponential backoff for Linear API requests.

Errors are classified once into an :class:`ErrorKind`; whether a kind is
retried is a static table lookup. Exceptions the HTTP layer does not type
(anything outside httpx and LinearError) fall back to a check of their
message for "network", "timeout", "500" or "503".
"""

import asyncio
import enum
import logging
from typing import Any, Awaitable, Callable, FrozenSet, Optional

import httpx

from ..exceptions import (
    AuthenticationError,
    LinearError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RemoteGraphQLError,
    ServerError,
    to_linear_error,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY = 1.0
DEFAULT_MAX_DELAY = 10.0

AUTH_FAILURE_CODES = frozenset({401, 403})

_MESSAGE_MARKERS = (
    ("timeout", "TIMEOUT"),
    ("network", "NETWORK"),
    ("500", "SERVER_ERROR"),
    ("503", "SERVER_ERROR"),
)


class ErrorKind(enum.Enum):
    NETWORK = "network"
    TIMEOUT = "timeout"
    SERVER_ERROR = "server_error"
    RATE_LIMITED = "rate_limited"
    AUTH = "auth"
    CLIENT_ERROR = "client_error"
    PROTOCOL = "protocol"
    UNKNOWN = "unknown"


RETRYABLE_KINDS: FrozenSet[ErrorKind] = frozenset({
    ErrorKind.NETWORK,
    ErrorKind.TIMEOUT,
    ErrorKind.SERVER_ERROR,
    ErrorKind.RATE_LIMITED,
})


def classify_status(status: int) -> ErrorKind:
    if status in AUTH_FAILURE_CODES:
        return ErrorKind.AUTH
    if status == 429:
        return ErrorKind.RATE_LIMITED
    if status >= 500:
        return ErrorKind.SERVER_ERROR
    return ErrorKind.CLIENT_ERROR


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception raised while talking to the API onto an ErrorKind."""
    if isinstance(exc, httpx.TimeoutException):
        return ErrorKind.TIMEOUT
    if isinstance(exc, httpx.HTTPStatusError):
        return classify_status(exc.response.status_code)
    if isinstance(exc, httpx.TransportError):
        return ErrorKind.NETWORK
    if isinstance(exc, RemoteGraphQLError):
        return ErrorKind.PROTOCOL
    if isinstance(exc, RateLimitError):
        return ErrorKind.RATE_LIMITED
    if isinstance(exc, AuthenticationError):
        return ErrorKind.AUTH
    if isinstance(exc, ServerError):
        return classify_status(exc.status_code) if exc.status_code else ErrorKind.SERVER_ERROR
    if isinstance(exc, NetworkError):
        return ErrorKind.NETWORK
    if isinstance(exc, LinearError):
        return ErrorKind.CLIENT_ERROR
    if isinstance(exc, ValueError):
        # malformed JSON body
        return ErrorKind.PROTOCOL

    message = str(exc).lower()
    for marker, kind in _MESSAGE_MARKERS:
        if marker in message:
            return ErrorKind[kind]
    return ErrorKind.UNKNOWN


def is_retryable(exc: BaseException) -> bool:
    return classify_error(exc) in RETRYABLE_KINDS


def compute_delay(
    attempt: int,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    exc: Optional[BaseException] = None,
) -> float:
    """Delay before the attempt following ``attempt`` (1-based).

    Doubles from ``base_delay`` and is capped at ``max_delay``. A 429 carrying
    a Retry-After header uses that value instead, under the same cap.
    """
    retry_after = _retry_after(exc) if exc is not None else None
    if retry_after is not None:
        return min(retry_after, max_delay)
    return min(base_delay * (2 ** (attempt - 1)), max_delay)


def _retry_after(exc: BaseException) -> Optional[float]:
    if isinstance(exc, RateLimitError):
        return exc.retry_after
    if isinstance(exc, httpx.HTTPStatusError):
        return _parse_retry_after(exc.response)
    return None


def _parse_retry_after(response: httpx.Response) -> Optional[float]:
    """Parse Retry-After header (seconds only, not HTTP-date)."""
    value = response.headers.get("Retry-After") or response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def to_typed_error(exc: BaseException, kind: Optional[ErrorKind] = None) -> LinearError:
    """Convert a transport-level exception into the matching LinearError."""
    if isinstance(exc, LinearError):
        return exc
    kind = kind or classify_error(exc)

    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if kind is ErrorKind.AUTH:
            error: LinearError = AuthenticationError(f"Authentication failed: HTTP {status}")
        elif kind is ErrorKind.RATE_LIMITED:
            error = RateLimitError(
                "Rate limited: HTTP 429",
                retry_after=_parse_retry_after(exc.response),
            )
        elif status == 404:
            error = NotFoundError("Not found: HTTP 404")
        else:
            error = ServerError(
                f"API error: HTTP {status}",
                status_code=status,
                response_body=exc.response.text[:500],
            )
    elif kind is ErrorKind.TIMEOUT:
        error = NetworkError(f"Request timed out: {exc}", code="TIMEOUT")
    elif kind is ErrorKind.NETWORK:
        error = NetworkError(f"Network error: {str(exc) or type(exc).__name__}")
    elif kind is ErrorKind.SERVER_ERROR:
        error = ServerError(f"Server error: {exc}")
    else:
        return to_linear_error(exc)

    error.__cause__ = exc
    return error


async def retry_with_backoff(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
    **kwargs: Any,
) -> Any:
    """Execute an async function, retrying transient failures.

    ``max_retries`` is the total number of attempts. Waits between attempts
    are 1s, 2s, 4s... capped at ``max_delay``.

    Retries on:
      - HTTP 429, 5xx
      - httpx transport errors and timeouts
      - untyped exceptions whose message mentions network, timeout, 500 or 503

    Never retries:
      - HTTP 401, 403 (raises AuthenticationError immediately)
      - GraphQL errors returned in the response body

    Raises:
        LinearError: the typed error for the last failure.
    """
    attempts = max(1, max_retries)

    for attempt in range(1, attempts + 1):
        try:
            return await fn(*args, **kwargs)
        except Exception as exc:
            kind = classify_error(exc)
            if kind not in RETRYABLE_KINDS or attempt >= attempts:
                if kind in RETRYABLE_KINDS:
                    logger.warning(
                        "Giving up after %d attempts: %s",
                        attempt,
                        kind.value,
                    )
                error = to_typed_error(exc, kind)
                if error is exc:
                    raise
                raise error from exc

            delay = compute_delay(attempt, base_delay, max_delay, exc)
            logger.warning(
                "Retryable %s error (attempt %d/%d), waiting %.1fs: %s",
                kind.value,
                attempt,
                attempts,
                delay,
                exc,
            )
            await asyncio.sleep(delay)
