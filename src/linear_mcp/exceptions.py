"""Exception types shared by every layer of the Linear MCP server.

Services raise these and re-raise after logging. The tool dispatcher is the
only place that turns them into error responses, so nothing here is caught
further down the stack.
"""

from typing import Any, Dict, List, Optional


class LinearError(Exception):
    """Base exception for all Linear adapter errors."""

    code = "LINEAR_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        if code is not None:
            self.code = code
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(LinearError):
    """Startup configuration is missing or invalid (e.g. no credentials)."""

    code = "CONFIG_ERROR"


class AuthenticationError(LinearError):
    """Linear rejected the credential (401/403) or a token exchange failed."""

    code = "AUTH_ERROR"


class UnauthenticatedError(AuthenticationError):
    """No usable credential is available for the call."""

    code = "UNAUTHENTICATED"


class ValidationError(LinearError):
    """Invalid input provided to a tool or service."""

    code = "VALIDATION_ERROR"


class UnknownToolError(LinearError):
    """A tool name has no handler binding."""

    code = "UNKNOWN_TOOL"


class NotFoundError(LinearError):
    """Requested entity does not exist."""

    code = "NOT_FOUND"


class RateLimitError(LinearError):
    """Rate limit exceeded (429). Includes retry_after hint if available."""

    code = "RATE_LIMIT_ERROR"

    def __init__(
        self,
        message: str,
        retry_after: Optional[float] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.retry_after = retry_after
        super().__init__(message, details=details)


class NetworkError(LinearError):
    """Connection failure or timeout talking to the API."""

    code = "NETWORK_ERROR"


class ServerError(LinearError):
    """API returned an HTTP error status."""

    code = "SERVER_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int = 0,
        response_body: str = "",
    ):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, details={"status_code": status_code})


class RemoteGraphQLError(LinearError):
    """The API answered with structured GraphQL errors."""

    code = "GRAPHQL_ERROR"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.errors = errors or []
        super().__init__(message, details={"errors": self.errors})


class QueryBuildError(LinearError):
    """A GraphQL document could not be assembled or parsed."""

    code = "QUERY_BUILD_ERROR"


class UnknownError(LinearError):
    """Wraps anything raised that is not already a LinearError."""

    code = "UNKNOWN_ERROR"


class FragmentError(LinearError):
    """Base class for fragment registry errors."""

    code = "FRAGMENT_ERROR"


class DuplicateFragmentError(FragmentError):
    """A fragment name was registered twice."""


class FragmentNotFoundError(FragmentError):
    """A fragment name is not registered."""


class FragmentConflictError(FragmentError):
    """Two different fragments were attached under one name."""


def to_linear_error(exc: BaseException) -> LinearError:
    """Return ``exc`` unchanged if it is a LinearError, else wrap it."""
    if isinstance(exc, LinearError):
        return exc
    message = str(exc) or type(exc).__name__
    wrapped = UnknownError(message, details={"type": type(exc).__name__})
    wrapped.__cause__ = exc
    return wrapped
