"""Async GraphQL execution client for the Linear API.

Sends built operations through the shared HTTP client with retry and
optional rate-limit gating, and normalizes failures into LinearError.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..auth.base import AuthProvider
from ..exceptions import LinearError, RemoteGraphQLError, ValidationError, to_linear_error
from .query_builder import Operation
from .rate_limit import FixedWindowRateLimiter
from .retry import DEFAULT_BASE_DELAY, DEFAULT_MAX_DELAY, DEFAULT_MAX_RETRIES

logger = logging.getLogger(__name__)

LINEAR_API_URL = "https://api.linear.app/graphql"


@dataclass
class OperationResult:
    success: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    operation_name: str = ""


@dataclass
class BatchResult:
    success: bool
    results: List[OperationResult] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class GraphQLClient:
    """Executes operations against one GraphQL endpoint."""

    def __init__(
        self,
        auth: AuthProvider,
        endpoint: str = LINEAR_API_URL,
        max_retries: int = DEFAULT_MAX_RETRIES,
        rate_limiter: Optional[FixedWindowRateLimiter] = None,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
    ):
        self.auth = auth
        self.endpoint = endpoint
        self.max_retries = max_retries
        self.rate_limiter = rate_limiter
        self.base_delay = base_delay
        self.max_delay = max_delay

    async def execute(self, operation: Operation) -> Dict[str, Any]:
        """Execute a single operation.

        Returns:
            The "data" portion of the response.

        Raises:
            RemoteGraphQLError: If the response contains GraphQL errors.
            ValidationError: If the variables cannot be encoded as JSON (NaN,
                for example); nothing is sent.
            LinearError: For transport failures once retries are exhausted.
        """
        from .retry import retry_with_backoff

        _ensure_sendable(operation)

        if self.rate_limiter is not None:
            await self.rate_limiter.acquire()

        logger.debug(
            "Executing GraphQL %s %s\nquery: %s\nvariables: %s",
            operation.operation_type,
            operation.operation_name,
            operation.query,
            operation.variables,
        )

        try:
            data = await retry_with_backoff(
                self._send,
                operation,
                max_retries=self.max_retries,
                base_delay=self.base_delay,
                max_delay=self.max_delay,
            )
        except LinearError as exc:
            logger.debug(
                "GraphQL %s failed (%s): %s\nquery: %s\nvariables: %s",
                operation.operation_name,
                exc.code,
                exc,
                operation.query,
                operation.variables,
            )
            raise

        logger.debug(
            "GraphQL %s succeeded\nquery: %s\nvariables: %s\ndata: %s",
            operation.operation_name,
            operation.query,
            operation.variables,
            data,
        )
        return data

    async def execute_batch(self, operations: Sequence[Operation]) -> BatchResult:
        """Execute operations concurrently.

        Failures are captured per operation and never raised. ``results``
        follows the order of ``operations``.
        """
        if not operations:
            return BatchResult(success=True)

        results = await asyncio.gather(*(self._execute_captured(op) for op in operations))
        errors = [r.error for r in results if not r.success and r.error]
        return BatchResult(
            success=all(r.success for r in results),
            results=list(results),
            errors=errors,
        )

    async def _execute_captured(self, operation: Operation) -> OperationResult:
        name = getattr(operation, "operation_name", "")
        try:
            data = await self.execute(operation)
        except Exception as exc:
            error = to_linear_error(exc)
            logger.warning("Batch operation %s failed: %s", name, error)
            return OperationResult(success=False, error=str(error), operation_name=name)
        return OperationResult(success=True, data=data, operation_name=name)

    async def _send(self, operation: Operation) -> Dict[str, Any]:
        from .http_client import get_http_client

        client = get_http_client()
        response = await client.post(
            self.endpoint,
            json=operation.to_payload(),
            headers={
                "Authorization": await self.auth.authorization_header(),
                "Content-Type": "application/json",
            },
        )

        # Linear reports query validation failures as HTTP 400 with a GraphQL body
        if response.status_code == 400:
            _raise_for_graphql_errors(_json_or_none(response))
        response.raise_for_status()

        body = response.json()
        _raise_for_graphql_errors(body)
        return body.get("data") or {}


def _ensure_sendable(operation: Operation) -> None:
    try:
        json.dumps(operation.variables, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ValidationError(
            f"Variables for {operation.operation_name} cannot be sent as JSON: {exc}"
        ) from exc


def _json_or_none(response) -> Optional[Dict[str, Any]]:
    try:
        return response.json()
    except ValueError:
        return None


def _raise_for_graphql_errors(body: Optional[Dict[str, Any]]) -> None:
    if not body or not body.get("errors"):
        return
    errors = body["errors"]
    error_messages = "; ".join(e.get("message", "Unknown error") for e in errors)
    raise RemoteGraphQLError(f"GraphQL error: {error_messages}", errors=errors)
