"""Shared plumbing for domain services."""

import logging
from typing import Any, Dict

from ..exceptions import LinearError, NotFoundError, RemoteGraphQLError
from ..graphql.client import GraphQLClient
from ..graphql.query_builder import Operation
from .bulk import DEFAULT_CONCURRENCY

logger = logging.getLogger(__name__)


class BaseService:
    """Executes catalog operations and unwraps their payloads."""

    def __init__(self, client: GraphQLClient, bulk_concurrency: int = DEFAULT_CONCURRENCY):
        self.client = client
        self.bulk_concurrency = bulk_concurrency

    async def _execute(self, operation: Operation, action: str) -> Dict[str, Any]:
        try:
            return await self.client.execute(operation)
        except LinearError as exc:
            logger.error("Failed to %s (%s): %s", action, exc.code, exc)
            raise

    @staticmethod
    def _mutation_payload(data: Dict[str, Any], key: str, action: str) -> Dict[str, Any]:
        """Return ``data[key]``, raising when Linear did not report success."""
        payload = data.get(key) or {}
        if not payload.get("success"):
            raise RemoteGraphQLError(f"Linear did not confirm the request to {action}")
        return payload

    @staticmethod
    def _entity(data: Dict[str, Any], key: str, label: str, entity_id: str) -> Dict[str, Any]:
        entity = data.get(key)
        if not entity:
            raise NotFoundError(f"{label} not found: {entity_id}")
        return entity
