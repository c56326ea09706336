"""Issue service: CRUD, search and bulk operations on Linear issues."""

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import ValidationError
from ..operations import Operations
from ..operations.issues import parse_identifier_number
from .base import BaseService
from .bulk import BulkResult, run_bounded

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_PAGE_SIZE = 50
DEFAULT_ORDER_BY = "updatedAt"


def build_issue_filter(
    query: Optional[str] = None,
    team_ids: Optional[Sequence[str]] = None,
    assignee_ids: Optional[Sequence[str]] = None,
    states: Optional[Sequence[str]] = None,
    priority: Optional[int] = None,
) -> Dict[str, Any]:
    """Translate search arguments into a Linear ``IssueFilter``."""
    filter_: Dict[str, Any] = {}
    if query:
        filter_["or"] = [
            {"title": {"containsIgnoreCase": query}},
            {"description": {"containsIgnoreCase": query}},
        ]
    if team_ids:
        filter_["team"] = {"id": {"in": list(team_ids)}}
    if assignee_ids:
        filter_["assignee"] = {"id": {"in": list(assignee_ids)}}
    if states:
        filter_["state"] = {"name": {"in": list(states)}}
    if priority is not None:
        filter_["priority"] = {"eq": priority}
    return filter_


class IssueService(BaseService):
    """Issues, identifier search, child issues and bulk changes."""

    async def get_issue(self, issue_id: str) -> Dict[str, Any]:
        data = await self._execute(Operations.issues.get_issue(issue_id), "get issue")
        return self._entity(data, "issue", "Issue", issue_id)

    async def get_issues(
        self,
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._execute(Operations.issues.get_issues(first, after), "list issues")
        return data.get("issues") or {"nodes": []}

    async def create_issue(self, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(Operations.issues.create_issue(input_), "create issue")
        return self._mutation_payload(data, "issueCreate", "create issue")["issue"]

    async def update_issue(self, issue_id: str, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(
            Operations.issues.update_issue(issue_id, input_), "update issue"
        )
        return self._mutation_payload(data, "issueUpdate", "update issue")["issue"]

    async def delete_issue(self, issue_id: str) -> Dict[str, Any]:
        data = await self._execute(Operations.issues.delete_issue(issue_id), "delete issue")
        self._mutation_payload(data, "issueDelete", "delete issue")
        return {"id": issue_id, "deleted": True}

    async def create_child_issue(self, parent_id: str, input_: Dict[str, Any]) -> Dict[str, Any]:
        """Create a sub-issue; the team defaults to the parent's team."""
        parent = await self.get_issue(parent_id)
        child = dict(input_)
        child["parentId"] = parent_id
        parent_team = (parent.get("team") or {}).get("id")
        if parent_team and not child.get("teamId"):
            child["teamId"] = parent_team
        return await self.create_issue(child)

    async def search_issues(
        self,
        query: Optional[str] = None,
        team_ids: Optional[Sequence[str]] = None,
        assignee_ids: Optional[Sequence[str]] = None,
        states: Optional[Sequence[str]] = None,
        priority: Optional[int] = None,
        first: Optional[int] = DEFAULT_SEARCH_PAGE_SIZE,
        after: Optional[str] = None,
        order_by: Optional[str] = DEFAULT_ORDER_BY,
    ) -> Dict[str, Any]:
        filter_ = build_issue_filter(query, team_ids, assignee_ids, states, priority)
        operation = Operations.issues.search_issues(
            filter_ or None,
            first=first,
            after=after,
            order_by=order_by,
        )
        data = await self._execute(operation, "search issues")
        return data.get("issues") or {"nodes": []}

    async def search_issues_by_identifier(self, identifiers: Sequence[str]) -> Dict[str, Any]:
        if not identifiers:
            raise ValidationError("At least one issue identifier is required")
        malformed = [i for i in identifiers if math.isnan(parse_identifier_number(i))]
        if malformed:
            raise ValidationError(
                "Invalid issue identifiers (expected TEAM-123): " + ", ".join(malformed)
            )
        data = await self._execute(
            Operations.issues.get_issues_by_identifier(identifiers),
            "search issues by identifier",
        )
        return data.get("issues") or {"nodes": []}

    async def bulk_create_issues(self, inputs: List[Dict[str, Any]]) -> BulkResult:
        return await run_bounded(inputs, self.create_issue, self.bulk_concurrency)

    async def bulk_update_issues(self, issue_ids: List[str], input_: Dict[str, Any]) -> BulkResult:
        async def _update(issue_id: str) -> Dict[str, Any]:
            return await self.update_issue(issue_id, input_)

        return await run_bounded(issue_ids, _update, self.bulk_concurrency)

    async def delete_issues(self, issue_ids: List[str]) -> BulkResult:
        return await run_bounded(issue_ids, self.delete_issue, self.bulk_concurrency)
