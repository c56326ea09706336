"""Issue tool handlers."""

from typing import Any, Dict

from ..services.issues import DEFAULT_ORDER_BY, DEFAULT_SEARCH_PAGE_SIZE, IssueService
from ..tools.arguments import (
    BulkUpdateIssuesArguments,
    CreateIssueArguments,
    CreateIssuesArguments,
    DeleteIssuesArguments,
    IdArguments,
    SearchIssuesArguments,
    SearchIssuesByIdentifierArguments,
    UpdateIssueArguments,
)
from .base import BaseHandler


class IssueHandler(BaseHandler):
    """Issue tools: create, update, search and delete, singly or in bulk."""

    def __init__(self, issues: IssueService):
        self.issues = issues

    async def create_issue(self, args: CreateIssueArguments) -> Dict[str, Any]:
        if args.parent_id:
            return await self.issues.create_child_issue(
                args.parent_id, args.to_input(exclude={"parent_id"})
            )
        return await self.issues.create_issue(args.to_input())

    async def create_issues(self, args: CreateIssuesArguments) -> Dict[str, Any]:
        result = await self.issues.bulk_create_issues([i.to_input() for i in args.issues])
        return self._bulk_summary("Created issues", result)

    async def update_issue(self, args: UpdateIssueArguments) -> Dict[str, Any]:
        return await self.issues.update_issue(args.id, args.to_input(exclude={"id"}))

    async def bulk_update_issues(self, args: BulkUpdateIssuesArguments) -> Dict[str, Any]:
        result = await self.issues.bulk_update_issues(args.issue_ids, args.update.to_input())
        return self._bulk_summary("Updated issues", result)

    async def search_issues(self, args: SearchIssuesArguments) -> Dict[str, Any]:
        return await self.issues.search_issues(
            query=args.query,
            team_ids=args.team_ids,
            assignee_ids=args.assignee_ids,
            states=args.states,
            priority=args.priority,
            first=args.first or DEFAULT_SEARCH_PAGE_SIZE,
            after=args.after,
            order_by=args.order_by or DEFAULT_ORDER_BY,
        )

    async def search_issues_by_identifier(
        self, args: SearchIssuesByIdentifierArguments
    ) -> Dict[str, Any]:
        return await self.issues.search_issues_by_identifier(args.identifiers)

    async def get_issue(self, args: IdArguments) -> Dict[str, Any]:
        return await self.issues.get_issue(args.id)

    async def delete_issue(self, args: IdArguments) -> Dict[str, Any]:
        return await self.issues.delete_issue(args.id)

    async def delete_issues(self, args: DeleteIssuesArguments) -> Dict[str, Any]:
        result = await self.issues.delete_issues(args.ids)
        return self._bulk_summary("Deleted issues", result)
