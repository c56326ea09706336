"""Project service: projects, project milestones and project bootstrapping."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..graphql.client import GraphQLClient
from ..operations import Operations
from .base import BaseService
from .bulk import DEFAULT_CONCURRENCY, BulkResult
from .issues import IssueService

logger = logging.getLogger(__name__)


@dataclass
class ProjectWithIssues:
    project: Dict[str, Any]
    issues: BulkResult


class ProjectService(BaseService):
    """Projects, milestones, and bootstrapping a project with its issues."""

    def __init__(
        self,
        client: GraphQLClient,
        issue_service: Optional[IssueService] = None,
        bulk_concurrency: int = DEFAULT_CONCURRENCY,
    ):
        super().__init__(client, bulk_concurrency)
        self.issues = issue_service or IssueService(client, bulk_concurrency)

    async def get_project(self, project_id: str) -> Dict[str, Any]:
        data = await self._execute(Operations.projects.get_project(project_id), "get project")
        return self._entity(data, "project", "Project", project_id)

    async def get_projects(
        self,
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._execute(Operations.projects.get_projects(first, after), "list projects")
        return data.get("projects") or {"nodes": []}

    async def search_projects(self, filter_: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        data = await self._execute(Operations.projects.search_projects(filter_), "list projects")
        return data.get("projects") or {"nodes": []}

    async def create_project(self, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(Operations.projects.create_project(input_), "create project")
        return self._mutation_payload(data, "projectCreate", "create project")["project"]

    async def update_project(self, project_id: str, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(
            Operations.projects.update_project(project_id, input_), "update project"
        )
        return self._mutation_payload(data, "projectUpdate", "update project")["project"]

    async def create_project_with_issues(
        self,
        project_input: Dict[str, Any],
        issues: List[Dict[str, Any]],
    ) -> ProjectWithIssues:
        """Create a project, then its issues in the bounded pool.

        The project is kept even if some or all issues fail.
        """
        project = await self.create_project(project_input)
        issue_inputs = [{**issue, "projectId": project["id"]} for issue in issues]
        created = await self.issues.bulk_create_issues(issue_inputs)
        if created.failed:
            logger.warning(
                "Project %s created but %d of %d issues failed",
                project.get("id"),
                created.failed,
                len(issue_inputs),
            )
        return ProjectWithIssues(project=project, issues=created)

    # -- milestones --------------------------------------------------------

    async def get_project_milestones(
        self,
        project_id: str,
        filter_: Optional[Dict[str, Any]] = None,
        first: Optional[int] = None,
        after: Optional[str] = None,
        last: Optional[int] = None,
        before: Optional[str] = None,
        include_archived: Optional[bool] = None,
        order_by: Optional[str] = None,
    ) -> Dict[str, Any]:
        scoped = dict(filter_ or {})
        scoped["project"] = {"id": {"eq": project_id}}
        operation = Operations.projects.get_project_milestones(
            scoped,
            first=first,
            after=after,
            last=last,
            before=before,
            include_archived=include_archived,
            order_by=order_by,
        )
        data = await self._execute(operation, "get project milestones")
        return data.get("projectMilestones") or {"nodes": []}

    async def create_project_milestone(self, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(
            Operations.projects.create_project_milestone(input_), "create project milestone"
        )
        payload = self._mutation_payload(data, "projectMilestoneCreate", "create project milestone")
        return payload["projectMilestone"]

    async def update_project_milestone(
        self,
        milestone_id: str,
        input_: Dict[str, Any],
    ) -> Dict[str, Any]:
        data = await self._execute(
            Operations.projects.update_project_milestone(milestone_id, input_),
            "update project milestone",
        )
        payload = self._mutation_payload(data, "projectMilestoneUpdate", "update project milestone")
        return payload["projectMilestone"]

    async def delete_project_milestone(self, milestone_id: str) -> Dict[str, Any]:
        data = await self._execute(
            Operations.projects.delete_project_milestone(milestone_id),
            "delete project milestone",
        )
        self._mutation_payload(data, "projectMilestoneDelete", "delete project milestone")
        return {"id": milestone_id, "deleted": True}
