"""Project and project milestone tool handlers."""

from typing import Any, Dict

from ..services.projects import ProjectService
from ..tools.arguments import (
    CreateProjectMilestoneArguments,
    CreateProjectWithIssuesArguments,
    GetProjectMilestonesArguments,
    IdArguments,
    ListProjectsArguments,
    UpdateProjectMilestoneArguments,
)
from .base import BaseHandler


class ProjectHandler(BaseHandler):
    """Project and milestone tools."""

    def __init__(self, projects: ProjectService):
        self.projects = projects

    async def create_project_with_issues(self, args: CreateProjectWithIssuesArguments) -> str:
        """Create the project and its issues, then summarise the outcome as text."""
        result = await self.projects.create_project_with_issues(
            args.project.to_input(),
            [issue.to_input() for issue in args.issues],
        )
        project = result.project
        lines = [
            "Successfully created project with issues",
            f"Project: {project.get('name')}",
            f"Project URL: {project.get('url')}",
        ]

        created = result.issues.successful_data()
        if created:
            lines.append(f"Issues created: {len(created)}")
            for issue in created:
                lines.append(
                    f"- {issue.get('identifier')}: {issue.get('title')} ({issue.get('url')})"
                )
        if result.issues.failed:
            lines.append(f"Issues failed: {result.issues.failed}")
            lines.extend(self._failure_lines(result.issues))
        return "\n".join(lines)

    async def get_project(self, args: IdArguments) -> Dict[str, Any]:
        return await self.projects.get_project(args.id)

    async def list_projects(self, args: ListProjectsArguments) -> Dict[str, Any]:
        return await self.projects.search_projects(args.filter_)

    async def get_project_milestones(self, args: GetProjectMilestonesArguments) -> Dict[str, Any]:
        return await self.projects.get_project_milestones(
            args.project_id,
            filter_=args.filter_,
            first=args.first,
            after=args.after,
            last=args.last,
            before=args.before,
            include_archived=args.include_archived,
            order_by=args.order_by,
        )

    async def create_project_milestone(
        self, args: CreateProjectMilestoneArguments
    ) -> Dict[str, Any]:
        return await self.projects.create_project_milestone(args.to_input())

    async def update_project_milestone(
        self, args: UpdateProjectMilestoneArguments
    ) -> Dict[str, Any]:
        return await self.projects.update_project_milestone(
            args.id, args.to_input(exclude={"id"})
        )

    async def delete_project_milestone(self, args: IdArguments) -> Dict[str, Any]:
        return await self.projects.delete_project_milestone(args.id)
