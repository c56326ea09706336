"""GraphQL operations for Linear projects and project milestones."""

from typing import Any, Dict, Optional

from ..graphql.query_builder import Operation, QueryBuilder
from .issues import PAGE_INFO

TEAM_REFS = {"nodes": {"id": True, "name": True}}


def get_project(project_id: str) -> Operation:
    return (
        QueryBuilder.query("GetProject")
        .declare_variable("id", "String", required=True)
        .bind("id", project_id)
        .use_fragment("ProjectFields")
        .use_fragment("ProjectMilestoneFields")
        .select({
            "project": {
                "__args": {"id": "$id"},
                "__fragment": "ProjectFields",
                "teams": TEAM_REFS,
                "projectMilestones": {
                    "nodes": {"__fragment": "ProjectMilestoneFields"},
                },
            },
        })
        .finalize()
    )


def get_projects(first: Optional[int] = None, after: Optional[str] = None) -> Operation:
    return (
        QueryBuilder.query("GetProjects")
        .declare_variable("first", "Int")
        .declare_variable("after", "String")
        .bind_optional("first", first)
        .bind_optional("after", after)
        .use_fragment("ProjectFields")
        .select({
            "projects": {
                "__args": {"first": "$first", "after": "$after"},
                "nodes": {"__fragment": "ProjectFields"},
                "pageInfo": PAGE_INFO,
            },
        })
        .finalize()
    )


def search_projects(filter_: Optional[Dict[str, Any]] = None) -> Operation:
    return (
        QueryBuilder.query("SearchProjects")
        .declare_variable("filter", "ProjectFilter")
        .bind_optional("filter", filter_)
        .select({
            "projects": {
                "__args": {"filter": "$filter"},
                "nodes": {
                    "id": True,
                    "name": True,
                    "description": True,
                    "url": True,
                    "state": True,
                    "teams": TEAM_REFS,
                },
            },
        })
        .finalize()
    )


def create_project(input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("CreateProject")
        .declare_variable("input", "ProjectCreateInput", required=True)
        .bind("input", input_)
        .use_fragment("ProjectFields")
        .select({
            "projectCreate": {
                "__args": {"input": "$input"},
                "success": True,
                "project": {"__fragment": "ProjectFields"},
            },
        })
        .finalize()
    )


def update_project(project_id: str, input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("UpdateProject")
        .declare_variable("id", "String", required=True)
        .declare_variable("input", "ProjectUpdateInput", required=True)
        .bind("id", project_id)
        .bind("input", input_)
        .use_fragment("ProjectFields")
        .select({
            "projectUpdate": {
                "__args": {"id": "$id", "input": "$input"},
                "success": True,
                "project": {"__fragment": "ProjectFields"},
            },
        })
        .finalize()
    )


def get_project_milestones(
    filter_: Optional[Dict[str, Any]] = None,
    first: Optional[int] = None,
    after: Optional[str] = None,
    last: Optional[int] = None,
    before: Optional[str] = None,
    include_archived: Optional[bool] = None,
    order_by: Optional[str] = None,
) -> Operation:
    builder = (
        QueryBuilder.query("GetProjectMilestones")
        .declare_variable("filter", "ProjectMilestoneFilter")
        .declare_variable("first", "Int")
        .declare_variable("after", "String")
        .declare_variable("last", "Int")
        .declare_variable("before", "String")
        .declare_variable("includeArchived", "Boolean")
        .declare_variable("orderBy", "PaginationOrderBy")
    )
    for name, value in (
        ("filter", filter_),
        ("first", first),
        ("after", after),
        ("last", last),
        ("before", before),
        ("includeArchived", include_archived),
        ("orderBy", order_by),
    ):
        builder.bind_optional(name, value)

    return (
        builder
        .use_fragment("ProjectMilestoneFields")
        .select({
            "projectMilestones": {
                "__args": {
                    "filter": "$filter",
                    "first": "$first",
                    "after": "$after",
                    "last": "$last",
                    "before": "$before",
                    "includeArchived": "$includeArchived",
                    "orderBy": "$orderBy",
                },
                "nodes": {"__fragment": "ProjectMilestoneFields"},
                "pageInfo": {"hasNextPage": True, "endCursor": True},
            },
        })
        .finalize()
    )


def create_project_milestone(input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("CreateProjectMilestone")
        .declare_variable("input", "ProjectMilestoneCreateInput", required=True)
        .bind("input", input_)
        .use_fragment("ProjectMilestoneFields")
        .select({
            "projectMilestoneCreate": {
                "__args": {"input": "$input"},
                "success": True,
                "projectMilestone": {"__fragment": "ProjectMilestoneFields"},
            },
        })
        .finalize()
    )


def update_project_milestone(milestone_id: str, input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("UpdateProjectMilestone")
        .declare_variable("id", "String", required=True)
        .declare_variable("input", "ProjectMilestoneUpdateInput", required=True)
        .bind("id", milestone_id)
        .bind("input", input_)
        .use_fragment("ProjectMilestoneFields")
        .select({
            "projectMilestoneUpdate": {
                "__args": {"id": "$id", "input": "$input"},
                "success": True,
                "projectMilestone": {"__fragment": "ProjectMilestoneFields"},
            },
        })
        .finalize()
    )


def delete_project_milestone(milestone_id: str) -> Operation:
    return (
        QueryBuilder.mutation("DeleteProjectMilestone")
        .declare_variable("id", "String", required=True)
        .bind("id", milestone_id)
        .select({
            "projectMilestoneDelete": {
                "__args": {"id": "$id"},
                "success": True,
            },
        })
        .finalize()
    )
