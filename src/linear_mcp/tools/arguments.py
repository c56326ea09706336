"""Typed tool arguments.

One model per tool shape. Fields are snake_case in Python and camelCase on
the wire, matching the tool schemas. The dispatcher validates raw arguments
against these once, so handlers only ever see well-formed input.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ToolArguments(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_input(self, exclude: Optional[set] = None) -> Dict[str, Any]:
        """camelCase dict of the fields that were set, for GraphQL inputs."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=exclude)


class NoArguments(ToolArguments):
    pass


class IdArguments(ToolArguments):
    id: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class AuthCallbackArguments(ToolArguments):
    code: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


class CreateIssueArguments(ToolArguments):
    title: str
    description: str
    team_id: Optional[str] = Field(None, min_length=1)
    parent_id: Optional[str] = None
    assignee_id: Optional[str] = None
    priority: Optional[int] = Field(None, ge=0, le=4)
    create_as_user: Optional[str] = None
    display_icon_url: Optional[str] = None

    @model_validator(mode="after")
    def team_or_parent(self):
        # a sub-issue defaults to its parent's team
        if not self.team_id and not self.parent_id:
            raise ValueError("teamId is required unless parentId is given")
        return self


class IssueItem(ToolArguments):
    title: str
    description: str
    team_id: str = Field(..., min_length=1)
    project_id: Optional[str] = None
    label_ids: Optional[List[str]] = None


class CreateIssuesArguments(ToolArguments):
    issues: List[IssueItem]


class UpdateIssueArguments(ToolArguments):
    id: str = Field(..., min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    state_id: Optional[str] = None
    assignee_id: Optional[str] = None
    priority: Optional[int] = Field(None, ge=0, le=4)


class IssueUpdateFields(ToolArguments):
    state_id: Optional[str] = None
    assignee_id: Optional[str] = None
    priority: Optional[int] = Field(None, ge=0, le=4)


class BulkUpdateIssuesArguments(ToolArguments):
    issue_ids: List[str]
    update: IssueUpdateFields


class SearchIssuesArguments(ToolArguments):
    query: Optional[str] = None
    team_ids: Optional[List[str]] = None
    assignee_ids: Optional[List[str]] = None
    states: Optional[List[str]] = None
    priority: Optional[int] = Field(None, ge=0, le=4)
    first: Optional[int] = Field(None, ge=1)
    after: Optional[str] = None
    order_by: Optional[str] = None


class SearchIssuesByIdentifierArguments(ToolArguments):
    identifiers: List[str] = Field(..., min_length=1)


class DeleteIssuesArguments(ToolArguments):
    ids: List[str]


# ---------------------------------------------------------------------------
# Projects and milestones
# ---------------------------------------------------------------------------


class ProjectInput(ToolArguments):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    team_ids: List[str] = Field(..., min_length=1)


class CreateProjectWithIssuesArguments(ToolArguments):
    project: ProjectInput
    issues: List[IssueItem]


class ListProjectsArguments(ToolArguments):
    filter_: Optional[Dict[str, Any]] = Field(None, alias="filter")


class GetProjectMilestonesArguments(ToolArguments):
    project_id: str = Field(..., min_length=1)
    filter_: Optional[Dict[str, Any]] = Field(None, alias="filter")
    first: Optional[int] = Field(None, ge=1)
    after: Optional[str] = None
    last: Optional[int] = Field(None, ge=1)
    before: Optional[str] = None
    include_archived: Optional[bool] = None
    order_by: Optional[str] = None


class CreateProjectMilestoneArguments(ToolArguments):
    project_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    target_date: Optional[str] = None
    sort_order: Optional[float] = None


class UpdateProjectMilestoneArguments(ToolArguments):
    id: str = Field(..., min_length=1)
    name: Optional[str] = None
    description: Optional[str] = None
    target_date: Optional[str] = None
    sort_order: Optional[float] = None


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class CreateCommentArguments(ToolArguments):
    body: str = Field(..., min_length=1)
    issue_id: str = Field(..., min_length=1)


class CommentBody(ToolArguments):
    body: str = Field(..., min_length=1)


class UpdateCommentArguments(ToolArguments):
    id: str = Field(..., min_length=1)
    input_: CommentBody = Field(..., alias="input")


class ResolveCommentArguments(ToolArguments):
    id: str = Field(..., min_length=1)
    resolving_comment_id: Optional[str] = None


class CreateCustomerNeedArguments(ToolArguments):
    attachment_id: str = Field(..., min_length=1)
    title: Optional[str] = None
    description: Optional[str] = None
    team_id: Optional[str] = None
