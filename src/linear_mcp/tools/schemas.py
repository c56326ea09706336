"""Static tool table exposed over MCP.

``build_tool_table`` is called once at startup. The optional prefix lets
several Linear workspaces run side by side in one MCP client: it is applied
to every tool name and description and nowhere else.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from mcp import types


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: Dict[str, Any]
    base_name: str = ""

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required", []))

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


def prefixed_name(base_name: str, prefix: Optional[str] = None) -> str:
    return f"{prefix}_{base_name}" if prefix else base_name


def prefixed_description(description: str, prefix: Optional[str] = None) -> str:
    return f"For '{prefix}' Linear workspace: {description}" if prefix else description


def _object(properties: Dict[str, Any], required: Tuple[str, ...] = ()) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


def _string(description: str) -> Dict[str, Any]:
    return {"type": "string", "description": description}


def _string_list(description: str, min_items: int = 0) -> Dict[str, Any]:
    schema: Dict[str, Any] = {
        "type": "array",
        "items": {"type": "string"},
        "description": description,
    }
    if min_items:
        schema["minItems"] = min_items
    return schema


_PRIORITY = {
    "type": "number",
    "description": "Priority: 0=No priority, 1=Urgent, 2=High, 3=Medium, 4=Low",
    "minimum": 0,
    "maximum": 4,
}

_ISSUE_ITEM = _object(
    {
        "title": _string("Issue title"),
        "description": _string("Issue description"),
        "teamId": _string("Team ID"),
        "projectId": _string("Project ID"),
        "labelIds": _string_list("Label IDs to apply"),
    },
    required=("title", "description", "teamId"),
)

_MILESTONE_FIELDS = {
    "description": _string("Milestone description"),
    "targetDate": _string("Target completion date (ISO format)"),
    "sortOrder": {"type": "number", "description": "Sort order for the milestone"},
}

# (base name, description, input schema)
TOOL_DEFINITIONS: Tuple[Tuple[str, str, Dict[str, Any]], ...] = (
    # -- Auth -------------------------------------------------------------
    (
        "linear_auth",
        "Start the OAuth flow with Linear and return the authorization URL",
        _object({}),
    ),
    (
        "linear_auth_callback",
        "Handle OAuth callback",
        _object({"code": _string("OAuth authorization code")}, required=("code",)),
    ),
    # -- Issues -----------------------------------------------------------
    (
        "linear_create_issue",
        "Create a new issue in Linear",
        _object(
            {
                "title": _string("Issue title"),
                "description": _string("Issue description"),
                "teamId": _string(
                    "Team ID (UUID). Required unless parentId is given, in which case "
                    "the parent's team is used"
                ),
                "parentId": _string("Parent issue ID (UUID, not issue identifier)"),
                "assigneeId": _string("Assignee user ID (UUID)"),
                "priority": _PRIORITY,
                "createAsUser": _string("Name to display for the created issue"),
                "displayIconUrl": _string("URL of the avatar to display"),
            },
            required=("title", "description"),
        ),
    ),
    (
        "linear_create_issues",
        "Create multiple issues at once",
        _object(
            {
                "issues": {
                    "type": "array",
                    "items": _ISSUE_ITEM,
                    "description": "List of issues to create",
                },
            },
            required=("issues",),
        ),
    ),
    (
        "linear_update_issue",
        "Update an existing issue",
        _object(
            {
                "id": _string("Issue UUID (not issue identifier like 'ENG-123')"),
                "title": _string("New title"),
                "description": _string("New description"),
                "stateId": _string("New state ID"),
                "assigneeId": _string("New assignee ID"),
                "priority": _PRIORITY,
            },
            required=("id",),
        ),
    ),
    (
        "linear_bulk_update_issues",
        "Update multiple issues at once",
        _object(
            {
                "issueIds": _string_list(
                    "List of issue UUIDs to update (not issue identifiers like 'ENG-123')"
                ),
                "update": _object(
                    {
                        "stateId": _string("New state ID"),
                        "assigneeId": _string("New assignee ID"),
                        "priority": _PRIORITY,
                    }
                ),
            },
            required=("issueIds", "update"),
        ),
    ),
    (
        "linear_search_issues",
        "Search for issues with filtering and pagination",
        _object(
            {
                "query": _string("Search query string"),
                "teamIds": _string_list("Filter by team IDs"),
                "assigneeIds": _string_list("Filter by assignee IDs"),
                "states": _string_list("Filter by state names"),
                "priority": _PRIORITY,
                "first": {"type": "number", "description": "Number of issues to return (default: 50)"},
                "after": _string("Cursor for pagination"),
                "orderBy": _string("Field to order by (default: updatedAt)"),
            }
        ),
    ),
    (
        "linear_search_issues_by_identifier",
        'Search for issues by their identifiers (e.g., ["ENG-78", "ENG-79"])',
        _object(
            {"identifiers": _string_list("Array of issue identifiers to search for", min_items=1)},
            required=("identifiers",),
        ),
    ),
    (
        "linear_get_issue",
        "Get an issue by ID",
        _object({"id": _string("Issue UUID or identifier")}, required=("id",)),
    ),
    (
        "linear_delete_issue",
        "Delete an issue",
        _object(
            {"id": _string("Issue UUID (not issue identifier like 'ENG-123')")},
            required=("id",),
        ),
    ),
    (
        "linear_delete_issues",
        "Delete multiple issues",
        _object({"ids": _string_list("List of issue IDs to delete")}, required=("ids",)),
    ),
    # -- Projects ---------------------------------------------------------
    (
        "linear_create_project_with_issues",
        "Create a new project with associated issues. Note: Project requires "
        "teamIds (array) not teamId (single value).",
        _object(
            {
                "project": _object(
                    {
                        "name": _string("Project name"),
                        "description": _string("Project description (optional)"),
                        "teamIds": _string_list(
                            "Array of team IDs this project belongs to (Required). "
                            "Use linear_get_teams to get available team IDs.",
                            min_items=1,
                        ),
                    },
                    required=("name", "teamIds"),
                ),
                "issues": {
                    "type": "array",
                    "items": _ISSUE_ITEM,
                    "description": "List of issues to create with this project",
                },
            },
            required=("project", "issues"),
        ),
    ),
    (
        "linear_get_project",
        "Get project information",
        _object({"id": _string("Project identifier")}, required=("id",)),
    ),
    (
        "linear_list_projects",
        "List all projects or filter them by criteria",
        _object(
            {
                "filter": {
                    "type": "object",
                    "description": "Optional ProjectFilter, e.g. {\"status\": {\"name\": {\"eq\": \"Started\"}}}",
                },
            }
        ),
    ),
    (
        "linear_get_project_milestones",
        "Get milestones for a project with filtering and pagination",
        _object(
            {
                "projectId": _string("Project ID to get milestones for"),
                "filter": {"type": "object", "description": "Optional ProjectMilestoneFilter"},
                "first": {"type": "number", "description": "Number of items to return (used with after)"},
                "after": _string("Cursor for forward pagination"),
                "last": {"type": "number", "description": "Number of items to return (used with before)"},
                "before": _string("Cursor for backward pagination"),
                "includeArchived": {"type": "boolean", "description": "Include archived milestones"},
                "orderBy": _string("Field to order by (createdAt or updatedAt)"),
            },
            required=("projectId",),
        ),
    ),
    (
        "linear_create_project_milestone",
        "Create a new project milestone",
        _object(
            {
                "projectId": _string("Project ID to create milestone for"),
                "name": _string("Milestone name"),
                **_MILESTONE_FIELDS,
            },
            required=("projectId", "name"),
        ),
    ),
    (
        "linear_update_project_milestone",
        "Update a project milestone",
        _object(
            {
                "id": _string("Milestone ID to update"),
                "name": _string("New milestone name"),
                **_MILESTONE_FIELDS,
            },
            required=("id",),
        ),
    ),
    (
        "linear_delete_project_milestone",
        "Delete a project milestone",
        _object({"id": _string("Milestone ID to delete")}, required=("id",)),
    ),
    # -- Teams / users ----------------------------------------------------
    (
        "linear_get_teams",
        "Get all teams with their states and labels",
        _object({}),
    ),
    (
        "linear_get_user",
        "Get current user information",
        _object({}),
    ),
    # -- Comments ---------------------------------------------------------
    (
        "linear_create_comment",
        "Creates a new comment on an issue",
        _object(
            {
                "body": _string("Comment text content"),
                "issueId": _string("ID of the issue to comment on"),
            },
            required=("body", "issueId"),
        ),
    ),
    (
        "linear_update_comment",
        "Updates an existing comment",
        _object(
            {
                "id": _string("Comment ID"),
                "input": _object({"body": _string("Updated comment text")}, required=("body",)),
            },
            required=("id", "input"),
        ),
    ),
    (
        "linear_delete_comment",
        "Deletes a comment",
        _object({"id": _string("Comment ID to delete")}, required=("id",)),
    ),
    (
        "linear_resolve_comment",
        "Resolves a comment",
        _object(
            {
                "id": _string("Comment ID to resolve"),
                "resolvingCommentId": _string("Optional ID of a resolving comment"),
            },
            required=("id",),
        ),
    ),
    (
        "linear_unresolve_comment",
        "Unresolves a comment",
        _object({"id": _string("Comment ID to unresolve")}, required=("id",)),
    ),
    (
        "linear_create_customer_need_from_attachment",
        "Creates a new customer need from an attachment",
        _object(
            {
                "attachmentId": _string("ID of the attachment"),
                "title": _string("Title for the customer need"),
                "description": _string("Description for the customer need"),
                "teamId": _string("Team ID for the customer need"),
            },
            required=("attachmentId",),
        ),
    ),
)


def build_tool_table(prefix: Optional[str] = None) -> List[ToolDescriptor]:
    """Descriptors for every tool, with ``prefix`` applied when given."""
    return [
        ToolDescriptor(
            name=prefixed_name(base_name, prefix),
            description=prefixed_description(description, prefix),
            input_schema=schema,
            base_name=base_name,
        )
        for base_name, description, schema in TOOL_DEFINITIONS
    ]
