"""Tool name to handler method bindings."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Tuple, Type

from ..exceptions import ConfigurationError
from . import arguments as a
from .schemas import ToolDescriptor


@dataclass(frozen=True)
class HandlerBinding:
    tool_name: str
    handler: Any
    method_name: str
    arguments_model: Type[a.ToolArguments]
    action: str
    requires_auth: bool = True


# base tool name -> (handler key, method name, arguments model, action)
BINDING_TABLE: Dict[str, Tuple[str, str, Type[a.ToolArguments], str]] = {
    "linear_auth": ("auth", "auth", a.NoArguments, "start authentication"),
    "linear_auth_callback": ("auth", "auth_callback", a.AuthCallbackArguments, "handle OAuth callback"),
    "linear_create_issue": ("issues", "create_issue", a.CreateIssueArguments, "create issue"),
    "linear_create_issues": ("issues", "create_issues", a.CreateIssuesArguments, "create issues"),
    "linear_update_issue": ("issues", "update_issue", a.UpdateIssueArguments, "update issue"),
    "linear_bulk_update_issues": (
        "issues", "bulk_update_issues", a.BulkUpdateIssuesArguments, "bulk update issues"
    ),
    "linear_search_issues": ("issues", "search_issues", a.SearchIssuesArguments, "search issues"),
    "linear_search_issues_by_identifier": (
        "issues",
        "search_issues_by_identifier",
        a.SearchIssuesByIdentifierArguments,
        "search issues by identifier",
    ),
    "linear_get_issue": ("issues", "get_issue", a.IdArguments, "get issue"),
    "linear_delete_issue": ("issues", "delete_issue", a.IdArguments, "delete issue"),
    "linear_delete_issues": ("issues", "delete_issues", a.DeleteIssuesArguments, "delete issues"),
    "linear_create_project_with_issues": (
        "projects",
        "create_project_with_issues",
        a.CreateProjectWithIssuesArguments,
        "create project with issues",
    ),
    "linear_get_project": ("projects", "get_project", a.IdArguments, "get project info"),
    "linear_list_projects": ("projects", "list_projects", a.ListProjectsArguments, "list projects"),
    "linear_get_project_milestones": (
        "projects",
        "get_project_milestones",
        a.GetProjectMilestonesArguments,
        "get project milestones",
    ),
    "linear_create_project_milestone": (
        "projects",
        "create_project_milestone",
        a.CreateProjectMilestoneArguments,
        "create project milestone",
    ),
    "linear_update_project_milestone": (
        "projects",
        "update_project_milestone",
        a.UpdateProjectMilestoneArguments,
        "update project milestone",
    ),
    "linear_delete_project_milestone": (
        "projects", "delete_project_milestone", a.IdArguments, "delete project milestone"
    ),
    "linear_get_teams": ("teams", "get_teams", a.NoArguments, "get teams"),
    "linear_get_user": ("users", "get_user", a.NoArguments, "get user info"),
    "linear_create_comment": ("comments", "create_comment", a.CreateCommentArguments, "create comment"),
    "linear_update_comment": ("comments", "update_comment", a.UpdateCommentArguments, "update comment"),
    "linear_delete_comment": ("comments", "delete_comment", a.IdArguments, "delete comment"),
    "linear_resolve_comment": (
        "comments", "resolve_comment", a.ResolveCommentArguments, "resolve comment"
    ),
    "linear_unresolve_comment": ("comments", "unresolve_comment", a.IdArguments, "unresolve comment"),
    "linear_create_customer_need_from_attachment": (
        "comments",
        "create_customer_need_from_attachment",
        a.CreateCustomerNeedArguments,
        "create customer need from attachment",
    ),
}

AUTH_TOOLS = frozenset({"linear_auth", "linear_auth_callback"})


def build_bindings(
    descriptors: Sequence[ToolDescriptor],
    handlers: Mapping[str, Any],
) -> Dict[str, HandlerBinding]:
    """Bind every descriptor to its handler method, keyed by exposed tool name.

    Raises ConfigurationError when the tool table and the binding table
    disagree, or a handler is missing the bound method.
    """
    described = {d.base_name for d in descriptors}
    bound = set(BINDING_TABLE)
    if described != bound:
        missing = sorted(described - bound)
        extra = sorted(bound - described)
        raise ConfigurationError(
            f"Tool table and bindings differ (unbound: {missing}, undescribed: {extra})"
        )

    bindings: Dict[str, HandlerBinding] = {}
    for descriptor in descriptors:
        handler_key, method_name, model, action = BINDING_TABLE[descriptor.base_name]
        handler = handlers.get(handler_key)
        if handler is None or not callable(getattr(handler, method_name, None)):
            raise ConfigurationError(
                f"No handler method {handler_key}.{method_name} for {descriptor.name}"
            )
        bindings[descriptor.name] = HandlerBinding(
            tool_name=descriptor.name,
            handler=handler,
            method_name=method_name,
            arguments_model=model,
            action=action,
            requires_auth=descriptor.base_name not in AUTH_TOOLS,
        )
    return bindings
