"""Operation catalog: pure factories producing ready-to-send GraphQL operations.

Nothing here performs I/O. Services pass the returned Operation to the
execution client.
"""

from types import SimpleNamespace

from . import comments, issues, projects, teams, users

Operations = SimpleNamespace(
    issues=issues,
    projects=projects,
    teams=teams,
    users=users,
    comments=comments,
)

__all__ = ["Operations", "comments", "issues", "projects", "teams", "users"]
