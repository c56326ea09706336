"""Domain services wrapping the operation catalog and execution client."""

from .bulk import BulkResult, ItemResult, run_bounded
from .comments import CommentService
from .issues import IssueService
from .projects import ProjectService, ProjectWithIssues
from .teams import TeamService
from .users import UserService

__all__ = [
    "BulkResult",
    "CommentService",
    "IssueService",
    "ItemResult",
    "ProjectService",
    "ProjectWithIssues",
    "TeamService",
    "UserService",
    "run_bounded",
]
