"""Tool handlers, one class per domain."""

from .auth import AuthHandler
from .comments import CommentHandler
from .issues import IssueHandler
from .projects import ProjectHandler
from .teams import TeamHandler, UserHandler

__all__ = [
    "AuthHandler",
    "CommentHandler",
    "IssueHandler",
    "ProjectHandler",
    "TeamHandler",
    "UserHandler",
]
