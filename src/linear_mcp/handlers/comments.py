"""Comment and customer need tool handlers."""

from typing import Any, Dict

from ..services.comments import CommentService
from ..tools.arguments import (
    CreateCommentArguments,
    CreateCustomerNeedArguments,
    IdArguments,
    ResolveCommentArguments,
    UpdateCommentArguments,
)
from .base import BaseHandler


class CommentHandler(BaseHandler):
    """Comment tools, plus customer needs raised from attachments."""

    def __init__(self, comments: CommentService):
        self.comments = comments

    async def create_comment(self, args: CreateCommentArguments) -> Dict[str, Any]:
        return await self.comments.create_comment(args.issue_id, args.body)

    async def update_comment(self, args: UpdateCommentArguments) -> Dict[str, Any]:
        return await self.comments.update_comment(args.id, args.input_.to_input())

    async def delete_comment(self, args: IdArguments) -> Dict[str, Any]:
        return await self.comments.delete_comment(args.id)

    async def resolve_comment(self, args: ResolveCommentArguments) -> Dict[str, Any]:
        return await self.comments.resolve_comment(args.id, args.resolving_comment_id)

    async def unresolve_comment(self, args: IdArguments) -> Dict[str, Any]:
        return await self.comments.unresolve_comment(args.id)

    async def create_customer_need_from_attachment(
        self, args: CreateCustomerNeedArguments
    ) -> Dict[str, Any]:
        return await self.comments.create_customer_need_from_attachment(args.to_input())
