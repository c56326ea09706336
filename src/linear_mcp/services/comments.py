"""Comment service, including customer needs created from attachments."""

from typing import Any, Dict, Optional

from ..operations import Operations
from .base import BaseService


class CommentService(BaseService):
    """Comments and customer needs."""

    async def create_comment(self, issue_id: str, body: str) -> Dict[str, Any]:
        data = await self._execute(
            Operations.comments.create_comment({"issueId": issue_id, "body": body}),
            "create comment",
        )
        return self._mutation_payload(data, "commentCreate", "create comment")

    async def update_comment(self, comment_id: str, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(
            Operations.comments.update_comment(comment_id, input_), "update comment"
        )
        return self._mutation_payload(data, "commentUpdate", "update comment")

    async def delete_comment(self, comment_id: str) -> Dict[str, Any]:
        data = await self._execute(
            Operations.comments.delete_comment(comment_id), "delete comment"
        )
        return self._mutation_payload(data, "commentDelete", "delete comment")

    async def resolve_comment(
        self,
        comment_id: str,
        resolving_comment_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        data = await self._execute(
            Operations.comments.resolve_comment(comment_id, resolving_comment_id),
            "resolve comment",
        )
        return self._mutation_payload(data, "commentResolve", "resolve comment")

    async def unresolve_comment(self, comment_id: str) -> Dict[str, Any]:
        data = await self._execute(
            Operations.comments.unresolve_comment(comment_id), "unresolve comment"
        )
        return self._mutation_payload(data, "commentUnresolve", "unresolve comment")

    async def create_customer_need_from_attachment(self, input_: Dict[str, Any]) -> Dict[str, Any]:
        data = await self._execute(
            Operations.comments.create_customer_need_from_attachment(input_),
            "create customer need from attachment",
        )
        return self._mutation_payload(
            data,
            "customerNeedCreateFromAttachment",
            "create customer need from attachment",
        )
