"""GraphQL operations for comments and customer needs."""

from typing import Any, Dict, Optional

from ..graphql.query_builder import Operation, QueryBuilder

COMMENT_PAYLOAD = {"id": True, "body": True, "createdAt": True, "updatedAt": True}


def create_comment(input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("CreateComment")
        .declare_variable("input", "CommentCreateInput", required=True)
        .bind("input", input_)
        .select({
            "commentCreate": {
                "__args": {"input": "$input"},
                "success": True,
                "comment": COMMENT_PAYLOAD,
            },
        })
        .finalize()
    )


def update_comment(comment_id: str, input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("UpdateComment")
        .declare_variable("id", "String", required=True)
        .declare_variable("input", "CommentUpdateInput", required=True)
        .bind("id", comment_id)
        .bind("input", input_)
        .select({
            "commentUpdate": {
                "__args": {"id": "$id", "input": "$input"},
                "success": True,
                "comment": COMMENT_PAYLOAD,
            },
        })
        .finalize()
    )


def delete_comment(comment_id: str) -> Operation:
    return (
        QueryBuilder.mutation("DeleteComment")
        .declare_variable("id", "String", required=True)
        .bind("id", comment_id)
        .select({
            "commentDelete": {
                "__args": {"id": "$id"},
                "success": True,
                "entityId": True,
            },
        })
        .finalize()
    )


def resolve_comment(comment_id: str, resolving_comment_id: Optional[str] = None) -> Operation:
    return (
        QueryBuilder.mutation("ResolveComment")
        .declare_variable("id", "String", required=True)
        .declare_variable("resolvingCommentId", "String")
        .bind("id", comment_id)
        .bind_optional("resolvingCommentId", resolving_comment_id)
        .use_fragment("CommentFields")
        .select({
            "commentResolve": {
                "__args": {"id": "$id", "resolvingCommentId": "$resolvingCommentId"},
                "success": True,
                "comment": {
                    "__fragment": "CommentFields",
                    "resolvedAt": True,
                },
            },
        })
        .finalize()
    )


def unresolve_comment(comment_id: str) -> Operation:
    return (
        QueryBuilder.mutation("UnresolveComment")
        .declare_variable("id", "String", required=True)
        .bind("id", comment_id)
        .use_fragment("CommentFields")
        .select({
            "commentUnresolve": {
                "__args": {"id": "$id"},
                "success": True,
                "comment": {"__fragment": "CommentFields"},
            },
        })
        .finalize()
    )


def create_customer_need_from_attachment(input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("CreateCustomerNeedFromAttachment")
        .declare_variable("input", "CustomerNeedCreateFromAttachmentInput", required=True)
        .bind("input", input_)
        .select({
            "customerNeedCreateFromAttachment": {
                "__args": {"input": "$input"},
                "success": True,
                "need": {
                    "id": True,
                    "body": True,
                    "priority": True,
                    "createdAt": True,
                },
            },
        })
        .finalize()
    )
