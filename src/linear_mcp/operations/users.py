"""GraphQL operations for Linear users."""

from typing import Optional

from ..graphql.query_builder import Operation, QueryBuilder
from .issues import PAGE_INFO


def get_user(user_id: str) -> Operation:
    return (
        QueryBuilder.query("GetUser")
        .declare_variable("id", "String", required=True)
        .bind("id", user_id)
        .use_fragment("UserFields")
        .select({
            "user": {
                "__args": {"id": "$id"},
                "__fragment": "UserFields",
            },
        })
        .finalize()
    )


def get_users(first: Optional[int] = None, after: Optional[str] = None) -> Operation:
    return (
        QueryBuilder.query("GetUsers")
        .declare_variable("first", "Int")
        .declare_variable("after", "String")
        .bind_optional("first", first)
        .bind_optional("after", after)
        .use_fragment("UserFields")
        .select({
            "users": {
                "__args": {"first": "$first", "after": "$after"},
                "nodes": {"__fragment": "UserFields"},
                "pageInfo": PAGE_INFO,
            },
        })
        .finalize()
    )


def get_viewer() -> Operation:
    """The authenticated user and the teams they belong to."""
    return (
        QueryBuilder.query("GetViewer")
        .use_fragment("UserFields")
        .select({
            "viewer": {
                "__fragment": "UserFields",
                "teams": {"nodes": {"id": True, "name": True, "key": True}},
            },
        })
        .finalize()
    )
