"""GraphQL operations for Linear issues."""

import math
import re
from typing import Any, Dict, Iterable, List, Optional

from ..graphql.query_builder import Operation, QueryBuilder

PAGE_INFO = {
    "hasNextPage": True,
    "hasPreviousPage": True,
    "startCursor": True,
    "endCursor": True,
}

# Field set returned by list/search queries; lighter than IssueFields
ISSUE_SUMMARY = {
    "id": True,
    "identifier": True,
    "title": True,
    "description": True,
    "url": True,
    "priority": True,
    "state": {"id": True, "name": True, "type": True, "color": True},
    "assignee": {"id": True, "name": True, "email": True},
    "team": {"id": True, "name": True, "key": True},
    "project": {"id": True, "name": True},
    "labels": {"nodes": {"id": True, "name": True, "color": True}},
    "createdAt": True,
    "updatedAt": True,
}

IDENTIFIER_SEARCH_LIMIT = 100

_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_identifier_number(identifier: str) -> float:
    """Numeric suffix of an identifier such as "ENG-123".

    Reads the longest numeric prefix after the last "-" the way JavaScript's
    parseFloat does ("ENG-12abc" gives 12.0). Returns NaN when there is no
    "-" or no leading number.
    """
    if "-" not in identifier:
        return math.nan
    suffix = identifier.rsplit("-", 1)[1]
    match = _NUMBER_PREFIX.match(suffix)
    if not match:
        return math.nan
    return float(match.group(1))


def get_issue(issue_id: str) -> Operation:
    return (
        QueryBuilder.query("GetIssue")
        .declare_variable("id", "String", required=True)
        .bind("id", issue_id)
        .use_fragment("IssueFields")
        .select({
            "issue": {
                "__args": {"id": "$id"},
                "__fragment": "IssueFields",
                "project": {"id": True, "name": True},
            },
        })
        .finalize()
    )


def get_issues(first: Optional[int] = None, after: Optional[str] = None) -> Operation:
    return (
        QueryBuilder.query("GetIssues")
        .declare_variable("first", "Int")
        .declare_variable("after", "String")
        .bind_optional("first", first)
        .bind_optional("after", after)
        .use_fragment("IssueFields")
        .select({
            "issues": {
                "__args": {"first": "$first", "after": "$after"},
                "nodes": {"__fragment": "IssueFields"},
                "pageInfo": PAGE_INFO,
            },
        })
        .finalize()
    )


def create_issue(input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("CreateIssue")
        .declare_variable("input", "IssueCreateInput!", required=True)
        .bind("input", input_)
        .use_fragment("IssueFields")
        .select({
            "issueCreate": {
                "__args": {"input": "$input"},
                "success": True,
                "issue": {"__fragment": "IssueFields"},
            },
        })
        .finalize()
    )


def update_issue(issue_id: str, input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("UpdateIssue")
        .declare_variable("id", "String", required=True)
        .declare_variable("input", "IssueUpdateInput", required=True)
        .bind("id", issue_id)
        .bind("input", input_)
        .use_fragment("IssueFields")
        .select({
            "issueUpdate": {
                "__args": {"id": "$id", "input": "$input"},
                "success": True,
                "issue": {"__fragment": "IssueFields"},
            },
        })
        .finalize()
    )


def delete_issue(issue_id: str) -> Operation:
    return (
        QueryBuilder.mutation("DeleteIssue")
        .declare_variable("id", "String", required=True)
        .bind("id", issue_id)
        .select({
            "issueDelete": {
                "__args": {"id": "$id"},
                "success": True,
            },
        })
        .finalize()
    )


def search_issues(
    filter_: Optional[Dict[str, Any]] = None,
    first: Optional[int] = None,
    after: Optional[str] = None,
    order_by: Optional[str] = None,
) -> Operation:
    return (
        QueryBuilder.query("SearchIssues")
        .declare_variable("filter", "IssueFilter")
        .declare_variable("first", "Int")
        .declare_variable("after", "String")
        .declare_variable("orderBy", "PaginationOrderBy")
        .bind_optional("filter", filter_)
        .bind_optional("first", first)
        .bind_optional("after", after)
        .bind_optional("orderBy", order_by)
        .select({
            "issues": {
                "__args": {
                    "filter": "$filter",
                    "first": "$first",
                    "after": "$after",
                    "orderBy": "$orderBy",
                },
                "pageInfo": {"hasNextPage": True, "endCursor": True},
                "nodes": ISSUE_SUMMARY,
            },
        })
        .finalize()
    )


def get_issues_by_identifier(identifiers: Iterable[str]) -> Operation:
    """Issues matching identifiers like "ENG-78".

    Linear cannot filter on the identifier string, so the numeric part is
    sent as a ``number`` filter. Malformed identifiers become NaN, which is
    not valid JSON: the client refuses to send such an operation, so callers
    validate identifiers first (see IssueService.search_issues_by_identifier).
    """
    numbers: List[float] = [parse_identifier_number(i) for i in identifiers]
    return (
        QueryBuilder.query("GetIssuesByIdentifier")
        .declare_variable("numbers", "[Float!]", required=True)
        .bind("numbers", numbers)
        .select({
            "issues": {
                "__args": {
                    "filter": "{ number: { in: $numbers } }",
                    "first": IDENTIFIER_SEARCH_LIMIT,
                    "orderBy": "updatedAt",
                },
                "pageInfo": {"hasNextPage": True, "endCursor": True},
                "nodes": {
                    **ISSUE_SUMMARY,
                    "comments": {
                        "nodes": {
                            "id": True,
                            "body": True,
                            "user": {"id": True, "name": True, "email": True},
                            "createdAt": True,
                            "updatedAt": True,
                            "resolvedAt": True,
                            "resolvingComment": {"id": True, "body": True},
                        },
                    },
                },
            },
        })
        .finalize()
    )
