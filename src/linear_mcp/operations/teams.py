"""GraphQL operations for Linear teams."""

from typing import Any, Dict, Optional

from ..graphql.query_builder import Operation, QueryBuilder
from .issues import PAGE_INFO


def get_team(team_id: str) -> Operation:
    return (
        QueryBuilder.query("GetTeam")
        .declare_variable("id", "String", required=True)
        .bind("id", team_id)
        .use_fragment("TeamFields")
        .select({
            "team": {
                "__args": {"id": "$id"},
                "__fragment": "TeamFields",
            },
        })
        .finalize()
    )


def get_teams(first: Optional[int] = None, after: Optional[str] = None) -> Operation:
    return (
        QueryBuilder.query("GetTeams")
        .declare_variable("first", "Int")
        .declare_variable("after", "String")
        .bind_optional("first", first)
        .bind_optional("after", after)
        .use_fragment("TeamFields")
        .select({
            "teams": {
                "__args": {"first": "$first", "after": "$after"},
                "nodes": {"__fragment": "TeamFields"},
                "pageInfo": PAGE_INFO,
            },
        })
        .finalize()
    )


def get_team_by_key(key: str) -> Operation:
    return (
        QueryBuilder.query("GetTeamByKey")
        .declare_variable("key", "String", required=True)
        .bind("key", key)
        .use_fragment("TeamFields")
        .select({
            "teams": {
                "__args": {"filter": "{ key: { eq: $key } }", "first": 1},
                "nodes": {"__fragment": "TeamFields"},
            },
        })
        .finalize()
    )


def create_team(input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("CreateTeam")
        .declare_variable("input", "TeamCreateInput", required=True)
        .bind("input", input_)
        .use_fragment("TeamFields")
        .select({
            "teamCreate": {
                "__args": {"input": "$input"},
                "success": True,
                "team": {"__fragment": "TeamFields"},
            },
        })
        .finalize()
    )


def update_team(team_id: str, input_: Dict[str, Any]) -> Operation:
    return (
        QueryBuilder.mutation("UpdateTeam")
        .declare_variable("id", "String", required=True)
        .declare_variable("input", "TeamUpdateInput", required=True)
        .bind("id", team_id)
        .bind("input", input_)
        .use_fragment("TeamFields")
        .select({
            "teamUpdate": {
                "__args": {"id": "$id", "input": "$input"},
                "success": True,
                "team": {"__fragment": "TeamFields"},
            },
        })
        .finalize()
    )
