"""Tests for the operation catalog.

Verifies:
- Identifier search binds the numeric suffixes as floats and filters on them.
- parse_identifier_number follows parseFloat: longest numeric prefix, NaN
  when malformed.
- Paginated factories bind first/after only when provided.
- Every factory produces a parseable document with the expected root field.
"""

import math

import pytest

from linear_mcp.operations import Operations
from linear_mcp.operations.issues import IDENTIFIER_SEARCH_LIMIT, parse_identifier_number


class TestIdentifierSearch:

    def test_binds_numbers(self):
        op = Operations.issues.get_issues_by_identifier(["ENG-78", "ENG-79"])

        assert op.variables == {"numbers": [78, 79]}
        assert "$numbers: [Float!]!" in op.query
        assert "number:" in op.query
        assert "in: $numbers" in op.query
        assert f"first: {IDENTIFIER_SEARCH_LIMIT}" in op.query
        assert "orderBy: updatedAt" in op.query

    def test_malformed_identifier_passes_nan_through(self):
        op = Operations.issues.get_issues_by_identifier(["ENG-1", "bogus"])

        assert op.variables["numbers"][0] == 1
        assert math.isnan(op.variables["numbers"][1])

    @pytest.mark.parametrize(
        "identifier, expected",
        [
            ("ENG-123", 123.0),
            ("MY-TEAM-7", 7.0),
            ("ENG-12abc", 12.0),
            ("ENG-1.5", 1.5),
        ],
    )
    def test_parse_identifier_number(self, identifier, expected):
        assert parse_identifier_number(identifier) == expected

    @pytest.mark.parametrize("identifier", ["ENG", "ENG-", "ENG-abc", ""])
    def test_parse_identifier_number_malformed(self, identifier):
        assert math.isnan(parse_identifier_number(identifier))


class TestIssueOperations:

    def test_get_issue(self):
        op = Operations.issues.get_issue("issue-1")

        assert op.operation_name == "GetIssue"
        assert op.variables == {"id": "issue-1"}
        assert "...IssueFields" in op.query
        assert "fragment TeamFields on Team" in op.query

    def test_get_issues_binds_only_provided_pagination(self):
        op = Operations.issues.get_issues(first=10)

        assert op.variables == {"first": 10}

    def test_get_issues_without_pagination(self):
        assert Operations.issues.get_issues().variables is None

    def test_create_issue(self):
        op = Operations.issues.create_issue({"title": "Bug", "teamId": "t1"})

        assert op.operation_type == "mutation"
        assert op.variables == {"input": {"title": "Bug", "teamId": "t1"}}
        assert "issueCreate(input: $input)" in op.query

    def test_delete_issue(self):
        op = Operations.issues.delete_issue("issue-1")

        assert "issueDelete(id: $id)" in op.query
        assert op.variables == {"id": "issue-1"}

    def test_search_issues(self):
        op = Operations.issues.search_issues(
            {"team": {"id": {"in": ["t1"]}}}, first=50, order_by="updatedAt"
        )

        assert op.variables == {
            "filter": {"team": {"id": {"in": ["t1"]}}},
            "first": 50,
            "orderBy": "updatedAt",
        }


class TestOtherOperations:

    def test_get_project_includes_milestones(self):
        op = Operations.projects.get_project("p1")

        assert "...ProjectFields" in op.query
        assert "projectMilestones" in op.query

    def test_search_projects_without_filter(self):
        op = Operations.projects.search_projects()

        assert op.variables is None
        assert "projects(" in op.query

    def test_get_project_milestones_binds_only_provided(self):
        op = Operations.projects.get_project_milestones(
            {"project": {"id": {"eq": "p1"}}}, first=5, include_archived=False
        )

        assert op.variables == {
            "filter": {"project": {"id": {"eq": "p1"}}},
            "first": 5,
            "includeArchived": False,
        }

    def test_delete_project_milestone(self):
        op = Operations.projects.delete_project_milestone("m1")

        assert "projectMilestoneDelete(id: $id)" in op.query

    def test_get_team_by_key(self):
        op = Operations.teams.get_team_by_key("ENG")

        assert op.variables == {"key": "ENG"}
        assert "teams(" in op.query

    def test_get_viewer(self):
        op = Operations.users.get_viewer()

        assert "viewer" in op.query
        assert "...UserFields" in op.query

    def test_resolve_comment_optional_resolving_id(self):
        op = Operations.comments.resolve_comment("c1")

        assert op.variables == {"id": "c1"}

    def test_resolve_comment_with_resolving_id(self):
        op = Operations.comments.resolve_comment("c1", "c2")

        assert op.variables == {"id": "c1", "resolvingCommentId": "c2"}

    def test_customer_need_from_attachment(self):
        op = Operations.comments.create_customer_need_from_attachment({"attachmentId": "a1"})

        assert "customerNeedCreateFromAttachment(input: $input)" in op.query
