"""Tests for ToolDispatcher.

Verifies:
- Missing required parameters and malformed nested input fail before any
  request is sent.
- Unknown tools and unauthenticated calls come back as error responses.
- The OAuth tools bypass the authentication check.
- String results pass through; anything else is rendered as JSON.
- Handler exceptions are reported as "Failed to <action>: <message>".
"""

import json

import pytest
from unittest.mock import AsyncMock

from linear_mcp.auth.oauth import OAuthAuthProvider
from linear_mcp.exceptions import RemoteGraphQLError
from linear_mcp.mcp.server import build_handlers
from linear_mcp.tools.dispatch import ToolDispatcher, ToolResponse
from linear_mcp.tools.registry import build_bindings
from linear_mcp.tools.schemas import build_tool_table

pytestmark = pytest.mark.asyncio


def _dispatcher(client, auth, prefix=None):
    descriptors = build_tool_table(prefix)
    bindings = build_bindings(descriptors, build_handlers(client, auth, 5))
    return ToolDispatcher(descriptors, bindings, auth)


def _issue(issue_id="issue-1", identifier="ENG-1", title="Bug"):
    return {
        "id": issue_id,
        "identifier": identifier,
        "title": title,
        "url": f"https://linear.app/eng/issue/{identifier}",
        "team": {"id": "team-1"},
    }


class TestValidation:

    async def test_missing_required_parameter(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch("linear_delete_issue", {})

        assert response.is_error is True
        assert response.text == "Failed to delete issue: Missing required parameter: id"
        mock_client.execute.assert_not_awaited()

    async def test_null_required_parameter(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_get_issue", {"id": None}
        )

        assert response.is_error is True
        assert "id" in response.text
        mock_client.execute.assert_not_awaited()

    async def test_project_issue_missing_team(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_create_project_with_issues",
            {
                "project": {"name": "Launch", "teamIds": ["team-1"]},
                "issues": [{"title": "A", "description": "first"}],
            },
        )

        assert response.is_error is True
        assert "issues.0.teamId" in response.text
        mock_client.execute.assert_not_awaited()

    async def test_project_without_teams(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_create_project_with_issues",
            {"project": {"name": "Launch", "teamIds": []}, "issues": []},
        )

        assert response.is_error is True
        assert "project.teamIds" in response.text
        mock_client.execute.assert_not_awaited()

    async def test_priority_out_of_range(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_update_issue", {"id": "issue-1", "priority": 9}
        )

        assert response.is_error is True
        assert "priority" in response.text
        mock_client.execute.assert_not_awaited()

    async def test_malformed_identifier(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_search_issues_by_identifier", {"identifiers": ["ENG-1", "nope"]}
        )

        assert response.is_error is True
        assert response.text.startswith("Failed to search issues by identifier:")
        assert "nope" in response.text
        mock_client.execute.assert_not_awaited()


class TestRouting:

    async def test_unknown_tool(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch("linear_nope", {})

        assert response.is_error is True
        assert response.text == "Unknown tool: linear_nope"

    async def test_prefixed_names(self, mock_client, pat_auth):
        mock_client.execute.return_value = {"teams": {"nodes": [{"id": "t1"}]}}
        dispatcher = _dispatcher(mock_client, pat_auth, prefix="acme")

        ok = await dispatcher.dispatch("acme_linear_get_teams", {})
        missing = await dispatcher.dispatch("linear_get_teams", {})

        assert ok.is_error is False
        assert missing.text == "Unknown tool: linear_get_teams"

    async def test_none_arguments(self, mock_client, pat_auth):
        mock_client.execute.return_value = {"viewer": {"id": "u1"}}

        response = await _dispatcher(mock_client, pat_auth).dispatch("linear_get_user", None)

        assert json.loads(response.text) == {"id": "u1"}


class TestAuthentication:

    def _oauth(self):
        return OAuthAuthProvider(
            client_id="client-id",
            client_secret="client-secret",
            redirect_uri="http://localhost:3000/callback",
        )

    async def test_unauthenticated_call_rejected(self, mock_client):
        response = await _dispatcher(mock_client, self._oauth()).dispatch("linear_get_teams", {})

        assert response.is_error is True
        assert "Not authenticated" in response.text
        mock_client.execute.assert_not_awaited()

    async def test_auth_tool_bypasses_check(self, mock_client):
        response = await _dispatcher(mock_client, self._oauth()).dispatch("linear_auth", {})

        assert response.is_error is False
        assert "https://linear.app/oauth/authorize" in response.text

    async def test_auth_callback_completes_flow(self, mock_client):
        provider = self._oauth()
        provider.handle_callback = AsyncMock()

        response = await _dispatcher(mock_client, provider).dispatch(
            "linear_auth_callback", {"code": "abc"}
        )

        assert response.text == "Successfully authenticated with Linear"
        provider.handle_callback.assert_awaited_once_with("abc")

    async def test_auth_with_pat(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch("linear_auth", {})

        assert response.is_error is False
        assert "personal access token" in response.text


class TestResults:

    async def test_dict_result_rendered_as_json(self, mock_client, pat_auth):
        mock_client.execute.return_value = {"issue": _issue()}

        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_get_issue", {"id": "issue-1"}
        )

        assert response.is_error is False
        assert json.loads(response.text)["identifier"] == "ENG-1"

    async def test_handler_error_reported(self, mock_client, pat_auth):
        mock_client.execute.side_effect = RemoteGraphQLError("GraphQL error: Entity not found")

        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_delete_issue", {"id": "issue-1"}
        )

        assert response.is_error is True
        assert response.text == "Failed to delete issue: GraphQL error: Entity not found"

    async def test_unexpected_error_reported(self, mock_client, pat_auth):
        mock_client.execute.side_effect = KeyError("teams")

        response = await _dispatcher(mock_client, pat_auth).dispatch("linear_get_teams", {})

        assert response.is_error is True
        assert response.text.startswith("Failed to get teams:")

    async def test_create_issue_with_parent(self, mock_client, pat_auth):
        mock_client.execute.side_effect = [
            {"issue": _issue("parent-1")},
            {"issueCreate": {"success": True, "issue": _issue("child-1", "ENG-2")}},
        ]

        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_create_issue",
            {
                "title": "Sub",
                "description": "child",
                "teamId": "team-9",
                "parentId": "parent-1",
            },
        )

        assert response.is_error is False
        create_input = mock_client.execute.await_args_list[1].args[0].variables["input"]
        assert create_input["parentId"] == "parent-1"
        assert "parent_id" not in create_input

    async def test_child_issue_inherits_parent_team(self, mock_client, pat_auth):
        mock_client.execute.side_effect = [
            {"issue": {**_issue("parent-1"), "team": {"id": "team-7"}}},
            {"issueCreate": {"success": True, "issue": _issue("child-1", "ENG-2")}},
        ]

        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_create_issue",
            {"title": "Sub", "description": "child", "parentId": "parent-1"},
        )

        assert response.is_error is False
        create_input = mock_client.execute.await_args_list[1].args[0].variables["input"]
        assert create_input["teamId"] == "team-7"

    async def test_create_issue_needs_team_or_parent(self, mock_client, pat_auth):
        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_create_issue", {"title": "Orphan", "description": "no team"}
        )

        assert response.is_error is True
        assert "teamId is required unless parentId is given" in response.text
        mock_client.execute.assert_not_awaited()

    async def test_bulk_update_summary(self, mock_client, pat_auth):
        mock_client.execute.return_value = {"issueUpdate": {"success": True, "issue": _issue()}}

        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_bulk_update_issues",
            {"issueIds": ["a", "b"], "update": {"stateId": "done"}},
        )

        summary = json.loads(response.text)
        assert summary["succeeded"] == 2
        assert summary["message"] == "Updated issues: 2 succeeded, 0 failed"
        for call in mock_client.execute.await_args_list:
            assert call.args[0].variables["input"] == {"stateId": "done"}

    async def test_update_comment_nested_input(self, mock_client, pat_auth):
        mock_client.execute.return_value = {
            "commentUpdate": {"success": True, "comment": {"id": "c1", "body": "new"}}
        }

        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_update_comment", {"id": "c1", "input": {"body": "new"}}
        )

        assert response.is_error is False
        assert mock_client.execute.await_args.args[0].variables["input"] == {"body": "new"}

    async def test_project_with_issues_text(self, mock_client, pat_auth):
        mock_client.execute.side_effect = [
            {"projectCreate": {"success": True, "project": {
                "id": "proj-1", "name": "Launch", "url": "https://linear.app/p/launch",
            }}},
            {"issueCreate": {"success": True, "issue": _issue("i1", "ENG-7", "Design")}},
        ]

        response = await _dispatcher(mock_client, pat_auth).dispatch(
            "linear_create_project_with_issues",
            {
                "project": {"name": "Launch", "teamIds": ["team-1"]},
                "issues": [{"title": "Design", "description": "mockups", "teamId": "team-1"}],
            },
        )

        assert response.is_error is False
        assert response.text.splitlines() == [
            "Successfully created project with issues",
            "Project: Launch",
            "Project URL: https://linear.app/p/launch",
            "Issues created: 1",
            "- ENG-7: Design (https://linear.app/eng/issue/ENG-7)",
        ]


class TestToolResponse:

    async def test_from_result_string(self):
        assert ToolResponse.from_result("done").text == "done"

    async def test_to_text_content(self):
        content = ToolResponse.from_text("hello").to_text_content()

        assert content[0].type == "text"
        assert content[0].text == "hello"
