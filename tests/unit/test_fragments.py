"""Tests for the fragment registry.

Verifies:
- resolve() returns exactly what register() was given.
- Unknown names raise FragmentNotFoundError; duplicate names raise
  DuplicateFragmentError.
- The default registry carries the shared Linear fragments.
- fragment_dependencies() finds spreads and ignores inline fragments.
"""

import pytest

from linear_mcp.exceptions import DuplicateFragmentError, FragmentNotFoundError
from linear_mcp.graphql.fragments import (
    Fragment,
    FragmentRegistry,
    build_default_registry,
    default_registry,
    fragment_dependencies,
)


class TestFragmentRegistry:

    def test_resolve_returns_registered_fragment(self):
        registry = FragmentRegistry()
        registry.register("Mini", "Issue", "id\ntitle")

        fragment = registry.resolve("Mini")

        assert fragment == Fragment(name="Mini", type_condition="Issue", body="id\ntitle")
        assert fragment.type_condition == "Issue"
        assert fragment.body == "id\ntitle"

    def test_resolve_unknown_name(self):
        registry = FragmentRegistry()

        with pytest.raises(FragmentNotFoundError, match="Nope"):
            registry.resolve("Nope")

    def test_register_duplicate_name(self):
        registry = FragmentRegistry()
        registry.register("Mini", "Issue", "id")

        with pytest.raises(DuplicateFragmentError):
            registry.register("Mini", "Issue", "id\ntitle")

        # first registration is untouched
        assert registry.resolve("Mini").body == "id"

    def test_names_and_membership(self):
        registry = FragmentRegistry()
        registry.register("A", "Issue", "id")
        registry.register("B", "Team", "id")

        assert registry.names() == ["A", "B"]
        assert "A" in registry
        assert "C" not in registry
        assert len(registry) == 2

    def test_render(self):
        fragment = Fragment(name="Mini", type_condition="Issue", body="  id")

        assert fragment.render() == "fragment Mini on Issue {\n  id\n}"


class TestDefaultRegistry:

    def test_shared_fragments_registered(self):
        for name in (
            "IssueFields",
            "TeamFields",
            "ProjectFields",
            "UserFields",
            "CommentFields",
            "AttachmentFields",
            "LabelFields",
            "WorkflowStateFields",
        ):
            assert name in default_registry

    def test_type_conditions(self):
        assert default_registry.resolve("IssueFields").type_condition == "Issue"
        assert default_registry.resolve("LabelFields").type_condition == "IssueLabel"
        assert default_registry.resolve("WorkflowStateFields").type_condition == "WorkflowState"

    def test_issue_fields_spread_team_fields(self):
        body = default_registry.resolve("IssueFields").body

        assert "TeamFields" in fragment_dependencies(body)

    def test_build_default_registry_is_fresh(self):
        registry = build_default_registry()

        assert registry is not default_registry
        assert registry.names() == default_registry.names()


class TestFragmentDependencies:

    def test_spreads_in_order(self):
        body = "id\nteam { ...TeamFields }\nassignee { ...UserFields }\nteam2 { ...TeamFields }"

        assert fragment_dependencies(body) == ["TeamFields", "UserFields"]

    def test_inline_fragment_ignored(self):
        body = "node { ... on Issue { id } }"

        assert fragment_dependencies(body) == []
