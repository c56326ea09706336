"""Named GraphQL fragments shared by the operation catalog.

Fragments are registered once at import time and referenced by name from
any query. The registry is append-only for the life of the process.
"""

import re
import textwrap
from dataclasses import dataclass
from typing import Dict, Iterator, List

from ..exceptions import DuplicateFragmentError, FragmentNotFoundError

_SPREAD_RE = re.compile(r"\.\.\.\s*([_A-Za-z][_0-9A-Za-z]*)")


@dataclass(frozen=True)
class Fragment:
    name: str
    type_condition: str
    body: str

    def render(self) -> str:
        return f"fragment {self.name} on {self.type_condition} {{\n{self.body}\n}}"


def fragment_dependencies(body: str) -> List[str]:
    """Names of fragments spread inside ``body``, in order of first use."""
    seen: List[str] = []
    for name in _SPREAD_RE.findall(body):
        # "... on Type" is an inline fragment, not a spread
        if name != "on" and name not in seen:
            seen.append(name)
    return seen


class FragmentRegistry:
    """Append-only registry of named fragments."""

    def __init__(self):
        self._fragments: Dict[str, Fragment] = {}

    def register(self, name: str, type_condition: str, body: str) -> Fragment:
        if name in self._fragments:
            raise DuplicateFragmentError(f"Fragment already registered: {name}")
        fragment = Fragment(name=name, type_condition=type_condition, body=body)
        self._fragments[name] = fragment
        return fragment

    def resolve(self, name: str) -> Fragment:
        try:
            return self._fragments[name]
        except KeyError:
            raise FragmentNotFoundError(f"Fragment not found: {name}") from None

    def names(self) -> List[str]:
        return list(self._fragments)

    def __contains__(self, name: object) -> bool:
        return name in self._fragments

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self._fragments.values())

    def __len__(self) -> int:
        return len(self._fragments)


def _fields(text: str) -> str:
    return textwrap.dedent(text).strip("\n")


ISSUE_FIELDS = _fields("""
    id
    identifier
    title
    description
    url
    priority
    estimate
    boardOrder
    sortOrder
    startedAt
    completedAt
    canceledAt
    dueDate
    createdAt
    updatedAt
    number
    state {
      id
      name
      type
      color
    }
    assignee {
      id
      name
      email
      displayName
      avatarUrl
    }
    creator {
      id
      name
      email
      displayName
      avatarUrl
    }
    labels {
      nodes {
        id
        name
        color
        description
      }
    }
    children {
      nodes {
        id
        title
      }
    }
    parent {
      id
      title
    }
    team {
      ...TeamFields
    }
""")

TEAM_FIELDS = _fields("""
    id
    name
    key
    description
    states {
      nodes {
        id
        name
        type
        color
      }
    }
    labels {
      nodes {
        id
        name
        color
      }
    }
""")

PROJECT_FIELDS = _fields("""
    id
    name
    description
    url
    icon
    color
    state
    startDate
    targetDate
    progress
    createdAt
    updatedAt
    lead {
      id
      name
      email
      displayName
      avatarUrl
    }
""")

USER_FIELDS = _fields("""
    id
    name
    email
    displayName
    avatarUrl
    active
""")

COMMENT_FIELDS = _fields("""
    id
    body
    createdAt
    updatedAt
    user {
      id
      name
      displayName
      avatarUrl
    }
""")

ATTACHMENT_FIELDS = _fields("""
    id
    title
    url
    size
    contentType
    createdAt
    updatedAt
    creator {
      id
      name
      displayName
      avatarUrl
    }
""")

LABEL_FIELDS = _fields("""
    id
    name
    color
    description
    createdAt
    updatedAt
""")

WORKFLOW_STATE_FIELDS = _fields("""
    id
    name
    type
    color
    position
    description
""")

MILESTONE_FIELDS = _fields("""
    id
    name
    description
    targetDate
    progress
    sortOrder
    archivedAt
    createdAt
    updatedAt
    project {
      id
      name
    }
    issues {
      nodes {
        id
        identifier
        title
      }
    }
""")

DEFAULT_FRAGMENTS = (
    ("IssueFields", "Issue", ISSUE_FIELDS),
    ("TeamFields", "Team", TEAM_FIELDS),
    ("ProjectFields", "Project", PROJECT_FIELDS),
    ("UserFields", "User", USER_FIELDS),
    ("CommentFields", "Comment", COMMENT_FIELDS),
    ("AttachmentFields", "Attachment", ATTACHMENT_FIELDS),
    ("LabelFields", "IssueLabel", LABEL_FIELDS),
    ("WorkflowStateFields", "WorkflowState", WORKFLOW_STATE_FIELDS),
    ("ProjectMilestoneFields", "ProjectMilestone", MILESTONE_FIELDS),
)


def build_default_registry() -> FragmentRegistry:
    registry = FragmentRegistry()
    for name, type_condition, body in DEFAULT_FRAGMENTS:
        registry.register(name, type_condition, body)
    return registry


default_registry = build_default_registry()
