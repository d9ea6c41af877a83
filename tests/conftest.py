"""Shared pytest fixtures for fake Jira tests.

Logging for the whole session is configured from the ``FAKEJIRA_LOG_*``
environment, e.g. ``FAKEJIRA_LOG_LEVEL=DEBUG FAKEJIRA_DIAGNOSTIC_TAGS=jql pytest``
prints every narrowing step of every search. Individual tests run with those
variables cleared so ``load_config()`` defaults are predictable.

Issue records are built through the ``make_issue`` factory fixture so the
nested dataclasses stay out of individual tests::

    def test_example(make_issue):
        issue = make_issue("123", key="PROJ-1", project="Test1", status="Open")
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from fakejira.config import load_config
from fakejira.logging import setup_logging_from_config
from fakejira.types import (
    Issue,
    IssueFields,
    IssueType,
    Project,
    ProjectCategory,
    Status,
)

IssueFactory = Callable[..., Issue]

ENV_VARS = (
    "FAKEJIRA_URL",
    "FAKEJIRA_DEFAULT_MAX_RESULTS",
    "FAKEJIRA_STRICT_JQL",
    "FAKEJIRA_LOG_LEVEL",
    "FAKEJIRA_LOG_JSON",
    "FAKEJIRA_DIAGNOSTIC_TAGS",
)


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Install the fake's log handler, keeping pytest's capture handlers."""
    setup_logging_from_config(load_config(), replace_handlers=False)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from the caller's FAKEJIRA_* environment."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def build_issue(
    issue_id: str,
    *,
    key: str = "",
    project: str = "",
    category: str = "",
    issue_type: str = "",
    status: str | None = None,
) -> Issue:
    return Issue(
        id=issue_id,
        key=key,
        fields=IssueFields(
            project=Project(name=project, project_category=ProjectCategory(name=category)),
            type=IssueType(name=issue_type),
            status=Status(name=status) if status is not None else None,
        ),
    )


@pytest.fixture
def make_issue() -> IssueFactory:
    """Factory fixture building Issue records from flat keyword arguments."""
    return build_issue


@pytest.fixture
def three_projects() -> list[Issue]:
    """Issues 123, 1234 and 12345 in projects Test1, Test2 and Test3."""
    return [
        build_issue("123", key="PROJ-1", project="Test1"),
        build_issue("1234", key="PROJ-2", project="Test2"),
        build_issue("12345", key="PROJ-3", project="Test3"),
    ]


@pytest.fixture
def mixed_corpus() -> list[Issue]:
    """Issues spread over projects, categories, types and statuses."""
    return [
        build_issue(
            "10001", key="OCP-1", project="OpenShift", category="Platform",
            issue_type="Bug", status="New",
        ),
        build_issue(
            "10002", key="OCP-2", project="OpenShift", category="Platform",
            issue_type="Story", status="In Progress",
        ),
        build_issue(
            "10003", key="OCPBUGS-7", project="OpenShift Bugs", category="Platform",
            issue_type="Bug", status="Closed",
        ),
        build_issue(
            "10004", key="DPTP-4", project="Test Platform", category="Tooling",
            issue_type="Task", status="New",
        ),
    ]


@pytest.fixture
def fixture_file(tmp_path: Path) -> Path:
    """A YAML fixture with two issues and links for one of them."""
    path = tmp_path / "issues.yaml"
    path.write_text(
        """\
issues:
  - id: "123"
    key: PROJ-1
    fields:
      summary: First issue
      project:
        name: Test1
        key: PROJ
        projectCategory:
          name: Platform
      issuetype:
        name: Bug
      status:
        name: Open
  - id: "456"
    key: PROJ-2
    fields:
      project:
        name: Test2
      issuetype:
        name: Story
remote_links:
  "123":
    - id: 7
      globalId: pr-1
      relationship: fixed by
      object:
        url: https://github.com/org/repo/pull/1
        title: PR 1
""",
        encoding="utf-8",
    )
    return path
