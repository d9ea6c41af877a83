"""Loading of seeded issues and remote links from YAML fixture files.

A fixture file uses the raw Jira REST shapes::

    issues:
      - id: "123"
        key: PROJ-1
        fields:
          project: {name: Test1, projectCategory: {name: Platform}}
          issuetype: {name: Bug}
          status: {name: Open}
    remote_links:
      "123":
        - object: {url: https://example.com/pr/1, title: PR 1}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from fakejira.exceptions import FixtureError
from fakejira.logging import get_logger
from fakejira.types import Issue, RemoteLink

logger = get_logger(__name__)


@dataclass
class Fixture:
    """Issues and remote links read from a fixture file."""

    issues: list[Issue] = field(default_factory=list)
    remote_links: dict[str, list[RemoteLink]] = field(default_factory=dict)


def _read_yaml(file_path: Path) -> Any:
    try:
        with open(file_path, encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise FixtureError(f"Invalid YAML in {file_path}: {e}") from e
    except FileNotFoundError:
        raise FixtureError(f"Fixture file not found: {file_path}") from None


def _parse_issues(data: Any, file_path: Path) -> list[Issue]:
    if not isinstance(data, list):
        raise FixtureError(f"'issues' must be a list in {file_path}")
    issues = []
    for index, item in enumerate(data):
        if not isinstance(item, dict) or "id" not in item:
            raise FixtureError(f"Issue #{index} in {file_path} must be a mapping with an 'id'")
        issues.append(Issue.from_api_response(item))
    return issues


def _parse_remote_links(data: Any, file_path: Path) -> dict[str, list[RemoteLink]]:
    if not isinstance(data, dict):
        raise FixtureError(f"'remote_links' must be a mapping in {file_path}")
    links: dict[str, list[RemoteLink]] = {}
    for issue_id, items in data.items():
        if not isinstance(items, list):
            raise FixtureError(f"Remote links of issue {issue_id} must be a list in {file_path}")
        links[str(issue_id)] = [RemoteLink.from_api_response(item) for item in items]
    return links


def load_fixture(file_path: Path) -> Fixture:
    """Load issues and remote links from a YAML fixture.

    Args:
        file_path: Path to the YAML file.

    Returns:
        The parsed Fixture. An empty file yields an empty Fixture.

    Raises:
        FixtureError: If the file is missing, is not valid YAML, or has the
            wrong shape.
    """
    data = _read_yaml(file_path)
    if not data:
        return Fixture()
    if not isinstance(data, dict):
        raise FixtureError(f"Fixture must be a mapping in {file_path}")

    fixture = Fixture(
        issues=_parse_issues(data.get("issues", []), file_path),
        remote_links=_parse_remote_links(data.get("remote_links", {}), file_path),
    )
    logger.debug(
        "Loaded %d issues and links for %d issues from %s",
        len(fixture.issues),
        len(fixture.remote_links),
        file_path,
    )
    return fixture


def load_issues(file_path: Path) -> list[Issue]:
    """Load only the issues of a YAML fixture.

    Raises:
        FixtureError: If the fixture cannot be loaded.
    """
    return load_fixture(file_path).issues
