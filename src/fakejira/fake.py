"""In-memory fake Jira client for tests.

The fake holds pre-seeded issues and remote links and answers searches by
parsing the JQL subset of :mod:`fakejira.jql` and evaluating it with
:mod:`fakejira.evaluator`. No network calls are made.

Usage::

    from fakejira import FakeJiraClient, Issue, IssueFields, Project, SearchOptions

    client = FakeJiraClient(
        issue_search=[
            Issue(id="123", key="PROJ-1", fields=IssueFields(project=Project(name="Test1"))),
        ],
    )
    result = client.search("id IN (123,1234)&project='Test1'", SearchOptions())
    assert result.total == 1
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Self

from fakejira.client import JiraClient
from fakejira.config import Config, load_config
from fakejira.evaluator import evaluate
from fakejira.exceptions import NotFoundError
from fakejira.fixtures import load_fixture
from fakejira.jql import parse_jql
from fakejira.logging import get_logger
from fakejira.types import Issue, RemoteLink, SearchOptions, SearchResult

logger = get_logger(__name__)


class FakeJiraClient(JiraClient):
    """Fake Jira client backed by in-memory issue lists.

    Args:
        existing_issues: Issues returned by ``get_issue`` and used to validate
            link operations.
        existing_links: Remote links per issue id.
        issue_search: Corpus searched by ``search``.
        get_issue_error: If set, ``search`` and ``get_issue`` raise it.
        strict_jql: Raise on malformed JQL clauses instead of dropping them.
            Defaults to ``config.strict_jql``.
        config: Settings for the URL, default page size and strict parsing.
            Defaults to ``load_config()``, i.e. the ``FAKEJIRA_*`` environment.

    Attributes:
        new_links: Links passed to ``add_remote_link``/``update_remote_link``.
        search_calls: ``(jql, options)`` of every ``search`` call.
    """

    def __init__(
        self,
        *,
        existing_issues: list[Issue] | None = None,
        existing_links: dict[str, list[RemoteLink]] | None = None,
        issue_search: list[Issue] | None = None,
        get_issue_error: Exception | None = None,
        strict_jql: bool | None = None,
        config: Config | None = None,
    ) -> None:
        self.config = config or load_config()
        self.existing_issues: list[Issue] = list(existing_issues or [])
        self.existing_links: dict[str, list[RemoteLink]] = {
            issue_id: list(links) for issue_id, links in (existing_links or {}).items()
        }
        self.issue_search: list[Issue] = list(issue_search or [])
        self.get_issue_error = get_issue_error
        self.strict_jql = self.config.strict_jql if strict_jql is None else strict_jql
        self.new_links: list[RemoteLink] = []
        self.search_calls: list[tuple[str, SearchOptions | None]] = []
        self._logger: logging.Logger | logging.LoggerAdapter[logging.Logger] = logger

    @classmethod
    def from_fixture(cls, file_path: Path, **kwargs: Any) -> FakeJiraClient:
        """Create a client seeded from a YAML fixture.

        The fixture issues seed both the lookup and the search corpus.

        Raises:
            FixtureError: If the fixture cannot be loaded.
        """
        fixture = load_fixture(file_path)
        return cls(
            existing_issues=fixture.issues,
            existing_links=fixture.remote_links,
            issue_search=fixture.issues,
            **kwargs,
        )

    def search(self, jql: str, options: SearchOptions | None = None) -> SearchResult:
        """Search the seeded corpus.

        Supported JQL: ``&`` (and); ``=`` (equal) and `` IN `` (contains);
        fields project, category, id, issueType, status.

        Raises:
            NotFoundError: If no issue matches.
            JqlParseError: If strict parsing is enabled and a clause is malformed.
        """
        self.search_calls.append((jql, options))
        if self.get_issue_error is not None:
            raise self.get_issue_error

        queries = parse_jql(jql, strict=self.strict_jql)
        result = evaluate(
            queries,
            self.issue_search,
            options,
            jql=jql,
            default_max_results=self.config.default_max_results,
        )
        self._logger.debug(
            "Search returned %d of %d issues", len(result.issues), result.total, extra={"jql": jql}
        )
        return result

    def get_issue(self, issue_id: str) -> Issue:
        if self.get_issue_error is not None:
            raise self.get_issue_error
        for issue in self.existing_issues:
            if issue.id == issue_id:
                return issue
        raise NotFoundError(f"No issue {issue_id} found")

    def get_remote_links(self, issue_id: str) -> list[RemoteLink]:
        return list(self.existing_links.get(issue_id, []))

    def add_remote_link(self, issue_id: str, link: RemoteLink) -> None:
        self.get_issue(issue_id)
        self.new_links.append(link)
        self._logger.debug("Added remote link %s", link.object.url, extra={"issue_id": issue_id})

    def update_remote_link(self, issue_id: str, link: RemoteLink) -> None:
        self.get_issue(issue_id)
        if issue_id not in self.existing_links:
            raise NotFoundError(f"Link for issue {issue_id} not found")
        self.new_links.append(link)
        self._logger.debug("Updated remote link %s", link.object.url, extra={"issue_id": issue_id})

    def list_projects(self) -> list[dict[str, Any]] | None:
        return None

    def jira_client(self) -> Any:
        raise NotImplementedError("FakeJiraClient has no underlying REST client")

    def jira_url(self) -> str:
        return self.config.jira_url

    def used(self) -> bool:
        return True

    def with_fields(self, **fields: Any) -> Self:
        self._logger = logger.with_context(**fields)
        return self

    def for_plugin(self, plugin: str) -> Self:
        return self.with_fields(plugin=plugin)
