"""Client interface shared by the fake and any real Jira client."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Self

from fakejira.types import Issue, RemoteLink, SearchOptions, SearchResult


class JiraClient(ABC):
    """Abstract interface for Jira operations.

    Code under test depends on this interface so that tests can hand it a
    :class:`fakejira.fake.FakeJiraClient` instead of a networked client.
    """

    @abstractmethod
    def search(self, jql: str, options: SearchOptions | None = None) -> SearchResult:
        """Search for issues using JQL.

        Args:
            jql: JQL query string.
            options: Result window; None selects the defaults.

        Returns:
            One page of matching issues.

        Raises:
            NotFoundError: If no issue matches.
        """

    @abstractmethod
    def get_issue(self, issue_id: str) -> Issue:
        """Fetch a single issue by id.

        Raises:
            NotFoundError: If the issue does not exist.
        """

    @abstractmethod
    def get_remote_links(self, issue_id: str) -> list[RemoteLink]:
        """Return the remote links of an issue."""

    @abstractmethod
    def add_remote_link(self, issue_id: str, link: RemoteLink) -> None:
        """Attach a remote link to an issue.

        Raises:
            NotFoundError: If the issue does not exist.
        """

    @abstractmethod
    def update_remote_link(self, issue_id: str, link: RemoteLink) -> None:
        """Update an existing remote link of an issue.

        Raises:
            NotFoundError: If the issue or its links do not exist.
        """

    @abstractmethod
    def list_projects(self) -> list[dict[str, Any]] | None:
        """Return the projects visible to the client."""

    @abstractmethod
    def jira_client(self) -> Any:
        """Return the underlying REST client, where there is one."""

    @abstractmethod
    def jira_url(self) -> str:
        """Return the base URL of the Jira instance."""

    @abstractmethod
    def used(self) -> bool:
        """Return True if the client is configured for use."""

    @abstractmethod
    def with_fields(self, **fields: Any) -> Self:
        """Return a client whose log lines carry *fields* as context."""

    @abstractmethod
    def for_plugin(self, plugin: str) -> Self:
        """Return a client scoped to the named plugin."""
