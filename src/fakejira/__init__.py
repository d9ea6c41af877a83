"""Fake Jira - an in-memory Jira client with a small JQL evaluator for tests."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fake-jira")
except PackageNotFoundError:
    # Package is not installed (e.g., running from source without pip install)
    __version__ = "0.0.0.dev0"

# Re-export core public API
from fakejira.client import JiraClient
from fakejira.config import Config, load_config
from fakejira.evaluator import evaluate
from fakejira.exceptions import (
    FixtureError,
    JiraError,
    JqlParseError,
    MalformedClauseError,
    MalformedContainsListError,
    NotFoundError,
    is_not_found,
)
from fakejira.fake import FakeJiraClient
from fakejira.jql import JqlQueries, JqlQuery, parse_jql
from fakejira.logging import setup_logging, setup_logging_from_config
from fakejira.types import (
    Issue,
    IssueFields,
    IssueType,
    Project,
    ProjectCategory,
    QueryField,
    QueryOperator,
    RemoteLink,
    RemoteLinkObject,
    SearchOptions,
    SearchResult,
    Status,
)

# NOTE: Update this list when adding new exports to this module.
__all__ = [
    "__version__",
    "Config",
    "FakeJiraClient",
    "FixtureError",
    "Issue",
    "IssueFields",
    "IssueType",
    "JiraClient",
    "JiraError",
    "JqlParseError",
    "JqlQueries",
    "JqlQuery",
    "MalformedClauseError",
    "MalformedContainsListError",
    "NotFoundError",
    "Project",
    "ProjectCategory",
    "QueryField",
    "QueryOperator",
    "RemoteLink",
    "RemoteLinkObject",
    "SearchOptions",
    "SearchResult",
    "Status",
    "evaluate",
    "is_not_found",
    "load_config",
    "parse_jql",
    "setup_logging",
    "setup_logging_from_config",
]
