"""Evaluation of parsed JQL clauses against an in-memory issue corpus.

Clauses are applied one after the other, each narrowing the candidates left
by the previous one. Result order is corpus order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from fakejira.config import DEFAULT_MAX_RESULTS
from fakejira.exceptions import MalformedContainsListError, NotFoundError
from fakejira.jql import JqlQuery
from fakejira.logging import get_logger
from fakejira.types import Issue, QueryField, QueryOperator, SearchOptions, SearchResult

__all__ = [
    "FIELD_PROJECTIONS",
    "evaluate",
    "jql_contains",
    "matches",
]

logger = get_logger(__name__)


def _project_name(issue: Issue) -> str | None:
    return issue.fields.project.name if issue.fields else None


def _category_name(issue: Issue) -> str | None:
    return issue.fields.project.project_category.name if issue.fields else None


def _issue_type_name(issue: Issue) -> str | None:
    return issue.fields.type.name if issue.fields else None


def _status_name(issue: Issue) -> str | None:
    if issue.fields is None or issue.fields.status is None:
        return None
    return issue.fields.status.name


# Each projection yields the candidate values of one field. An issue matches
# a clause if any of its candidate values does, which is how "id" covers both
# the numeric id and the issue key. A missing key projects to None.
FIELD_PROJECTIONS: dict[QueryField, Callable[[Issue], tuple[str | None, ...]]] = {
    QueryField.ID: lambda issue: (issue.id, issue.key or None),
    QueryField.PROJECT: lambda issue: (_project_name(issue),),
    QueryField.CATEGORY: lambda issue: (_category_name(issue),),
    QueryField.ISSUE_TYPE: lambda issue: (_issue_type_name(issue),),
    QueryField.STATUS: lambda issue: (_status_name(issue),),
}


def jql_contains(value_list: str, value: str | None) -> bool:
    """Check whether *value* is an element of a parenthesized list.

    Args:
        value_list: Raw list such as ``"(123, 1234)"``.
        value: The value to look for. None never matches.

    Returns:
        True if a comma-separated element equals *value*, ignoring
        surrounding whitespace on both sides.

    Raises:
        MalformedContainsListError: If *value_list* is not wrapped in
            parentheses.
    """
    if len(value_list) < 2 or not (value_list.startswith("(") and value_list.endswith(")")):
        raise MalformedContainsListError(
            f"incorrect format of the JQL query: {value_list}", value_list
        )
    if value is None:
        return False
    wanted = value.strip()
    return any(element.strip() == wanted for element in value_list[1:-1].split(","))


def matches(query: JqlQuery, issue: Issue) -> bool:
    """Return True if *issue* satisfies a single clause."""
    candidates = FIELD_PROJECTIONS[query.key](issue)
    if query.operator == QueryOperator.EQUAL:
        return any(candidate == query.value for candidate in candidates)
    return any(jql_contains(query.value, candidate) for candidate in candidates)


def _filter(query: JqlQuery, issues: Sequence[Issue]) -> list[Issue]:
    try:
        return [issue for issue in issues if matches(query, issue)]
    except MalformedContainsListError as e:
        logger.warning("%s", e)
        return []


def evaluate(
    queries: Iterable[JqlQuery],
    issues: Sequence[Issue],
    options: SearchOptions | None = None,
    *,
    jql: str = "",
    default_max_results: int = DEFAULT_MAX_RESULTS,
) -> SearchResult:
    """Filter *issues* with every clause and return one page of matches.

    Args:
        queries: Parsed clauses, applied in order (logical AND).
        issues: The corpus. It is not modified.
        options: Result window; None behaves like ``SearchOptions()``.
        jql: The raw query, used in diagnostics.
        default_max_results: Page size used when ``options.max_results`` is 0.

    Returns:
        The first ``max_results`` matches with the total match count.
        ``start_at`` is echoed but not used as an offset.

    Raises:
        NotFoundError: If no issue satisfies every clause.
    """
    options = options or SearchOptions()
    candidates = list(issues)

    for query in queries:
        candidates = _filter(query, candidates)
        logger.debug(
            "%s %s %s left %d candidates",
            query.key,
            query.operator,
            query.value,
            len(candidates),
            extra={"diagnostic_tag": "jql", "jql": jql},
        )
        if not candidates:
            break

    if not candidates:
        raise NotFoundError(f"no issue found with the jql query: {jql}")

    max_results = options.max_results or default_max_results
    return SearchResult(
        issues=candidates[:max_results],
        total=len(candidates),
        max_results=max_results,
        start_at=options.start_at,
    )
