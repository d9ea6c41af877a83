"""Exception types raised by the fake Jira client.

All errors derive from :class:`JiraError` so callers can catch every
failure of the fake in one place, while :class:`NotFoundError` stays
distinguishable for "nothing matched" branches.
"""

from __future__ import annotations

from collections.abc import Sequence

__all__ = [
    "FixtureError",
    "JiraError",
    "JqlParseError",
    "MalformedClauseError",
    "MalformedContainsListError",
    "NotFoundError",
    "is_not_found",
]


class JiraError(Exception):
    """Base class for errors raised by the fake Jira client.

    Attributes:
        status_code: HTTP status code the real API would have answered with,
            or None when the error has no transport equivalent.
    """

    status_code: int | None = None


class NotFoundError(JiraError):
    """Raised when a search, issue lookup, or link lookup finds nothing."""

    status_code = 404


class MalformedClauseError(JiraError, ValueError):
    """Raised when a JQL clause does not match the supported grammar.

    This covers clauses without a recognized operator and clauses whose
    field is not one of the queryable fields.

    Attributes:
        clause: The raw clause text that failed to parse.
    """

    status_code = 400

    def __init__(self, message: str, clause: str = "") -> None:
        super().__init__(message)
        self.clause = clause


class MalformedContainsListError(MalformedClauseError):
    """Raised when an ``IN`` value is not a parenthesized list."""


class JqlParseError(JiraError, ValueError):
    """Raised by strict parsing when one or more clauses are malformed.

    Attributes:
        errors: The clause errors, in query order.
    """

    status_code = 400

    def __init__(self, jql: str, errors: Sequence[MalformedClauseError]) -> None:
        self.jql = jql
        self.errors = list(errors)
        details = "; ".join(str(e) for e in self.errors)
        super().__init__(f"failed to parse the jql query {jql!r}: {details}")


class FixtureError(JiraError):
    """Raised when a YAML fixture file cannot be loaded."""


def is_not_found(err: BaseException | None) -> bool:
    """Return True if *err* reports a missing issue, link, or search result."""
    return isinstance(err, NotFoundError)
