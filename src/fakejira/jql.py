"""Parser for the JQL subset understood by the fake Jira client.

Queries are conjunctions of clauses joined by ``&``. Each clause compares one
queryable field with a value using ``=`` or `` IN ``::

    project='Test1'
    id IN (123,1234)
    id IN (123,1234)&project='Test1'&status=Open

There is no escaping: a ``&`` inside a quoted value splits the clause. The
value of an ``IN`` clause is kept as the raw parenthesized list; it is split
into elements when it is evaluated.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from fakejira.exceptions import JqlParseError, MalformedClauseError
from fakejira.logging import get_logger
from fakejira.types import QueryField, QueryOperator

__all__ = [
    "CONJUNCTION",
    "JQL_OPERATORS",
    "JqlQueries",
    "JqlQuery",
    "parse_jql",
    "split_jql_query",
    "trim_quotes",
]

logger = get_logger(__name__)

CONJUNCTION = "&"

# Searched in this order; on equal positions the earlier entry wins.
JQL_OPERATORS: tuple[tuple[str, QueryOperator], ...] = (
    ("=", QueryOperator.EQUAL),
    (" IN ", QueryOperator.CONTAINS),
)


@dataclass(frozen=True)
class JqlQuery:
    """A single parsed clause.

    Attributes:
        key: The queried field.
        operator: The comparison operator.
        value: The compared value with one layer of quotes removed. For
            ``CONTAINS`` this is the unsplit parenthesized list.
    """

    key: QueryField
    operator: QueryOperator
    value: str


@dataclass(frozen=True)
class JqlQueries:
    """Ordered clauses of a query, combined with AND."""

    jql: tuple[JqlQuery, ...] = ()

    def __iter__(self) -> Iterator[JqlQuery]:
        return iter(self.jql)

    def __len__(self) -> int:
        return len(self.jql)


def trim_quotes(value: str) -> str:
    """Strip one matching pair of single or double quotes around *value*."""
    if len(value) >= 2:
        last = value[-1]
        if value[0] == last and last in ("'", '"'):
            return value[1:-1]
    return value


def split_jql_query(clause: str) -> JqlQuery:
    """Parse one clause into a JqlQuery.

    The operator is the leftmost occurrence of any token in
    ``JQL_OPERATORS``; everything before it must be a queryable field name.

    Args:
        clause: A single clause, e.g. ``"project='Test1'"``.

    Returns:
        The parsed JqlQuery.

    Raises:
        MalformedClauseError: If no operator is present or the field is not
            queryable.
    """
    found: tuple[int, str, QueryOperator] | None = None
    for token, operator in JQL_OPERATORS:
        index = clause.find(token)
        if index == -1:
            continue
        if found is None or index < found[0]:
            found = (index, token, operator)

    if found is None:
        raise MalformedClauseError(f"failed to split the jql string: {clause}", clause)

    index, token, operator = found
    key = clause[:index]
    if not QueryField.is_valid(key):
        raise MalformedClauseError(f"failed to split the jql string: {clause}", clause)

    return JqlQuery(
        key=QueryField(key),
        operator=operator,
        value=trim_quotes(clause[index + len(token) :]),
    )


def parse_jql(jql: str, *, strict: bool = False) -> JqlQueries:
    """Parse a query string into its clauses.

    Supported syntax: ``&`` (and); ``=`` (equal) and `` IN `` (contains);
    fields from :class:`QueryField`.

    Args:
        jql: The raw query string.
        strict: If True, raise instead of dropping malformed clauses.

    Returns:
        The parsed clauses in query order. In the default best-effort mode
        malformed clauses are logged and left out. A blank query has no
        clauses.

    Raises:
        JqlParseError: In strict mode, if any clause is malformed.
    """
    if not jql.strip():
        return JqlQueries()

    queries: list[JqlQuery] = []
    errors: list[MalformedClauseError] = []

    for clause in jql.split(CONJUNCTION):
        try:
            queries.append(split_jql_query(clause))
        except MalformedClauseError as e:
            errors.append(e)
            if not strict:
                logger.warning("Dropping jql clause: %s", e, extra={"jql": jql})

    if strict and errors:
        raise JqlParseError(jql, errors)

    return JqlQueries(jql=tuple(queries))
