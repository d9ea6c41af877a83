"""Type definitions for the fake Jira client.

This module provides the query enums used by the JQL parser and the
dataclasses the fake stores and returns. The dataclasses mirror the shape of
the Jira REST API closely enough for client code under test, and can be built
from raw API JSON with ``from_api_response``.

Usage:
    from fakejira.types import Issue, IssueFields, Project, QueryField

    issue = Issue(id="123", key="PROJ-1", fields=IssueFields(project=Project(name="Test1")))

    # QueryField inherits from StrEnum, so direct comparison works
    QueryField.ISSUE_TYPE == "issueType"  # True
    QueryField.is_valid("summary")  # False
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class QueryField(StrEnum):
    """Fields that can appear on the left of a JQL clause.

    Values:
        PROJECT: Project name ("project")
        CATEGORY: Project category name ("category")
        ID: Issue id or issue key ("id")
        ISSUE_TYPE: Issue type name ("issueType")
        STATUS: Status name ("status")
    """

    PROJECT = "project"
    CATEGORY = "category"
    ID = "id"
    ISSUE_TYPE = "issueType"
    STATUS = "status"

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string value is a queryable field name.

        Matching is exact and case-sensitive.
        """
        return value in cls._value2member_map_

    @classmethod
    def values(cls) -> frozenset[str]:
        """Return all queryable field names as a frozenset."""
        return frozenset(member.value for member in cls)


class QueryOperator(StrEnum):
    """Comparison operators supported in JQL clauses.

    Values:
        EQUAL: Exact string match, written ``=`` ("equal")
        CONTAINS: Membership in a parenthesized list, written `` IN `` ("contains")
    """

    EQUAL = "equal"
    CONTAINS = "contains"


@dataclass(frozen=True)
class ProjectCategory:
    """Category a Jira project belongs to."""

    name: str = ""
    id: str = ""


@dataclass(frozen=True)
class Project:
    """A Jira project as embedded in issue fields."""

    name: str = ""
    key: str = ""
    id: str = ""
    project_category: ProjectCategory = field(default_factory=ProjectCategory)


@dataclass(frozen=True)
class IssueType:
    """Issue type (Bug, Story, ...)."""

    name: str = ""
    id: str = ""


@dataclass(frozen=True)
class Status:
    """Workflow status of an issue."""

    name: str = ""
    id: str = ""


@dataclass(frozen=True)
class IssueFields:
    """The subset of Jira issue fields the fake understands."""

    project: Project = field(default_factory=Project)
    type: IssueType = field(default_factory=IssueType)
    status: Status | None = None
    summary: str = ""
    labels: tuple[str, ...] = ()


@dataclass(frozen=True)
class Issue:
    """A Jira issue record.

    Attributes:
        id: Numeric issue id, as a string (e.g. "10001").
        key: Human-readable issue key (e.g. "PROJ-1").
        fields: Issue fields, or None for a bare id/key record.
    """

    id: str
    key: str = ""
    fields: IssueFields | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> Issue:
        """Create an Issue from Jira API response data.

        Args:
            data: Raw issue data from the Jira API.

        Returns:
            Issue instance. Missing nested objects become empty values.
        """
        fields_data = data.get("fields")
        if fields_data is None:
            return cls(id=str(data.get("id", "")), key=data.get("key", ""))

        project_data = fields_data.get("project") or {}
        category_data = project_data.get("projectCategory") or {}
        type_data = fields_data.get("issuetype") or {}
        status_data = fields_data.get("status")

        project = Project(
            name=project_data.get("name", ""),
            key=project_data.get("key", ""),
            id=str(project_data.get("id", "")),
            project_category=ProjectCategory(
                name=category_data.get("name", ""),
                id=str(category_data.get("id", "")),
            ),
        )

        status = None
        if status_data:
            status = Status(name=status_data.get("name", ""), id=str(status_data.get("id", "")))

        return cls(
            id=str(data.get("id", "")),
            key=data.get("key", ""),
            fields=IssueFields(
                project=project,
                type=IssueType(name=type_data.get("name", ""), id=str(type_data.get("id", ""))),
                status=status,
                summary=fields_data.get("summary", ""),
                labels=tuple(fields_data.get("labels", [])),
            ),
        )


@dataclass(frozen=True)
class RemoteLinkObject:
    """The linked resource of a remote link."""

    url: str = ""
    title: str = ""
    summary: str = ""


@dataclass(frozen=True)
class RemoteLink:
    """A link from a Jira issue to an external resource."""

    object: RemoteLinkObject = field(default_factory=RemoteLinkObject)
    id: int = 0
    global_id: str = ""
    relationship: str = ""

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> RemoteLink:
        """Create a RemoteLink from Jira API response data."""
        object_data = data.get("object") or {}
        return cls(
            object=RemoteLinkObject(
                url=object_data.get("url", ""),
                title=object_data.get("title", ""),
                summary=object_data.get("summary", ""),
            ),
            id=int(data.get("id", 0)),
            global_id=data.get("globalId", ""),
            relationship=data.get("relationship", ""),
        )


@dataclass(frozen=True)
class SearchOptions:
    """Result window requested by a search.

    Attributes:
        max_results: Page size; 0 selects the default page size.
        start_at: Reported back in the result; not applied as an offset.
    """

    max_results: int = 0
    start_at: int = 0

    def __post_init__(self) -> None:
        """Validate the result window."""
        if self.max_results < 0:
            raise ValueError(f"max_results must not be negative, got {self.max_results}")
        if self.start_at < 0:
            raise ValueError(f"start_at must not be negative, got {self.start_at}")


@dataclass(frozen=True)
class SearchResult:
    """One page of search results.

    Attributes:
        issues: Matching issues in corpus order, at most ``max_results`` long.
        total: Number of matching issues before truncation.
        max_results: Effective page size.
        start_at: Echoed from the request.
    """

    issues: list[Issue]
    total: int
    max_results: int
    start_at: int = 0
