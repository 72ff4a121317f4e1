"""Data records for the parts of JIRA's JSON the client reads.

Each record is a read-only snapshot decoded from a single API response.
"""

import json
from dataclasses import dataclass, field
from typing import Any

from .errors import DecodeError

DEFAULT_RESOLUTION_FIELD = "customfield_10016"


@dataclass(frozen=True)
class User:
    """A JIRA user as embedded in issues and comments."""

    name: str  # login
    display_name: str

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            name=data.get("name") or "",
            display_name=data.get("displayName") or "",
        )


@dataclass(frozen=True)
class Comment:
    """A single issue comment."""

    id: str
    author: User
    body: str
    created: str  # e.g. 2013-05-02T10:20:30.000-0500

    @classmethod
    def from_dict(cls, data: dict) -> "Comment":
        return cls(
            id=str(data.get("id", "")),
            author=User.from_dict(data.get("author") or {}),
            body=data.get("body") or "",
            created=data["created"],
        )


@dataclass(frozen=True)
class Attachment:
    """An attachment; the binary lives at the content URL."""

    id: str
    content: str

    @property
    def filename(self) -> str:
        """Last path segment of the content URL."""
        return self.content.split("/")[-1]

    @classmethod
    def from_dict(cls, data: dict) -> "Attachment":
        return cls(id=str(data.get("id", "")), content=data["content"])


def _labels(value: Any) -> list[str] | None:
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(label, str) for label in value):
        raise TypeError(f"labels must be a list of strings, got {value!r}")
    return value


@dataclass(frozen=True)
class IssueFields:
    """The ``fields`` object of an issue."""

    summary: str
    status: str
    description: str | None = None
    labels: list[str] | None = None
    resolution: str | None = None
    comments: list[Comment] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)
    reporter: User | None = None
    assignee: User | None = None

    @classmethod
    def from_dict(
        cls, data: dict, resolution_field: str = DEFAULT_RESOLUTION_FIELD
    ) -> "IssueFields":
        reporter = data.get("reporter")
        assignee = data.get("assignee")
        comment_coll = data.get("comment") or {}
        return cls(
            summary=data.get("summary") or "",
            status=data["status"]["name"],
            description=data.get("description"),
            labels=_labels(data.get("labels")),
            resolution=data.get(resolution_field),
            comments=[Comment.from_dict(c) for c in comment_coll.get("comments") or []],
            attachments=[Attachment.from_dict(a) for a in data.get("attachment") or []],
            reporter=User.from_dict(reporter) if reporter else None,
            assignee=User.from_dict(assignee) if assignee else None,
        )


@dataclass(frozen=True)
class Issue:
    """A JIRA issue."""

    id: str
    key: str
    fields: IssueFields

    @classmethod
    def from_dict(
        cls, data: dict, resolution_field: str = DEFAULT_RESOLUTION_FIELD
    ) -> "Issue":
        return cls(
            id=str(data.get("id", "")),
            key=data["key"],
            fields=IssueFields.from_dict(data["fields"], resolution_field),
        )


@dataclass(frozen=True)
class SearchResultPage:
    """One page of a JQL search."""

    start_at: int
    max_results: int
    total: int
    issues: list[Issue] = field(default_factory=list)

    @classmethod
    def from_dict(
        cls, data: dict, resolution_field: str = DEFAULT_RESOLUTION_FIELD
    ) -> "SearchResultPage":
        return cls(
            start_at=data.get("startAt", 0),
            max_results=data.get("maxResults", 0),
            total=data.get("total", 0),
            issues=[Issue.from_dict(i, resolution_field) for i in data.get("issues") or []],
        )


def _load_json(raw: bytes | str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as e:
        raise DecodeError(f"Error decoding JSON: {e}") from e


def decode_issue(raw: bytes | str, resolution_field: str = DEFAULT_RESOLUTION_FIELD) -> Issue:
    """Decode an ``/issue/{key}`` response body.

    Raises:
        DecodeError: If the body is not JSON or lacks required keys.
    """
    data = _load_json(raw)
    try:
        return Issue.from_dict(data, resolution_field)
    except (KeyError, TypeError, AttributeError) as e:
        raise DecodeError(f"Unexpected issue document: {e!r}") from e


def decode_search(
    raw: bytes | str, resolution_field: str = DEFAULT_RESOLUTION_FIELD
) -> SearchResultPage:
    """Decode a ``/search`` response body.

    Raises:
        DecodeError: If the body is not JSON or lacks required keys.
    """
    data = _load_json(raw)
    try:
        return SearchResultPage.from_dict(data, resolution_field)
    except (KeyError, TypeError, AttributeError) as e:
        raise DecodeError(f"Unexpected search document: {e!r}") from e
