"""Tests for decoding JIRA documents."""

import json

import pytest

from jiracli.errors import DecodeError
from jiracli.models import User, decode_issue, decode_search


def test_decode_issue(issue_json):
    """Test that the fields the client prints are decoded."""
    issue = decode_issue(issue_json)

    assert issue.id == "10042"
    assert issue.key == "ABC-123"
    assert issue.fields.summary == "Login page throws 500"
    assert issue.fields.status == "Open"
    assert issue.fields.labels == ["bug"]
    assert issue.fields.resolution is None
    assert issue.fields.assignee is None
    assert issue.fields.reporter == User(name="carol", display_name="Carol Reporter")


def test_decode_comments_and_attachments(issue_json):
    issue = decode_issue(issue_json)

    [comment] = issue.fields.comments
    assert comment.author.display_name == "Bob Builder"
    assert comment.created == "2013-05-02T10:20:30.000-0500"

    [attachment] = issue.fields.attachments
    assert attachment.id == "900"
    assert attachment.filename == "trace.log"


def test_decode_minimal_issue():
    """Test that optional fields default sensibly when absent."""
    raw = json.dumps({"key": "ABC-9", "fields": {"summary": "s", "status": {"name": "Open"}}})
    issue = decode_issue(raw)

    assert issue.fields.description is None
    assert issue.fields.labels is None
    assert issue.fields.comments == []
    assert issue.fields.attachments == []
    assert issue.fields.reporter is None


def test_decode_resolution_from_custom_field(issue_data):
    """Test that the resolution comment comes from the configured field."""
    issue_data["fields"]["customfield_20000"] = "Fixed in 2.1"
    issue = decode_issue(json.dumps(issue_data), resolution_field="customfield_20000")
    assert issue.fields.resolution == "Fixed in 2.1"


def test_decode_search(search_json):
    page = decode_search(search_json)

    assert (page.start_at, page.max_results, page.total) == (0, 50, 2)
    assert [issue.key for issue in page.issues] == ["ABC-1", "ABC-2"]
    assert page.issues[1].fields.status == "In Progress"


def test_decode_empty_search():
    page = decode_search(b'{"startAt": 0, "maxResults": 50, "total": 0}')
    assert page.issues == []


@pytest.mark.parametrize(
    "raw",
    [
        b"<html>not json</html>",
        b'{"fields": {}}',
        b'{"key": "ABC-1", "fields": {"summary": "no status"}}',
        b"[]",
        b'{"key": "ABC-1", "fields": {"status": {"name": "Open"}, "labels": ["bug", 7]}}',
        b'{"key": "ABC-1", "fields": {"status": {"name": "Open"}, "labels": "bug"}}',
    ],
)
def test_decode_issue_rejects_bad_documents(raw):
    with pytest.raises(DecodeError):
        decode_issue(raw)


def test_decode_search_rejects_bad_issue():
    with pytest.raises(DecodeError):
        decode_search(b'{"issues": [{"key": "ABC-1"}]}')


def test_redacted_user_has_empty_name(issue_data):
    """Test that a null login or display name decodes as an empty string."""
    issue_data["fields"]["reporter"] = {"name": None, "displayName": None}
    issue = decode_issue(json.dumps(issue_data))
    assert issue.fields.reporter == User(name="", display_name="")
