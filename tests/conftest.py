"""Shared pytest fixtures for jiracli tests."""

import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from jiracli.client import JiraClient
from jiracli.commands import Session
from jiracli.config import JiraCliConfig
from jiracli.render import Renderer

BASE_URL = "https://jira.example.com/jira/rest/api/2"
BROWSE_URL = "https://jira.example.com/jira/browse"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep settings and logs out of the real home directory."""
    home = tmp_path / ".jiracli"
    monkeypatch.setattr("jiracli.config.JIRACLI_HOME", home)
    monkeypatch.setattr("jiracli.config.SETTINGS_FILE", home / "settings.toml")
    monkeypatch.setattr("jiracli.cli.configure_logging", MagicMock())
    return home


@pytest.fixture
def credentials_file(tmp_path: Path) -> Path:
    """Write a valid credentials file."""
    path = tmp_path / ".jirarc"
    path.write_text("alice:s3cret\n")
    return path


@pytest.fixture
def config(credentials_file: Path) -> JiraCliConfig:
    """Configuration pointing at a fake server and the temp credentials."""
    config = JiraCliConfig()
    config.server.base_url = BASE_URL
    config.server.browse_url = BROWSE_URL
    config.credentials.path = str(credentials_file)
    config.display.color = False
    return config


@pytest.fixture
def renderer() -> Renderer:
    return Renderer(color=False)


@pytest.fixture
def mock_client() -> MagicMock:
    """A JiraClient stand-in for handler tests."""
    return MagicMock(spec=JiraClient)


@pytest.fixture
def session(config: JiraCliConfig, renderer: Renderer, mock_client: MagicMock) -> Session:
    return Session(config=config, renderer=renderer, _client=mock_client)


@pytest.fixture
def issue_data() -> dict[str, Any]:
    """An issue document as returned by GET /issue/{key}."""
    return {
        "id": "10042",
        "key": "ABC-123",
        "fields": {
            "summary": "Login page throws 500",
            "description": "Steps:\n1. open /login\n2. submit",
            "labels": ["bug"],
            "customfield_10016": None,
            "status": {"name": "Open"},
            "comment": {
                "comments": [
                    {
                        "id": "1",
                        "author": {"name": "bob", "displayName": "Bob Builder"},
                        "body": "Reproduced on staging.",
                        "created": "2013-05-02T10:20:30.000-0500",
                    },
                ],
            },
            "attachment": [
                {"id": "900", "content": f"{BASE_URL}/attachment/900/trace.log"},
            ],
            "reporter": {"name": "carol", "displayName": "Carol Reporter"},
            "assignee": None,
        },
    }


@pytest.fixture
def search_data() -> dict[str, Any]:
    """A search document with two issues."""
    return {
        "startAt": 0,
        "maxResults": 50,
        "total": 2,
        "issues": [
            {
                "id": "1",
                "key": "ABC-1",
                "fields": {"summary": "First thing", "status": {"name": "Open"}},
            },
            {
                "id": "2",
                "key": "ABC-2",
                "fields": {"summary": "Second thing", "status": {"name": "In Progress"}},
            },
        ],
    }


@pytest.fixture
def issue_json(issue_data: dict[str, Any]) -> bytes:
    return json.dumps(issue_data).encode()


@pytest.fixture
def search_json(search_data: dict[str, Any]) -> bytes:
    return json.dumps(search_data).encode()
