"""Tests for the credentials loader."""

import pytest

from jiracli.credentials import Credentials, load_credentials, parse_credentials
from jiracli.errors import CredentialsError


def test_parse_user_and_password():
    """Test the plain username:password form."""
    assert parse_credentials("user:pass") == Credentials("user", "pass")


def test_parse_trims_whitespace():
    """Test that surrounding whitespace and the trailing newline are ignored."""
    assert parse_credentials("  user:pass\n") == Credentials("user", "pass")


def test_parse_splits_on_first_colon():
    """Test that the password may contain colons."""
    creds = parse_credentials("user:pa:ss")
    assert creds.username == "user"
    assert creds.password == "pa:ss"


def test_parse_missing_colon():
    """Test that a line without a colon is rejected."""
    with pytest.raises(CredentialsError):
        parse_credentials("justauser")


def test_parse_empty():
    """Test that an empty file is rejected."""
    with pytest.raises(CredentialsError):
        parse_credentials("   \n")


def test_load_from_file(credentials_file):
    """Test loading credentials from disk."""
    assert load_credentials(credentials_file) == Credentials("alice", "s3cret")


def test_load_missing_file(tmp_path):
    """Test that a missing file names the path in the error."""
    path = tmp_path / "nope"
    with pytest.raises(CredentialsError) as excinfo:
        load_credentials(path)
    assert str(excinfo.value) == f"Missing JIRA credentials in {path}"
    assert excinfo.value.path == path


def test_auth_header():
    """Test that the header is basic auth over base64 user:pass."""
    header = Credentials("user", "pass").auth_header()
    assert header == {"Authorization": "Basic dXNlcjpwYXNz"}


def test_load_undecodable_file(tmp_path):
    """Test that a file that is not UTF-8 is a credentials error."""
    path = tmp_path / ".jirarc"
    path.write_bytes(b"al\xffice:pw\n")
    with pytest.raises(CredentialsError) as excinfo:
        load_credentials(path)
    assert str(excinfo.value) == f"JIRA credentials in {path} are not valid UTF-8"
