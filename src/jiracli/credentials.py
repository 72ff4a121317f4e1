"""Credential loading for JIRA basic auth.

The credentials file holds a single ``username:password`` line. It is not a
secure way to store a password, but it is what the tool has always read.
"""

import base64
from dataclasses import dataclass
from pathlib import Path

from .errors import CredentialsError
from .logging import get_logger

logger = get_logger("credentials")


@dataclass(frozen=True)
class Credentials:
    """Username and password for HTTP basic auth."""

    username: str
    password: str

    def auth_header(self) -> dict[str, str]:
        """Build the Authorization header for these credentials."""
        raw = f"{self.username}:{self.password}"
        encoded = base64.b64encode(raw.encode()).decode()
        return {"Authorization": f"Basic {encoded}"}


def parse_credentials(content: str, path: Path | str = "") -> Credentials:
    """Parse ``username:password`` text.

    Surrounding whitespace is trimmed and the first colon separates the two
    parts, so passwords may themselves contain colons.

    Raises:
        CredentialsError: If the text is empty or has no colon.
    """
    content = content.strip()
    if not content:
        raise CredentialsError(path, f"JIRA credentials file {path} is empty")

    username, sep, password = content.partition(":")
    if not sep:
        raise CredentialsError(path, f"JIRA credentials in {path} must be username:password")

    return Credentials(username=username, password=password)


def load_credentials(path: Path | str) -> Credentials:
    """Read credentials from the given file.

    Args:
        path: Path to the credentials file (``~`` is expanded).

    Returns:
        The parsed credentials.

    Raises:
        CredentialsError: If the file cannot be read or is malformed.
    """
    path = Path(path).expanduser()
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.debug(f"Could not read credentials file {path}: {e}")
        raise CredentialsError(path) from e
    except UnicodeDecodeError as e:
        raise CredentialsError(path, f"JIRA credentials in {path} are not valid UTF-8") from e

    credentials = parse_credentials(content, path)
    logger.debug(f"Loaded credentials for {credentials.username} from {path}")
    return credentials
