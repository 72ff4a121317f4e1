"""Exception classes for jiracli."""


class JiraCliError(Exception):
    """Base exception for jiracli."""

    pass


class CredentialsError(JiraCliError):
    """Raised when the credentials file is missing or malformed."""

    def __init__(self, path, reason: str | None = None):
        self.path = path
        self.reason = reason
        message = reason or f"Missing JIRA credentials in {path}"
        super().__init__(message)


class TransportError(JiraCliError):
    """Raised when a request never produced a response."""

    pass


class UnexpectedStatusError(JiraCliError):
    """Raised when a GET returns anything other than 200."""

    def __init__(self, url: str, status_code: int, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        status_line = f"{status_code} {reason}".strip()
        super().__init__(f"{url}\n{status_line}")


class DecodeError(JiraCliError):
    """Raised when a response body is not the JSON document we expected."""

    pass


class BrowserError(JiraCliError):
    """Raised when a URL cannot be handed to a browser."""

    pass


class DownloadError(JiraCliError):
    """Raised when an attachment cannot be written to disk."""

    pass
