"""Command registry and handlers.

Every command is a ``Command`` object registered in ``COMMANDS`` under its
keyword. Handlers check their own argument count, print a usage hint and
return when it is wrong, and stop at the first failure otherwise.
"""

import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from . import config as settings
from .client import JiraClient
from .config import JiraCliConfig, create_default_config
from .credentials import load_credentials
from .errors import (
    BrowserError,
    CredentialsError,
    DecodeError,
    DownloadError,
    JiraCliError,
)
from .logging import get_logger
from .render import Renderer
from .views import render_comments, render_description, render_results

logger = get_logger("commands")

COMMENT_CREATED = 201
ASSIGNEE_CHANGED = 204

BROWSER_OPENERS = {
    "linux": "xdg-open",
    "darwin": "open",
}


@dataclass
class Session:
    """Everything a handler needs for one invocation.

    The JIRA client is built on first use so commands that never touch the
    network never read the credentials file.
    """

    config: JiraCliConfig
    renderer: Renderer
    _client: JiraClient | None = field(default=None, repr=False)

    @property
    def client(self) -> JiraClient:
        if self._client is None:
            credentials = load_credentials(self.config.credentials.file)
            self._client = JiraClient(
                self.config.server.base_url,
                credentials,
                resolution_field=self.config.fields.resolution,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


@dataclass
class Command:
    """A keyword bound to a handler function."""

    name: str
    description: str
    handler: Callable[[Session, list[str]], None]

    def execute(self, session: Session, args: list[str]) -> None:
        """Run the handler, printing any failure instead of raising it.

        Missing credentials are not handled here; they end the process.
        """
        try:
            self.handler(session, args)
        except CredentialsError:
            raise
        except JiraCliError as e:
            logger.debug(f"{self.name} failed: {e}")
            session.renderer.error(e)


def browse_url(config: JiraCliConfig, key: str) -> str:
    return f"{config.server.browse_url.rstrip('/')}/{key}"


def open_browser(url: str, platform: str | None = None) -> subprocess.Popen:
    """Launch the platform's URL opener without waiting for it.

    Raises:
        BrowserError: If the platform has no known opener or it fails to start.
    """
    platform = platform or sys.platform
    opener = BROWSER_OPENERS.get(platform)
    if opener is None:
        raise BrowserError(f"unsupported platform: {platform}")
    try:
        return subprocess.Popen([opener, url])
    except OSError as e:
        raise BrowserError(f"could not run {opener}: {e}") from e


# ==================== Handlers ====================


def _list_issues(session: Session, title: str, jql: str) -> None:
    page = session.client.search(jql)
    session.renderer.echo(f"@y{title}@|")
    render_results(session.renderer, page)


def list_assigned(session: Session, args: list[str]) -> None:
    _list_issues(session, "Assigned Issues", session.config.queries.assigned)


def list_watched(session: Session, args: list[str]) -> None:
    _list_issues(session, "Watched Issues", session.config.queries.watched)


def show_desc(session: Session, args: list[str]) -> None:
    if len(args) != 1:
        session.renderer.echo("Need a ticket number to display description")
        return
    issue = session.client.get_issue(args[0])
    render_description(session.renderer, issue)


def show_comments(session: Session, args: list[str]) -> None:
    if len(args) != 1:
        session.renderer.echo("Need a ticket number to display comments for")
        return
    issue = session.client.get_issue(args[0])
    try:
        render_comments(session.renderer, issue)
    except ValueError as e:
        raise DecodeError(str(e)) from e


def add_comment(session: Session, args: list[str]) -> None:
    if len(args) != 2:
        session.renderer.echo("Need a ticket number and a comment message to add")
        return
    key, body = args
    status = session.client.add_comment(key, body)
    if status != COMMENT_CREATED:
        session.renderer.text(status)
        return
    session.renderer.echo("Comment added to {}", key.upper())


def reassign_issue(session: Session, args: list[str]) -> None:
    if len(args) not in (1, 2):
        session.renderer.echo("Need a ticket number and ldap name")
        return
    key = args[0]
    assignee = args[1] if len(args) == 2 else None
    status = session.client.assign(key, assignee)
    if status != ASSIGNEE_CHANGED:
        session.renderer.text(status)
        return
    if assignee is not None:
        session.renderer.echo("Reassigned {} to {}", key.upper(), assignee)
    else:
        session.renderer.echo("Unassigned {}", key.upper())


def download_attachments(session: Session, args: list[str]) -> None:
    if len(args) != 1:
        session.renderer.echo("Need a ticket number to fetch attachments")
        return
    issue = session.client.get_issue(args[0])
    attachments = issue.fields.attachments
    if not attachments:
        session.renderer.echo("No attachments")
        return

    session.renderer.echo("@yDownloading attachments...@|")
    for attachment in attachments:
        filename = attachment.filename
        session.renderer.text(filename)
        content = session.client.download(attachment.content)
        target = Path.cwd() / filename
        try:
            with open(target, "wb") as f:
                f.write(content)
        except OSError as e:
            raise DownloadError(f"Could not write {target}: {e}") from e
        logger.debug(f"Wrote {len(content)} bytes to {target}")


def ticket_link(session: Session, args: list[str]) -> None:
    if len(args) != 1:
        session.renderer.echo("Need a ticket number")
        return
    session.renderer.text(browse_url(session.config, args[0]))


def open_ticket(session: Session, args: list[str]) -> None:
    if len(args) != 1:
        session.renderer.echo("Need ticket number to open")
        return
    open_browser(browse_url(session.config, args[0]))


def init_config(session: Session, args: list[str]) -> None:
    if not create_default_config(session.config):
        session.renderer.echo("Settings already exist at {}", settings.SETTINGS_FILE)
        return
    session.renderer.echo("Wrote default settings to {}", settings.SETTINGS_FILE)


def show_help(session: Session, args: list[str]) -> None:
    session.renderer.echo("The following commands are available\n")
    for name in sorted(COMMANDS):
        session.renderer.text(f"{name:<12}\t{COMMANDS[name].description}")


def _register(*commands: Command) -> dict[str, Command]:
    return {command.name: command for command in commands}


COMMANDS: dict[str, Command] = _register(
    Command("assigned", "list tickets assigned to you", list_assigned),
    Command("watched", "list watched tickets", list_watched),
    Command("comments", "show comments for a ticket", show_comments),
    Command("add-comment", "add a comment to a ticket", add_comment),
    Command("desc", "show the description of a ticket", show_desc),
    Command(
        "assign",
        "reassign a ticket to another user or unassign if no user is specified",
        reassign_issue,
    ),
    Command("attachments", "download a tickets attachments to the current directory", download_attachments),
    Command("link", "print a link to a ticket", ticket_link),
    Command("open", "open a ticket in the browser", open_ticket),
    Command("init-config", "write a default settings file", init_config),
    Command("help", "list the available commands", show_help),
)

DEFAULT_COMMAND = "assigned"
FALLBACK_COMMAND = "desc"
