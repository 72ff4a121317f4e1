"""Issue, search and comment output."""

import calendar
from datetime import datetime

from .models import Comment, Issue, SearchResultPage, User
from .render import Renderer

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_timestamp(created: str) -> datetime:
    """Parse a JIRA timestamp, ignoring fractional seconds and zone.

    Raises:
        ValueError: If what precedes the first ``.`` is not a timestamp.
    """
    return datetime.strptime(created.split(".")[0], TIMESTAMP_FORMAT)


def format_timestamp(created: str) -> str:
    """Format as ``day month year hour:minute``, e.g. ``2 May 2013 10:20``."""
    ts = parse_timestamp(created)
    return f"{ts.day} {calendar.month_name[ts.month]} {ts.year} {ts.hour:02d}:{ts.minute:02d}"


def render_header(renderer: Renderer, issue: Issue) -> None:
    renderer.echo("@c{} @|- @y{}@| - @b{}@|", issue.key, issue.fields.summary, issue.fields.status)


def _render_user(renderer: Renderer, label: str, user: User) -> None:
    renderer.echo(label + ": {} @r<{}>@|", user.display_name, user.name)


def render_results(renderer: Renderer, page: SearchResultPage) -> None:
    """One line per issue: key, status and summary separated by tabs."""
    if not page.issues:
        renderer.echo("No results")
        return

    for issue in page.issues:
        renderer.echo("@c{:>10}\t@b{:>12}\t@|{}", issue.key, issue.fields.status, issue.fields.summary)


def render_description(renderer: Renderer, issue: Issue) -> None:
    """Print the header, people, labels, description, resolution and attachments."""
    fields = issue.fields
    render_header(renderer, issue)

    if fields.reporter is not None:
        _render_user(renderer, "@mReporter@|", fields.reporter)
    else:
        renderer.echo("@mReporter@|: @rUnknown@|")

    if fields.assignee is not None:
        _render_user(renderer, "@gAssignee@|", fields.assignee)
    else:
        renderer.echo("@gAssignee@|: @rUnassigned@|")

    if fields.labels:
        renderer.echo("@cLabels@|: {}", ", ".join(fields.labels))

    if fields.description is None:
        renderer.echo("No description")
    else:
        renderer.echo("\n@yDescription@|")
        renderer.text(fields.description)

    if fields.resolution is not None:
        renderer.echo("\n@yResolution@|")
        renderer.text(fields.resolution)

    if fields.attachments:
        renderer.echo("\n@yAttachments@|")
        for attachment in fields.attachments:
            renderer.text(attachment.filename)


def render_comment(renderer: Renderer, comment: Comment) -> None:
    renderer.echo("@b{}@|", format_timestamp(comment.created))
    renderer.echo("@gAuthor: @|{} @r<{}>@|", comment.author.display_name, comment.author.name)
    renderer.text(f"{comment.body}\n")


def render_comments(renderer: Renderer, issue: Issue) -> None:
    """Print the header, then each comment followed by a blank line.

    Raises:
        ValueError: If a comment timestamp cannot be parsed. Comments before it
            have already been printed.
    """
    render_header(renderer, issue)

    if not issue.fields.comments:
        renderer.echo("No comments")
        return

    for comment in issue.fields.comments:
        render_comment(renderer, comment)
