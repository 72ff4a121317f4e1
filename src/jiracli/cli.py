"""Command-line interface for jiracli.

Commands come from the ``COMMANDS`` registry. With no command the assigned
issues are listed, and a first argument that is not a command is taken to be
a ticket key and shown with ``desc``.
"""

import click

from . import __version__
from .commands import COMMANDS, DEFAULT_COMMAND, FALLBACK_COMMAND, Command, Session
from .config import load_config
from .errors import CredentialsError
from .logging import configure_logging, get_logger
from .render import Renderer

logger = get_logger("cli")


def run_command(ctx: click.Context, command: Command, args: list[str]) -> None:
    """Execute a registered command; missing credentials exit with status 1."""
    session = ctx.find_object(Session)
    logger.debug(f"Running {command.name} with {args}")
    try:
        command.execute(session, args)
    except CredentialsError as e:
        session.renderer.error(e)
        ctx.exit(1)


def _to_click_command(command: Command) -> click.Command:
    """Wrap a registry entry so click can route to it.

    Arguments are passed through unparsed, ``--help`` included: handlers do
    their own checking and comment text may legitimately start with a dash.
    """

    @click.pass_context
    def callback(ctx: click.Context, args: tuple[str, ...]) -> None:
        run_command(ctx, command, list(args))

    return click.Command(
        name=command.name,
        callback=callback,
        params=[click.Argument(["args"], nargs=-1, type=click.UNPROCESSED)],
        help=command.description,
        short_help=command.description,
        context_settings={"ignore_unknown_options": True},
        add_help_option=False,
    )


class DispatchGroup(click.Group):
    """Group whose commands are the registry entries, with a ticket-key fallback."""

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(COMMANDS)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = COMMANDS.get(cmd_name)
        if command is None:
            return None
        return _to_click_command(command)

    def resolve_command(self, ctx: click.Context, args: list[str]):
        if args and args[0] not in COMMANDS:
            # Not a keyword: the whole argument list belongs to desc
            return FALLBACK_COMMAND, self.get_command(ctx, FALLBACK_COMMAND), args
        return super().resolve_command(ctx, args)


@click.group(cls=DispatchGroup, invoke_without_command=True)
@click.option("--color/--no-color", default=None, help="Force coloured or plain output")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging on stderr")
@click.option("--version", is_flag=True, help="Show version information")
@click.pass_context
def main(ctx: click.Context, color: bool | None, verbose: bool, version: bool) -> None:
    """jiracli - JIRA from the terminal.

    Examples:

        jiracli                       List tickets assigned to you

        jiracli ABC-123               Show the description of ABC-123

        jiracli comments ABC-123      Show the comments on ABC-123

        jiracli assign ABC-123 bob    Reassign ABC-123 to bob

        jiracli help                  List all commands
    """
    if version:
        click.echo(f"jiracli version {__version__}")
        ctx.exit()

    config = load_config()
    configure_logging(config, verbose)

    renderer = Renderer(color=config.display.color if color is None else color)
    session = Session(config=config, renderer=renderer)
    ctx.obj = session
    ctx.call_on_close(session.close)

    if ctx.invoked_subcommand is None:
        run_command(ctx, COMMANDS[DEFAULT_COMMAND], [])


if __name__ == "__main__":
    main()
