"""Terminal output with inline colour markup.

Templates use two-character tokens: ``@`` followed by a colour letter
(lowercase foreground, uppercase background), ``@!`` for bold and ``@|`` to
reset. Only templates are scanned for markup; values substituted into ``{}``
placeholders are written as-is.
"""

import re

import click

MARKUP_PATTERN = re.compile(r"@([A-Za-z|!])")

COLORS = {
    "k": "black",
    "r": "red",
    "g": "green",
    "y": "yellow",
    "b": "blue",
    "m": "magenta",
    "c": "cyan",
    "w": "white",
}

RESET = "\x1b[0m"


def strip_markup(template: str) -> str:
    """Remove every markup token, leaving all other text untouched."""
    return MARKUP_PATTERN.sub("", template)


def _ansi_for(token: str) -> str:
    if token == "|":
        return RESET
    if token == "!":
        return click.style("", bold=True, reset=False)
    color = COLORS.get(token.lower())
    if color is None:
        return ""
    if token.isupper():
        return click.style("", bg=color, reset=False)
    return click.style("", fg=color, reset=False)


def colorize(template: str) -> str:
    """Replace markup tokens with ANSI escape sequences."""
    return MARKUP_PATTERN.sub(lambda m: _ansi_for(m.group(1)), template)


class Renderer:
    """Writes marked-up templates to the terminal.

    The colour decision is made once, at construction, and every line of
    output goes through the same conversion.
    """

    def __init__(self, color: bool = False):
        self.color = color

    def render(self, template: str, *args: object) -> str:
        """Convert markup in ``template`` and fill its placeholders."""
        converted = colorize(template) if self.color else strip_markup(template)
        return converted.format(*args) if args else converted

    def echo(self, template: str, *args: object) -> None:
        click.echo(self.render(template, *args), color=self.color)

    def text(self, value: object) -> None:
        """Write user data without interpreting markup."""
        click.echo(str(value), color=self.color)

    def error(self, message: object) -> None:
        click.echo(str(message), err=True, color=self.color)
