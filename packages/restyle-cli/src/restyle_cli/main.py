"""CLI entry point for restyle.

This module defines the main CLI group using the LazyGroup pattern so
'restyle --help' does not import the compiler stack.
"""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Any

import click
import rich_click as rclick

from restyle_cli import __version__
from restyle_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Rich-click group whose subcommands are imported on first use.

    Subcommands are registered as "module:attribute" references. A loaded
    command is added to the group so each module is imported at most once.

    Attributes:
        lazy_subcommands: Command name -> "module:attribute" reference.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self.lazy_subcommands:
            command = _load_command(cmd_name, self.lazy_subcommands[cmd_name])
            self.add_command(command, cmd_name)
        return command


def _load_command(name: str, reference: str) -> click.Command:
    """Import the command behind a "module:attribute" reference.

    Raises:
        TypeError: If the reference does not point at a click command.
    """
    module_name, _, attr_name = reference.partition(":")
    command = getattr(importlib.import_module(module_name), attr_name)
    if not isinstance(command, click.Command):
        raise TypeError(f"Lazy command {name!r} resolved to {type(command).__name__}")
    return command


LAZY_COMMANDS = {
    "compile": "restyle_cli.commands.compile:compile_cmd",
    "owners": "restyle_cli.commands.owners:owners",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="restyle")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
def cli() -> None:
    """restyle - Incremental Sass/SCSS compilation.

    Compile changed stylesheets, and everything that imports a changed
    partial, in one step.

    **Getting Started:**

    - `restyle compile` - Compile every stylesheet in the project
    - `restyle compile sass/_colors.scss` - Recompile the owners of a partial
    - `restyle owners sass/_colors.scss` - List files importing a partial
    """
    pass


if __name__ == "__main__":
    cli()
