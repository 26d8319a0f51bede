"""restyle owners command - List files importing the given partials."""

from __future__ import annotations

import click

from restyle_cli import output
from restyle_cli.options import commandline_overrides, load_compile_options

_OVERRIDABLE = {
    "load_paths": "load_paths",
    "input_root": "input_root",
}


@click.command("owners")
@click.argument("partials", nargs=-1, required=True, type=click.Path())
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="Path to restyle.yaml [default: ./restyle.yaml if present]",
)
@click.option(
    "-r",
    "--root",
    "roots",
    multiple=True,
    type=click.Path(),
    help="Source directory searched for stylesheets (repeatable)",
)
@click.option(
    "-I",
    "--load-path",
    "load_paths",
    multiple=True,
    help="Additional import search path (repeatable)",
)
@click.option("--input-root", default=None, help="Default source root")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format [default: text]",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output")
@click.pass_context
def owners(
    ctx: click.Context,
    partials: tuple[str, ...],
    config_path: str | None,
    roots: tuple[str, ...],
    output_format: str,
    verbose: bool,
    **_: object,
) -> None:
    """List the stylesheets that import any of PARTIALS.

    Every stylesheet under the source roots is scanned; files whose
    imports cannot be resolved are reported and skipped.

    Examples:

        restyle owners sass/_colors.scss

        restyle owners --root sass --format json sass/_mixins.scss
    """
    from restyle_core import Formatter, StylePlugin, configure_logging

    configure_logging(log_level="DEBUG" if verbose else "WARNING")

    options = load_compile_options(config_path, commandline_overrides(ctx, _OVERRIDABLE))
    # stdout carries only the owner list or JSON document
    formatter = Formatter(hide_success=True, console=output.err_console)
    plugin = StylePlugin(options, roots=roots or None, formatter=formatter)

    found = plugin.runner.owners(plugin.all_files(), partials)

    if output_format == "json":
        output.print_json({"partials": list(partials), "owners": found})
        return

    for path in found:
        output.info(path, markup=False, highlight=False)
