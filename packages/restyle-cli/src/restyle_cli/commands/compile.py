"""restyle compile command - Compile changed stylesheets."""

from __future__ import annotations

import click

from restyle_cli import output
from restyle_cli.errors import EXIT_USER_ERROR
from restyle_cli.options import commandline_overrides, load_compile_options

# CompileOptions field -> click parameter
_OVERRIDABLE = {
    "output_dir": "output_dir",
    "extension": "extension",
    "load_paths": "load_paths",
    "style": "style",
    "debug_info": "debug_info",
    "line_numbers": "line_numbers",
    "shallow": "shallow",
    "noop": "noop",
    "hide_success": "hide_success",
    "input_root": "input_root",
}


@click.command("compile")
@click.argument("paths", nargs=-1, type=click.Path())
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
    "-o",
    "--output",
    "output_dir",
    default="css",
    help="Output directory [default: css]",
)
@click.option("--extension", default=".css", help="Output file extension [default: .css]")
@click.option(
    "-I",
    "--load-path",
    "load_paths",
    multiple=True,
    help="Additional import search path (repeatable)",
)
@click.option(
    "--style",
    type=click.Choice(["nested", "expanded", "compact", "compressed"]),
    default="nested",
    help="Output style [default: nested]",
)
@click.option("--debug-info", is_flag=True, default=False, help="Emit debug information")
@click.option("--line-numbers", is_flag=True, default=False, help="Emit source line comments")
@click.option("--shallow", is_flag=True, default=False, help="Flatten the output tree")
@click.option("--noop", is_flag=True, default=False, help="Compile without writing output")
@click.option("--hide-success", is_flag=True, default=False, help="Only report failures")
@click.option(
    "--input-root",
    default=None,
    help="Source root stripped from mirrored output paths",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output")
@click.pass_context
def compile_cmd(
    ctx: click.Context,
    paths: tuple[str, ...],
    config_path: str | None,
    roots: tuple[str, ...],
    verbose: bool,
    **_: object,
) -> None:
    """Compile Sass/SCSS stylesheets to CSS.

    With PATHS, compiles those files; changed partials are not compiled
    themselves but every file importing them is. Without PATHS, compiles
    every non-partial stylesheet under the source roots.

    Examples:

        restyle compile

        restyle compile sass/site.scss sass/_colors.scss

        restyle compile --root sass --output public/css --style compressed
    """
    from restyle_core import Formatter, StylePlugin, configure_logging

    configure_logging(log_level="DEBUG" if verbose else "WARNING")

    options = load_compile_options(config_path, commandline_overrides(ctx, _OVERRIDABLE))
    formatter = Formatter(hide_success=options.hide_success, console=output.console)
    plugin = StylePlugin(options, roots=roots or None, formatter=formatter)

    if paths:
        result = plugin.run_on_changes(paths)
    else:
        result = plugin.run_all()

    if not result.all_succeeded:
        output.error("Compilation failed")
        raise SystemExit(EXIT_USER_ERROR)

    count = len(result.output_paths)
    verb = "Verified" if options.noop else "Compiled"
    output.success(f"{verb} {count} file{'s' if count != 1 else ''}")
