"""Rich console output for restyle-cli.

Command results (summaries, owner lists, JSON documents) go to stdout
through `console`. Per-file compile reports that must not mix with a
machine-readable result go to stderr through `err_console`. Both respect
the NO_COLOR environment variable and the --no-color flag.
"""

from __future__ import annotations

import json
import os
from typing import Any

from rich.console import Console

# Rich respects NO_COLOR itself; --no-color is applied via set_no_color()
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False, *, stderr: bool = False) -> Console:
    """Create a Rich Console with restyle's color settings.

    Args:
        no_color: Disable colored output. NO_COLOR in the environment
            has the same effect.
        stderr: Write to stderr instead of stdout.

    Returns:
        Configured Console instance.
    """
    plain = no_color or _force_no_color
    return Console(
        stderr=stderr,
        force_terminal=False if plain else None,
        no_color=plain,
    )


console = create_console()
err_console = create_console(stderr=True)


def success(message: str, **kwargs: Any) -> None:
    """Print a run summary with a green checkmark.

    Example:
        >>> success("Compiled 3 files")
        ✓ Compiled 3 files
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error summary with a red cross."""
    console.print(f"[red]✗[/red] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print a plain result line."""
    console.print(message, **kwargs)


def print_json(data: dict[str, Any], **kwargs: Any) -> None:
    """Print a JSON document to stdout.

    Args:
        data: Dictionary to serialize.
        **kwargs: Additional arguments passed to console.print_json().
    """
    console.print_json(json.dumps(data), **kwargs)


def set_no_color(no_color: bool) -> None:
    """Rebuild both module consoles with or without colors."""
    global console, err_console
    console = create_console(no_color=no_color)
    err_console = create_console(no_color=no_color, stderr=True)
