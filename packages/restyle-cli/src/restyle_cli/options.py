"""Build CompileOptions for a CLI invocation.

Values come from restyle.yaml (explicit --config, or ./restyle.yaml when
present) and are then overridden by flags given on the command line.
Flags left at their defaults never override file values.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from click.core import ParameterSource
from pydantic import ValidationError as PydanticValidationError

from restyle_cli.errors import handle_configuration_error, handle_validation_error
from restyle_core import CONFIG_FILE_NAME, CompileOptions, ConfigurationError

if TYPE_CHECKING:
    import click


def commandline_overrides(ctx: click.Context, mapping: dict[str, str]) -> dict[str, Any]:
    """Collect option values the user actually passed.

    Args:
        ctx: Click context of the running command.
        mapping: CompileOptions field name -> click parameter name.

    Returns:
        Field values for every parameter set on the command line.
    """
    overrides: dict[str, Any] = {}
    for field, param in mapping.items():
        if ctx.get_parameter_source(param) == ParameterSource.COMMANDLINE:
            overrides[field] = ctx.params[param]
    return overrides


def load_compile_options(
    config_path: str | None,
    overrides: dict[str, Any] | None = None,
) -> CompileOptions:
    """Load CompileOptions for a command.

    Args:
        config_path: Explicit restyle.yaml path, or None to use
            ./restyle.yaml when it exists.
        overrides: Field values taken from command-line flags.

    Returns:
        Validated CompileOptions.

    Raises:
        CLIError: If the configuration cannot be loaded or validated.
    """
    path = Path(config_path) if config_path else Path(CONFIG_FILE_NAME)
    source = str(path)

    try:
        if config_path or path.exists():
            options = CompileOptions.from_yaml(path)
        else:
            options = CompileOptions()
            source = "command line options"
        return options.merged(**(overrides or {}))
    except ConfigurationError as e:
        handle_configuration_error(e)
    except PydanticValidationError as e:
        handle_validation_error(e, source)
