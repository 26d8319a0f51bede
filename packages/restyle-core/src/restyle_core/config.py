"""Compile options for restyle.

CompileOptions is the immutable configuration value passed to every
Runner operation. It is built once per session (from restyle.yaml,
CLI flags, or both) and never mutated.

Engines do not see CompileOptions directly. engine_options() derives the
narrow EngineOptions subset they need, so output-related settings
(output_dir, extension, shallow, noop, ...) stay out of engine calls.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from restyle_core.errors import ConfigurationError, ConfigurationNotFoundError

# Standard configuration file name
CONFIG_FILE_NAME = "restyle.yaml"

OutputStyle = Literal["nested", "expanded", "compact", "compressed"]


class CompileOptions(BaseModel):
    """Configuration for compiling a batch of stylesheets.

    Attributes:
        output_dir: Base output directory for compiled artifacts.
        extension: Suffix for compiled artifacts, including the dot.
        load_paths: Extra directories searched for imports.
        style: Output style passed to the engine.
        debug_info: Emit debug information in the output.
        line_numbers: Emit source line comments in the output.
        shallow: Flatten the output tree into output_dir.
        noop: Compile for validation only; never touch the filesystem.
        all_on_start: Compile everything when a session starts.
        hide_success: Suppress success reporting.
        input_root: Source root stripped before mirroring directories.

    Example:
        >>> options = CompileOptions(output_dir="public/css", style="compressed")
        >>> options.extension
        '.css'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    output_dir: str = Field(default="css", min_length=1, description="Output directory")
    extension: str = Field(default=".css", description="Output file extension")
    load_paths: tuple[str, ...] = Field(default=(), description="Import search paths")
    style: OutputStyle = Field(default="nested", description="Output style")
    debug_info: bool = Field(default=False, description="Emit debug info")
    line_numbers: bool = Field(default=False, description="Emit line number comments")
    shallow: bool = Field(default=False, description="Flatten output tree")
    noop: bool = Field(default=False, description="Compile without writing output")
    all_on_start: bool = Field(default=False, description="Compile all files on start")
    hide_success: bool = Field(default=False, description="Suppress success reporting")
    input_root: str | None = Field(default=None, description="Source root for mirroring")

    @classmethod
    def from_yaml(cls, path: str | Path) -> CompileOptions:
        """Load and validate CompileOptions from a YAML file.

        An empty file yields the defaults.

        Args:
            path: Path to restyle.yaml.

        Returns:
            Validated CompileOptions instance.

        Raises:
            ConfigurationNotFoundError: If the file does not exist.
            ConfigurationError: If the file is not valid YAML or does not
                contain a mapping.
            pydantic.ValidationError: If schema validation fails.

        Example:
            >>> options = CompileOptions.from_yaml("restyle.yaml")
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationNotFoundError("Configuration file not found", file_path=str(path))

        try:
            with path.open("r") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            line_number = None
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                line_number = mark.line + 1
            raise ConfigurationError(
                "Invalid YAML",
                file_path=str(path),
                line_number=line_number,
                internal_details=str(e),
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration must be a mapping",
                file_path=str(path),
                internal_details=f"got {type(data).__name__}",
            )

        return cls.model_validate(data)

    def merged(self, **overrides: Any) -> CompileOptions:
        """Return a copy with every non-None override applied.

        Args:
            **overrides: Field values to replace. None means "keep".

        Returns:
            New validated CompileOptions.
        """
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return CompileOptions.model_validate(data)


class EngineOptions(BaseModel):
    """Subset of CompileOptions an engine adapter needs.

    Attributes:
        load_paths: Extra directories searched for imports.
        style: Output style.
        debug_info: Emit debug information.
        line_numbers: Emit source line comments.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    load_paths: tuple[str, ...] = Field(default=(), description="Import search paths")
    style: OutputStyle = Field(default="nested", description="Output style")
    debug_info: bool = Field(default=False, description="Emit debug info")
    line_numbers: bool = Field(default=False, description="Emit line number comments")


def engine_options(options: CompileOptions) -> EngineOptions:
    """Derive the engine-facing options from CompileOptions.

    Args:
        options: Full compile options.

    Returns:
        EngineOptions carrying only engine settings.
    """
    return EngineOptions(
        load_paths=options.load_paths,
        style=options.style,
        debug_info=options.debug_info,
        line_numbers=options.line_numbers,
    )
