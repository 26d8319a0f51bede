"""restyle-core: Incremental Sass compilation.

This package provides:
- CompileOptions: Immutable compile configuration (restyle.yaml)
- Runner: Compile changed files and resolve partial owners
- StylePlugin: Incremental compile session over a source tree
- Formatter: Success/error reporting with notifications
- LibsassEngine: Engine adapter backed by libsass
"""

from __future__ import annotations

__version__ = "0.1.0"

from restyle_core.config import (
    CONFIG_FILE_NAME,
    CompileOptions,
    EngineOptions,
    engine_options,
)
from restyle_core.engine import (
    CompileEngine,
    CompileSuccess,
    DependenciesResolved,
    LibsassEngine,
    SyntaxFailure,
)
from restyle_core.errors import (
    CompileSyntaxError,
    ConfigurationError,
    ConfigurationNotFoundError,
    RestyleError,
)
from restyle_core.formatter import Formatter, LogNotifier, Notifier
from restyle_core.observability import configure_logging
from restyle_core.paths import discover_sources, is_partial, map_output_path
from restyle_core.plugin import StylePlugin
from restyle_core.runner import Runner, RunResult, format_syntax_error
from restyle_core.writer import FilesystemWriter, OutputWriter

__all__ = [
    "__version__",
    # Configuration
    "CONFIG_FILE_NAME",
    "CompileOptions",
    "EngineOptions",
    "engine_options",
    # Engines
    "CompileEngine",
    "CompileSuccess",
    "DependenciesResolved",
    "LibsassEngine",
    "SyntaxFailure",
    # Errors
    "RestyleError",
    "ConfigurationError",
    "ConfigurationNotFoundError",
    "CompileSyntaxError",
    # Reporting
    "Formatter",
    "Notifier",
    "LogNotifier",
    "configure_logging",
    # Paths
    "map_output_path",
    "is_partial",
    "discover_sources",
    # Running
    "Runner",
    "RunResult",
    "format_syntax_error",
    "StylePlugin",
    "FilesystemWriter",
    "OutputWriter",
]
