"""libsass-backed engine adapter.

Compiles with the libsass bindings and resolves dependencies with the
import scanner. libsass errors arrive as text of the form:

    Error: Invalid CSS after "a": expected "{", was ";"
            on line 3:2 of sass/site.scss

which is split back into message, line and file.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import sass
import structlog

from restyle_core.engine.base import (
    CompileEngine,
    CompileOutcome,
    CompileSuccess,
    DependenciesResolved,
    DependencyOutcome,
    SyntaxFailure,
)
from restyle_core.engine.imports import ImportResolver
from restyle_core.errors import CompileSyntaxError

if TYPE_CHECKING:
    from restyle_core.config import EngineOptions

logger = structlog.get_logger(__name__)

_ERROR_LOCATION = re.compile(r"^\s*on line (\d+)(?::\d+)? of (.+?)\s*$", re.MULTILINE)


def parse_libsass_error(text: str, default_file: str) -> SyntaxFailure:
    """Split a libsass error message into a SyntaxFailure.

    Args:
        text: Raw libsass error text.
        default_file: File to blame when the text carries no location.

    Returns:
        SyntaxFailure with message, file and line filled in where known.
    """
    lines = [line for line in text.strip().splitlines() if line.strip()]
    message = lines[0].strip() if lines else text.strip()
    if message.startswith("Error: "):
        message = message[len("Error: ") :]

    location = _ERROR_LOCATION.search(text)
    if location is None:
        return SyntaxFailure(message=message, file=default_file)

    file = location.group(2)
    if file == "stdin":
        file = default_file
    return SyntaxFailure(message=message, file=file, line=int(location.group(1)))


class LibsassEngine(CompileEngine):
    """Engine adapter over the libsass bindings.

    Example:
        >>> engine = LibsassEngine()
        >>> outcome = engine.compile("sass/site.scss", EngineOptions())
        >>> isinstance(outcome, CompileSuccess)
        True
    """

    def __init__(self) -> None:
        self._log = logger.bind(component="libsass_engine")

    def compile(self, path: str, options: EngineOptions) -> CompileOutcome:
        """Compile a file with libsass."""
        try:
            css = sass.compile(
                filename=path,
                output_style=options.style,
                include_paths=list(options.load_paths),
                source_comments=options.line_numbers or options.debug_info,
            )
        except sass.CompileError as e:
            self._log.debug("libsass_compile_error", file=path, error=str(e))
            return parse_libsass_error(str(e), default_file=path)
        except OSError as e:
            return SyntaxFailure(message=f"Unable to read file: {e}", file=path)

        return CompileSuccess(css=css)

    def resolve_dependencies(self, path: str, options: EngineOptions) -> DependencyOutcome:
        """Resolve the import closure of a file."""
        resolver = ImportResolver(load_paths=options.load_paths)
        try:
            files = resolver.closure(path)
        except CompileSyntaxError as e:
            return e.to_failure()

        return DependenciesResolved(files=frozenset(files))
