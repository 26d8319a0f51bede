"""Compile session for a stylesheet project.

StylePlugin ties a Runner to a set of source roots and implements the
caller side of incremental compilation: compile everything, or compile
a set of changed files plus every file that imports a changed partial.
Partials are never compiled on their own.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from restyle_core.config import CompileOptions
from restyle_core.engine import CompileEngine
from restyle_core.formatter import Formatter
from restyle_core.paths import discover_sources, is_partial, normalize_path
from restyle_core.runner import Runner, RunResult
from restyle_core.writer import OutputWriter

logger = structlog.get_logger(__name__)


class StylePlugin:
    """Incremental compile session.

    Attributes:
        options: Compile options for the session.
        roots: Directories searched for source files.
        formatter: Reporter shared with the runner.
        runner: Runner performing compiles and owner lookups.

    Example:
        >>> plugin = StylePlugin(CompileOptions(input_root="sass"))
        >>> plugin.run_on_changes(["sass/_colors.scss"])
    """

    def __init__(
        self,
        options: CompileOptions,
        *,
        roots: Sequence[str] | None = None,
        formatter: Formatter | None = None,
        engine: CompileEngine | None = None,
        writer: OutputWriter | None = None,
        runner: Runner | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            options: Compile options.
            roots: Source directories (defaults to input_root, else ".").
            formatter: Reporter (built from options.hide_success if not provided).
            engine: Engine adapter passed to a new Runner.
            writer: Output writer passed to a new Runner.
            runner: Pre-built Runner; engine and writer are ignored when given.
        """
        self.options = options
        if roots is None:
            roots = (options.input_root,) if options.input_root else (".",)
        self.roots = tuple(roots)
        self.formatter = formatter or Formatter(hide_success=options.hide_success)
        self.runner = runner or Runner(options, self.formatter, engine=engine, writer=writer)
        self._log = logger.bind(component="style_plugin")

    def all_files(self) -> list[str]:
        """Return every source file under the session roots, partials included."""
        return discover_sources(self.roots)

    def start(self) -> RunResult | None:
        """Compile everything if all_on_start is set."""
        if not self.options.all_on_start:
            return None
        return self.run_all()

    def run_all(self) -> RunResult:
        """Compile every non-partial source file."""
        files = [f for f in self.all_files() if not is_partial(f)]
        self._log.info("run_all", files=len(files))
        return self.runner.run(files)

    def run_on_changes(self, paths: Iterable[str]) -> RunResult:
        """Compile changed files and the owners of changed partials.

        Args:
            paths: Changed source files.

        Returns:
            RunResult of the combined compile.
        """
        changed = [str(p) for p in paths]
        partials = [p for p in changed if is_partial(p)]
        files = [p for p in changed if not is_partial(p)]

        if partials:
            owners = self.runner.owners(self.all_files(), partials)
            self._log.info("partials_changed", partials=len(partials), owners=len(owners))
            files.extend(o for o in owners if not is_partial(o))

        return self.runner.run(_unique(files))


def _unique(paths: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for path in paths:
        key = normalize_path(path)
        if key not in seen:
            seen.add(key)
            result.append(path)
    return result
