"""Compile runner.

Compiles batches of changed stylesheets and finds the files that must be
recompiled when partials change.

Failures are isolated per file: an engine SyntaxFailure becomes exactly
one Formatter error event and processing continues with the next file.
Nothing is retried and no failure aborts a batch.
"""

from __future__ import annotations

import os
import time
from collections.abc import Iterable, Sequence
from typing import NamedTuple

import structlog

from restyle_core.config import CompileOptions, EngineOptions, engine_options
from restyle_core.engine import CompileEngine, LibsassEngine, SyntaxFailure
from restyle_core.formatter import Formatter
from restyle_core.paths import map_output_path, normalize_path
from restyle_core.writer import FilesystemWriter, OutputWriter

logger = structlog.get_logger(__name__)


class RunResult(NamedTuple):
    """Outcome of a compile batch.

    Attributes:
        output_paths: Artifacts produced, in input order.
        all_succeeded: True only if every file compiled.
    """

    output_paths: list[str]
    all_succeeded: bool


def format_syntax_error(failure: SyntaxFailure, default_file: str) -> str:
    """Render a SyntaxFailure for display.

    An unknown line is rendered as an empty field, not omitted.

    Args:
        failure: Engine failure.
        default_file: File to name when the engine did not report one.

    Returns:
        Two-line error message.

    Example:
        >>> format_syntax_error(SyntaxFailure(message="Err"), "a.sass")
        'Sass > Error: Err\\n        on line  of a.sass'
    """
    line = "" if failure.line is None else str(failure.line)
    file = failure.file or default_file
    return f"Sass > Error: {failure.message}\n        on line {line} of {file}"


class Runner:
    """Compile stylesheets and resolve partial owners.

    Attributes:
        options: Compile options shared by every operation.
        formatter: Destination for success/error events.
        engine: Engine adapter used for compilation and dependency lookup.
        writer: Destination for directories and artifacts.

    Example:
        >>> runner = Runner(CompileOptions(output_dir="css"), Formatter())
        >>> output_paths, all_succeeded = runner.run(["sass/site.scss"])
    """

    def __init__(
        self,
        options: CompileOptions,
        formatter: Formatter,
        engine: CompileEngine | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            options: Compile options.
            formatter: Reporter for per-file events.
            engine: Engine adapter (libsass if not provided).
            writer: Output writer (local filesystem if not provided).
        """
        self.options = options
        self.formatter = formatter
        self.engine = engine or LibsassEngine()
        self.writer = writer or FilesystemWriter()
        self._engine_options: EngineOptions = engine_options(options)
        self._log = logger.bind(component="runner")

    def run(self, changed_paths: Sequence[str]) -> RunResult:
        """Compile each changed file in order.

        Args:
            changed_paths: Source files to compile.

        Returns:
            RunResult with the produced output paths and overall success.
        """
        start_time = time.monotonic()
        output_paths: list[str] = []
        failed = 0

        self._log.info("run_started", files=len(changed_paths), noop=self.options.noop)

        for path in changed_paths:
            output_path = self._compile_file(str(path))
            if output_path is None:
                failed += 1
            else:
                output_paths.append(output_path)

        self._log.info(
            "run_completed",
            compiled=len(output_paths),
            failed=failed,
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )

        return RunResult(output_paths=output_paths, all_succeeded=failed == 0)

    def owners(self, all_files: Iterable[str], changed_partials: Iterable[str]) -> list[str]:
        """Find the files that import any of the changed partials.

        Every file in all_files is resolved through the engine, which
        reports its full import closure. Files whose dependencies cannot
        be resolved are reported and skipped.

        Args:
            all_files: Corpus to search, in the order results are wanted.
            changed_partials: Files whose importers should be found.

        Returns:
            Files from all_files depending on at least one changed partial,
            in corpus order, each at most once.
        """
        targets = {normalize_path(p) for p in changed_partials}
        if not targets:
            self._log.debug("owners_skipped", reason="no changed partials")
            return []

        start_time = time.monotonic()
        result: list[str] = []
        seen: set[str] = set()
        scanned = 0

        for entry in all_files:
            file = str(entry)
            key = normalize_path(file)
            if key in seen:
                continue
            seen.add(key)
            scanned += 1

            outcome = self.engine.resolve_dependencies(file, self._engine_options)
            if isinstance(outcome, SyntaxFailure):
                self.formatter.error(
                    format_syntax_error(outcome, file),
                    notification=f"Resolving partial owners of {file} failed",
                )
                self._log.warning("owners_resolution_failed", file=file, error=outcome.message)
                continue

            dependencies = {normalize_path(d) for d in outcome.files}
            if dependencies & targets:
                result.append(file)

        self._log.info(
            "owners_resolved",
            scanned=scanned,
            owners=len(result),
            duration_ms=int((time.monotonic() - start_time) * 1000),
        )
        return result

    def _compile_file(self, path: str) -> str | None:
        """Compile, write and report one file.

        Returns:
            Output path on success, None on failure.
        """
        noop = self.options.noop
        output_path = map_output_path(path, self.options)

        if not noop:
            self.writer.ensure_dir(_parent_dir(output_path))

        outcome = self.engine.compile(path, self._engine_options)

        if isinstance(outcome, SyntaxFailure):
            self.formatter.error(
                format_syntax_error(outcome, path),
                notification=f"rebuild of {path} failed",
            )
            self._log.warning("file_failed", file=path, line=outcome.line, error=outcome.message)
            return None

        if not noop:
            self.writer.write(output_path, outcome.css)

        self.formatter.success(
            f"{path} -> {output_path}",
            notification=f"verified {path}" if noop else f"rebuilt {path}",
        )
        self._log.debug("file_compiled", file=path, output=output_path)
        return output_path


def _parent_dir(path: str) -> str:
    return os.path.dirname(path) or "."
