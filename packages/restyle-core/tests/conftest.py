"""Shared pytest fixtures for restyle-core tests.

Provides deterministic stand-ins for the engine, output writer and
formatter so Runner behaviour can be tested without libsass or disk I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog

from restyle_core.config import EngineOptions
from restyle_core.engine import (
    CompileEngine,
    CompileOutcome,
    CompileSuccess,
    DependenciesResolved,
    DependencyOutcome,
    SyntaxFailure,
)
from restyle_core.formatter import Formatter
from restyle_core.writer import OutputWriter


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


class FakeEngine(CompileEngine):
    """Engine returning canned outcomes and recording every call.

    Files without a canned compile outcome compile to a comment naming
    the file. Files without canned dependencies import nothing.
    """

    def __init__(self) -> None:
        self.compile_outcomes: dict[str, CompileOutcome] = {}
        self.dependencies: dict[str, Iterable[str] | SyntaxFailure] = {}
        self.compile_calls: list[tuple[str, EngineOptions]] = []
        self.resolve_calls: list[str] = []

    def compile(self, path: str, options: EngineOptions) -> CompileOutcome:
        self.compile_calls.append((path, options))
        return self.compile_outcomes.get(path, CompileSuccess(css=f"/* {path} */"))

    def resolve_dependencies(self, path: str, options: EngineOptions) -> DependencyOutcome:
        self.resolve_calls.append(path)
        outcome = self.dependencies.get(path, ())
        if isinstance(outcome, SyntaxFailure):
            return outcome
        return DependenciesResolved(files=frozenset(outcome))


class MemoryWriter(OutputWriter):
    """Writer that keeps artifacts in memory."""

    def __init__(self) -> None:
        self.dirs: list[str] = []
        self.files: dict[str, str] = {}

    def ensure_dir(self, path: str) -> None:
        self.dirs.append(path)

    def write(self, path: str, content: str) -> None:
        self.files[path] = content


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Return an engine with no canned outcomes."""
    return FakeEngine()


@pytest.fixture
def memory_writer() -> MemoryWriter:
    """Return an empty in-memory writer."""
    return MemoryWriter()


@pytest.fixture
def formatter() -> MagicMock:
    """Return a Formatter mock recording success/error calls."""
    return MagicMock(spec=Formatter)


@pytest.fixture
def sass_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a small stylesheet project and chdir into it.

    Layout:
        sass/site.scss          imports colors, layout
        sass/_colors.scss
        sass/_layout.scss       imports colors
        sass/admin/panel.scss   imports ../colors
        sass/print.sass         imports nothing

    Returns:
        Project directory (also the current working directory).
    """
    sass_dir = tmp_path / "sass"
    (sass_dir / "admin").mkdir(parents=True)
    (sass_dir / "site.scss").write_text(
        '@import "colors";\n@import "layout";\n\nbody { color: $text; }\n'
    )
    (sass_dir / "_colors.scss").write_text("$text: #333;\n")
    (sass_dir / "_layout.scss").write_text('@import "colors";\n.main { border-color: $text; }\n')
    (sass_dir / "admin" / "panel.scss").write_text(
        '@import "../colors";\n.panel { color: $text; }\n'
    )
    (sass_dir / "print.sass").write_text("body\n  color: black\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path
