"""Shared test fixtures for restyle-cli tests.

Provides CliRunner fixtures and a small stylesheet project for testing
CLI commands.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
import structlog
from click.testing import CliRunner

if TYPE_CHECKING:
    from collections.abc import Callable

CONFIG_FILENAME = "restyle.yaml"


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep structured logs out of command output.

    Commands call configure_logging on every invocation; it is replaced
    so the process-wide logging setup stays untouched between tests.
    """
    monkeypatch.setattr("restyle_core.configure_logging", lambda **_: None)
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def sass_project(isolated_runner: CliRunner) -> Path:
    """Create a stylesheet project in the isolated filesystem.

    Layout:
        sass/site.scss          imports colors, layout
        sass/_colors.scss
        sass/_layout.scss       imports colors
        sass/admin/panel.scss   imports ../colors
        sass/print.sass

    Returns:
        Project directory (the current working directory).
    """
    sass_dir = Path("sass")
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
    return Path.cwd()


@pytest.fixture
def create_config(isolated_runner: CliRunner) -> Callable[..., Path]:
    """Factory fixture to create restyle.yaml files with custom content.

    Returns:
        Function that creates restyle.yaml with given content.
    """

    def _create(content: str, filename: str = CONFIG_FILENAME) -> Path:
        path = Path(filename)
        path.write_text(content)
        return path

    return _create
