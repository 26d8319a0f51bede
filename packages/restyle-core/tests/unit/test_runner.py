"""Unit tests for the compile runner.

Run with:
    pytest packages/restyle-core/tests/unit/test_runner.py -v
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, call

import pytest

from restyle_core.config import CompileOptions, EngineOptions
from restyle_core.engine import CompileSuccess, SyntaxFailure
from restyle_core.runner import Runner, RunResult, format_syntax_error


@pytest.fixture
def make_runner(
    formatter: MagicMock,
    fake_engine: Any,
    memory_writer: Any,
) -> Any:
    """Return a factory building a Runner over the fake collaborators."""

    def _make(**option_overrides: Any) -> Runner:
        return Runner(
            CompileOptions(**option_overrides),
            formatter,
            engine=fake_engine,
            writer=memory_writer,
        )

    return _make


class TestFormatSyntaxError:
    """Tests for format_syntax_error."""

    def test_unknown_line_is_blank(self) -> None:
        """Unknown line renders as an empty field."""
        message = format_syntax_error(SyntaxFailure(message="Err"), "a.sass")
        assert message == "Sass > Error: Err\n        on line  of a.sass"

    def test_engine_location_wins(self) -> None:
        """File and line reported by the engine are used."""
        failure = SyntaxFailure(message="Undefined variable", file="sass/_x.scss", line=3)
        message = format_syntax_error(failure, "sass/site.scss")
        assert message == "Sass > Error: Undefined variable\n        on line 3 of sass/_x.scss"


class TestRun:
    """Tests for Runner.run."""

    def test_empty_batch(self, make_runner: Any, formatter: MagicMock) -> None:
        """Empty input returns no outputs and success."""
        result = make_runner().run([])

        assert result == RunResult(output_paths=[], all_succeeded=True)
        formatter.success.assert_not_called()
        formatter.error.assert_not_called()

    def test_returns_output_paths(self, make_runner: Any) -> None:
        """Successful compile returns the mapped output path."""
        output_paths, all_succeeded = make_runner(output_dir="css", extension=".css").run(
            ["a.sass"]
        )

        assert output_paths == ["css/a.css"]
        assert all_succeeded is True

    def test_writes_artifact(self, make_runner: Any, memory_writer: Any) -> None:
        """Compiled output is written after creating the directory."""
        make_runner().run(["sass/site.scss"])

        assert memory_writer.dirs == ["css/sass"]
        assert memory_writer.files == {"css/sass/site.css": "/* sass/site.scss */"}

    def test_success_event(self, make_runner: Any, formatter: MagicMock) -> None:
        """One success event per compiled file."""
        make_runner().run(["a.sass"])

        formatter.success.assert_called_once_with(
            "a.sass -> css/a.css", notification="rebuilt a.sass"
        )
        formatter.error.assert_not_called()

    def test_engine_receives_engine_options(self, make_runner: Any, fake_engine: Any) -> None:
        """Engine is called with the engine subset of the options."""
        make_runner(load_paths=["sass"], style="compressed", shallow=True).run(["a.sass"])

        assert fake_engine.compile_calls == [
            ("a.sass", EngineOptions(load_paths=("sass",), style="compressed")),
        ]

    def test_failure_reports_error(
        self, make_runner: Any, fake_engine: Any, formatter: MagicMock
    ) -> None:
        """A syntax failure produces one error event and no output."""
        fake_engine.compile_outcomes["a.sass"] = SyntaxFailure(message="Err")

        output_paths, all_succeeded = make_runner().run(["a.sass"])

        assert output_paths == []
        assert all_succeeded is False
        formatter.error.assert_called_once_with(
            "Sass > Error: Err\n        on line  of a.sass",
            notification="rebuild of a.sass failed",
        )
        formatter.success.assert_not_called()

    def test_failure_writes_nothing(
        self, make_runner: Any, fake_engine: Any, memory_writer: Any
    ) -> None:
        """A failing file writes no artifact."""
        fake_engine.compile_outcomes["a.sass"] = SyntaxFailure(message="Err")

        make_runner().run(["a.sass"])

        assert memory_writer.files == {}

    def test_failure_does_not_abort_batch(
        self, make_runner: Any, fake_engine: Any, formatter: MagicMock
    ) -> None:
        """Files after a failure are still compiled, in order."""
        fake_engine.compile_outcomes["b.sass"] = SyntaxFailure(message="bad", line=2)

        output_paths, all_succeeded = make_runner().run(["a.sass", "b.sass", "c.sass"])

        assert output_paths == ["css/a.css", "css/c.css"]
        assert all_succeeded is False
        assert [path for path, _ in fake_engine.compile_calls] == ["a.sass", "b.sass", "c.sass"]
        assert formatter.success.call_count == 2
        assert formatter.error.call_count == 1

    def test_output_count_matches_successes(self, make_runner: Any, fake_engine: Any) -> None:
        """Output list length equals the number of successful compiles."""
        files = [f"f{i}.scss" for i in range(6)]
        for failing in ("f1.scss", "f4.scss"):
            fake_engine.compile_outcomes[failing] = SyntaxFailure(message="x")

        output_paths, all_succeeded = make_runner().run(files)

        assert output_paths == ["css/f0.css", "css/f2.css", "css/f3.css", "css/f5.css"]
        assert all_succeeded is False

    def test_empty_output_is_success(
        self, make_runner: Any, fake_engine: Any, memory_writer: Any
    ) -> None:
        """Empty compiled output still counts as success."""
        fake_engine.compile_outcomes["empty.scss"] = CompileSuccess(css="")

        output_paths, all_succeeded = make_runner().run(["empty.scss"])

        assert output_paths == ["css/empty.css"]
        assert all_succeeded is True
        assert memory_writer.files == {"css/empty.css": ""}

    def test_noop_skips_filesystem(
        self, make_runner: Any, memory_writer: Any, formatter: MagicMock
    ) -> None:
        """noop compiles and reports but never touches the filesystem."""
        output_paths, all_succeeded = make_runner(noop=True).run(["a.sass"])

        assert output_paths == ["css/a.css"]
        assert all_succeeded is True
        assert memory_writer.dirs == []
        assert memory_writer.files == {}
        formatter.success.assert_called_once_with(
            "a.sass -> css/a.css", notification="verified a.sass"
        )

    def test_noop_failure_notification(
        self, make_runner: Any, fake_engine: Any, formatter: MagicMock
    ) -> None:
        """noop failures use the same notification as a normal rebuild."""
        fake_engine.compile_outcomes["a.sass"] = SyntaxFailure(message="Err")

        make_runner(noop=True).run(["a.sass"])

        assert formatter.error.call_args == call(
            "Sass > Error: Err\n        on line  of a.sass",
            notification="rebuild of a.sass failed",
        )

    def test_shallow_output(self, make_runner: Any) -> None:
        """Shallow mode flattens output paths."""
        output_paths, _ = make_runner(shallow=True).run(["sass/admin/panel.scss"])

        assert output_paths == ["css/panel.css"]


class TestOwners:
    """Tests for Runner.owners."""

    DEPS: dict[str, list[str]] = {
        "a.sass": [],
        "b.scss": ["a.sass"],
        "c.sass": ["a.sass"],
        "_p.sass": [],
        "_q.scss": ["_p.sass"],
    }

    @pytest.fixture(autouse=True)
    def _corpus(self, fake_engine: Any) -> None:
        fake_engine.dependencies.update(self.DEPS)

    def test_returns_importing_files(self, make_runner: Any) -> None:
        """Files importing a changed partial are returned in corpus order."""
        result = make_runner().owners(list(self.DEPS), ["a.sass", "_p.sass"])

        assert result == ["b.scss", "c.sass", "_q.scss"]

    def test_resolves_every_file(self, make_runner: Any, fake_engine: Any) -> None:
        """Every corpus file is resolved once."""
        make_runner().owners(list(self.DEPS), ["a.sass"])

        assert fake_engine.resolve_calls == list(self.DEPS)

    def test_error_is_reported_and_skipped(
        self, make_runner: Any, fake_engine: Any, formatter: MagicMock
    ) -> None:
        """A file failing resolution is excluded and reported once."""
        fake_engine.dependencies["_q.scss"] = SyntaxFailure(message="bad")

        result = make_runner().owners(list(self.DEPS), ["a.sass", "_p.sass"])

        assert result == ["b.scss", "c.sass"]
        formatter.error.assert_called_once_with(
            "Sass > Error: bad\n        on line  of _q.scss",
            notification="Resolving partial owners of _q.scss failed",
        )

    def test_error_does_not_stop_scan(self, make_runner: Any, fake_engine: Any) -> None:
        """Files after a failing one are still resolved."""
        fake_engine.dependencies["b.scss"] = SyntaxFailure(message="bad", line=1)

        result = make_runner().owners(list(self.DEPS), ["a.sass"])

        assert result == ["c.sass"]
        assert fake_engine.resolve_calls == list(self.DEPS)

    def test_no_changed_partials(
        self, make_runner: Any, fake_engine: Any, formatter: MagicMock
    ) -> None:
        """No changed partials means no owners and no engine calls."""
        assert make_runner().owners(list(self.DEPS), []) == []
        assert fake_engine.resolve_calls == []
        formatter.error.assert_not_called()

    def test_partial_itself_not_included(self, make_runner: Any) -> None:
        """A changed partial is not its own owner."""
        assert make_runner().owners(list(self.DEPS), ["_p.sass"]) == ["_q.scss"]

    def test_result_is_subsequence(self, make_runner: Any) -> None:
        """Result preserves the corpus order whatever the partial order."""
        corpus = ["c.sass", "_q.scss", "b.scss", "a.sass", "_p.sass"]

        result = make_runner().owners(corpus, ["_p.sass", "a.sass"])

        assert result == ["c.sass", "_q.scss", "b.scss"]

    def test_duplicates_appear_once(self, make_runner: Any, fake_engine: Any) -> None:
        """Repeated corpus entries are resolved and returned once."""
        result = make_runner().owners(["b.scss", "b.scss", "./b.scss"], ["a.sass"])

        assert result == ["b.scss"]
        assert fake_engine.resolve_calls == ["b.scss"]

    def test_paths_are_normalized(self, make_runner: Any, fake_engine: Any) -> None:
        """Equivalent spellings of a partial path match."""
        fake_engine.dependencies["sass/site.scss"] = ["sass/_colors.scss"]

        result = make_runner().owners(["sass/site.scss"], ["./sass/admin/../_colors.scss"])

        assert result == ["sass/site.scss"]

    def test_transitive_closure_from_engine(self, make_runner: Any, fake_engine: Any) -> None:
        """Indirect importers are found through the engine's closure."""
        fake_engine.dependencies["site.scss"] = ["_layout.scss", "_colors.scss"]
        fake_engine.dependencies["_layout.scss"] = ["_colors.scss"]

        result = make_runner().owners(["site.scss", "_layout.scss"], ["_colors.scss"])

        assert result == ["site.scss", "_layout.scss"]
