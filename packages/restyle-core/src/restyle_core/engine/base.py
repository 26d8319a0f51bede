"""Engine adapter interface.

Abstract base class for stylesheet engines, plus the outcome models
every engine returns. Engines report failures as a SyntaxFailure value
instead of raising, so callers dispatch on the outcome type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from restyle_core.config import EngineOptions


class CompileSuccess(BaseModel):
    """Rendered output of a successful compile.

    Attributes:
        css: Compiled stylesheet text (may be empty).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    css: str = Field(default="", description="Compiled output")


class DependenciesResolved(BaseModel):
    """Import closure of a stylesheet.

    Attributes:
        files: Every file the stylesheet imports, directly or transitively.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    files: frozenset[str] = Field(default_factory=frozenset, description="Imported files")


class SyntaxFailure(BaseModel):
    """Structured error reported by an engine.

    Attributes:
        message: Engine error text, without location.
        file: File the engine blamed; empty when not reported.
        line: Line number; None when not reported.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str = Field(..., description="Error message")
    file: str = Field(default="", description="File the error occurred in")
    line: int | None = Field(default=None, description="Line number")


CompileOutcome = CompileSuccess | SyntaxFailure
DependencyOutcome = DependenciesResolved | SyntaxFailure


class CompileEngine(ABC):
    """Base class for stylesheet engines.

    Subclasses turn one source file into compiled output and report the
    files it imports. resolve_dependencies must return the full transitive
    import closure, not only first-level imports.

    Example:
        >>> class MyEngine(CompileEngine):
        ...     def compile(self, path, options):
        ...         return CompileSuccess(css="")
        ...     def resolve_dependencies(self, path, options):
        ...         return DependenciesResolved()
    """

    @abstractmethod
    def compile(self, path: str, options: EngineOptions) -> CompileOutcome:
        """Compile a single source file.

        Args:
            path: Source file path.
            options: Engine options.

        Returns:
            CompileSuccess with the rendered output, or SyntaxFailure.
        """

    @abstractmethod
    def resolve_dependencies(self, path: str, options: EngineOptions) -> DependencyOutcome:
        """Report every file the source imports, transitively.

        Args:
            path: Source file path.
            options: Engine options.

        Returns:
            DependenciesResolved with the import closure, or SyntaxFailure.
        """
