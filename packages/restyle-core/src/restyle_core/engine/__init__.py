"""Engine adapters for restyle.

- CompileEngine: Base class every engine implements
- LibsassEngine: Engine backed by the libsass bindings
- CompileSuccess / DependenciesResolved / SyntaxFailure: Engine outcomes
- ImportResolver: Import directive scanner used for dependency resolution
"""

from __future__ import annotations

from restyle_core.engine.base import (
    CompileEngine,
    CompileOutcome,
    CompileSuccess,
    DependenciesResolved,
    DependencyOutcome,
    SyntaxFailure,
)
from restyle_core.engine.imports import ImportResolver, iter_import_targets
from restyle_core.engine.libsass import LibsassEngine, parse_libsass_error

__all__ = [
    "CompileEngine",
    "CompileOutcome",
    "CompileSuccess",
    "DependenciesResolved",
    "DependencyOutcome",
    "ImportResolver",
    "LibsassEngine",
    "SyntaxFailure",
    "iter_import_targets",
    "parse_libsass_error",
]
