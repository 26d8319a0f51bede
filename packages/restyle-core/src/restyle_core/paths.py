"""Path helpers for restyle.

- map_output_path: Map a source file to its compiled artifact path
- is_partial: Detect Sass partials (files only meant to be imported)
- discover_sources: Find every stylesheet under a set of directories
- normalize_path: Canonical string form used to compare file references
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path, PurePath, PurePosixPath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from restyle_core.config import CompileOptions

SOURCE_EXTENSIONS = frozenset({".sass", ".scss"})

PARTIAL_PREFIX = "_"


def map_output_path(input_path: str | PurePath, options: CompileOptions) -> str:
    """Map an input file to its output artifact path.

    The input's extension is replaced by options.extension. With
    options.shallow the file lands directly in options.output_dir;
    otherwise its directory is mirrored below options.output_dir,
    relative to options.input_root when the input lies under it.
    Absolute directories outside input_root are mirrored without their
    anchor so output never escapes output_dir.

    Args:
        input_path: Source file path.
        options: Compile options.

    Returns:
        Output path as a POSIX-style string.

    Example:
        >>> map_output_path("sass/admin/site.scss", CompileOptions(output_dir="css"))
        'css/sass/admin/site.css'
    """
    source = PurePath(input_path)
    name = f"{source.stem}{options.extension}"
    output_dir = PurePosixPath(options.output_dir)

    if options.shallow:
        return (output_dir / name).as_posix()

    parent = source.parent
    if options.input_root is not None:
        root = PurePath(options.input_root)
        if parent == root or root in parent.parents:
            parent = parent.relative_to(root)

    parts = parent.parts
    if parent.anchor:
        parts = parts[1:]

    return output_dir.joinpath(*parts, name).as_posix()


def is_partial(path: str | PurePath) -> bool:
    """Check if a file is a Sass partial (base name starts with an underscore)."""
    return PurePath(path).name.startswith(PARTIAL_PREFIX)


def normalize_path(path: str | PurePath) -> str:
    """Normalize a file reference for comparison."""
    return os.path.normpath(str(path))


def discover_sources(roots: Iterable[str | Path]) -> list[str]:
    """Find all Sass/SCSS files below the given directories.

    Partials are included; callers decide whether to compile them.
    A root that is itself a stylesheet file is returned as-is.

    Args:
        roots: Directories (or files) to search.

    Returns:
        Sorted, de-duplicated list of file paths.
    """
    found: set[str] = set()
    for root in roots:
        root_path = Path(root)
        if root_path.is_file():
            if root_path.suffix in SOURCE_EXTENSIONS:
                found.add(str(root_path))
            continue
        if not root_path.is_dir():
            continue
        for candidate in root_path.rglob("*"):
            if candidate.suffix in SOURCE_EXTENSIONS and candidate.is_file():
                found.add(str(candidate))
    return sorted(found)
