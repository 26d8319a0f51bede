"""Import directive scanner for Sass and SCSS sources.

Locates @import, @use and @forward directives and resolves their targets
on disk using Sass partial naming rules. This is not a parser: it only
reads directive lines, which is enough to report which files a
stylesheet depends on.

Resolution order for a target "dir/name":
1. the importing file's directory
2. each load path, in order

Within a directory the candidates are dir/name.scss, dir/_name.scss,
dir/name.sass, dir/_name.sass, then dir/name/_index.scss and friends.
"""

from __future__ import annotations

import os
import re
from collections import deque
from collections.abc import Iterator, Sequence
from pathlib import Path

import structlog

from restyle_core.errors import CompileSyntaxError
from restyle_core.paths import normalize_path

logger = structlog.get_logger(__name__)

_DIRECTIVE = re.compile(r"^\s*@(import|use|forward)\s+(.*?)\s*;?\s*$")
_QUOTED = re.compile(r"""["']([^"']+)["']""")
_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)

_EXTENSIONS = (".scss", ".sass")
_PLAIN_CSS_PREFIXES = ("http://", "https://", "//", "url(")
_QUOTES = "\"'"


def _strip_block_comments(text: str) -> str:
    """Remove /* */ comments, keeping line breaks so line numbers survive."""
    return _BLOCK_COMMENT.sub(lambda m: "\n" * m.group(0).count("\n"), text)


def _strip_line_comment(line: str) -> str:
    """Remove a trailing // comment that is not inside a quoted string."""
    quote: str | None = None
    for index, char in enumerate(line):
        if quote is not None:
            if char == quote:
                quote = None
        elif char in _QUOTES:
            quote = char
        elif line.startswith("//", index):
            return line[:index]
    return line


def _is_plain_css(target: str) -> bool:
    return target.endswith(".css") or target.startswith(_PLAIN_CSS_PREFIXES)


def iter_import_targets(source: str, *, indented: bool = False) -> Iterator[tuple[int, str]]:
    """Yield (line number, target) for every stylesheet import in source.

    Plain CSS imports (".css" files, URLs) and built-in modules
    ("sass:math") are skipped since they never map to a source file.

    Args:
        source: Stylesheet text.
        indented: True for the indented .sass syntax, where targets may
            be unquoted.

    Yields:
        Tuples of 1-based line number and raw import target.
    """
    text = _strip_block_comments(source)
    for lineno, raw_line in enumerate(text.splitlines(), start=1):
        match = _DIRECTIVE.match(_strip_line_comment(raw_line))
        if match is None:
            continue

        keyword, arguments = match.groups()
        targets = _QUOTED.findall(arguments)
        if not targets and indented and keyword == "import":
            # unquoted list; a stray quote means a malformed target, not a file
            parts = (t.strip() for t in arguments.split(","))
            targets = [t for t in parts if t and t[0] not in _QUOTES]
        if keyword != "import":
            # @use/@forward take a single URL followed by modifiers
            targets = targets[:1]

        for target in targets:
            if target.startswith("sass:") or _is_plain_css(target):
                continue
            yield lineno, target


class ImportResolver:
    """Resolve import targets and compute transitive import closures.

    Attributes:
        load_paths: Directories searched after the importing file's own
            directory.

    Example:
        >>> resolver = ImportResolver(load_paths=("vendor/sass",))
        >>> sorted(resolver.closure("site.scss"))
        ['_base.scss', 'vendor/sass/_reset.scss']
    """

    def __init__(self, load_paths: Sequence[str] = ()) -> None:
        self.load_paths = tuple(load_paths)
        self._log = logger.bind(component="import_resolver")

    def direct_imports(self, path: str) -> list[str]:
        """Return the files imported directly by path.

        Raises:
            CompileSyntaxError: If path cannot be read or an import cannot
                be found.
        """
        try:
            source = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CompileSyntaxError(f"Unable to read file: {e}", file=path) from e

        base_dir = os.path.dirname(path)
        indented = path.endswith(".sass")
        imports: list[str] = []
        for lineno, target in iter_import_targets(source, indented=indented):
            resolved = self.resolve(target, base_dir)
            if resolved is None:
                raise CompileSyntaxError(
                    f"File to import not found or unreadable: {target}.",
                    file=path,
                    line=lineno,
                )
            imports.append(resolved)
        return imports

    def resolve(self, target: str, base_dir: str) -> str | None:
        """Find the file an import target refers to.

        Args:
            target: Raw import target (e.g. "mixins", "base/colors").
            base_dir: Directory of the importing file.

        Returns:
            Normalized path to the imported file, or None if not found.
        """
        for directory in (base_dir, *self.load_paths):
            for candidate in self._candidates(target):
                full = os.path.join(directory, candidate)
                if os.path.isfile(full):
                    return normalize_path(full)
        return None

    def closure(self, path: str) -> set[str]:
        """Return every file path imports, directly or transitively.

        Import cycles are tolerated. The file itself is only included
        when it is reachable through a cycle.

        Raises:
            CompileSyntaxError: If any file in the chain cannot be read or
                has an import that cannot be found.
        """
        seen: set[str] = set()
        queue: deque[str] = deque([path])
        while queue:
            current = queue.popleft()
            for dependency in self.direct_imports(current):
                if dependency not in seen:
                    seen.add(dependency)
                    queue.append(dependency)

        self._log.debug("imports_resolved", file=path, count=len(seen))
        return seen

    @staticmethod
    def _candidates(target: str) -> list[str]:
        directory, name = os.path.split(target)
        if os.path.splitext(name)[1] in _EXTENSIONS:
            return [os.path.join(directory, name), os.path.join(directory, f"_{name}")]

        candidates: list[str] = []
        for extension in _EXTENSIONS:
            candidates.append(os.path.join(directory, f"{name}{extension}"))
            candidates.append(os.path.join(directory, f"_{name}{extension}"))
        for extension in _EXTENSIONS:
            candidates.append(os.path.join(target, f"_index{extension}"))
            candidates.append(os.path.join(target, f"index{extension}"))
        return candidates
