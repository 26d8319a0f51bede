"""Output writers for compiled artifacts.

The Runner performs all filesystem side effects through an OutputWriter
so tests can substitute an in-memory writer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class OutputWriter(ABC):
    """Destination for compiled artifacts."""

    @abstractmethod
    def ensure_dir(self, path: str) -> None:
        """Create a directory and its parents; existing directories are fine."""

    @abstractmethod
    def write(self, path: str, content: str) -> None:
        """Write an artifact, replacing any previous content."""


class FilesystemWriter(OutputWriter):
    """Write artifacts to the local filesystem."""

    def ensure_dir(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def write(self, path: str, content: str) -> None:
        Path(path).write_text(content, encoding="utf-8")
