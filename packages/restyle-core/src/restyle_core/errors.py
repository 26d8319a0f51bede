"""Custom exception hierarchy for restyle-core.

This module defines the exception classes used throughout restyle:
- RestyleError: Base exception for all restyle-related errors
- ConfigurationError: Raised when restyle.yaml cannot be loaded or validated
- ConfigurationNotFoundError: Raised when restyle.yaml does not exist
- CompileSyntaxError: Raised inside engine adapters when a stylesheet is invalid

User-facing messages are safe to display. Technical details are logged
internally via structlog and never exposed in the message itself.

CompileSyntaxError never crosses the engine adapter boundary: adapters
convert it into a SyntaxFailure outcome with to_failure().
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from restyle_core.engine.base import SyntaxFailure

logger = structlog.get_logger(__name__)


class RestyleError(Exception):
    """Base exception for restyle.

    All restyle exceptions inherit from this class. User-facing messages
    are safe to display; technical details are logged internally.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but NEVER exposed to the user.

    Example:
        >>> raise RestyleError(
        ...     "Configuration invalid",
        ...     internal_details="Field 'style' failed validation at restyle.yaml:4"
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize RestyleError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "restyle_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(RestyleError):
    """Raised when configuration file parsing or validation fails.

    Use this exception when:
    - restyle.yaml cannot be parsed
    - The document is not a mapping
    - The configuration file is not found

    Attributes:
        file_path: Path to the configuration file (if known).
        line_number: Line number in the file where the error occurred.

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid output style",
        ...     file_path="restyle.yaml",
        ...     line_number=3,
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        line_number: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the configuration file (optional).
            line_number: Line number in the file (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if line_number:
            context_parts.append(f"line {line_number}")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.line_number = line_number


class ConfigurationNotFoundError(ConfigurationError):
    """Raised when restyle.yaml does not exist at the given path."""

    pass


class CompileSyntaxError(RestyleError):
    """Raised by an engine adapter when a stylesheet cannot be processed.

    Covers both compilation and dependency resolution (e.g. an import
    that cannot be found).

    Attributes:
        message: Engine error text, without location.
        file: File the error was reported for.
        line: Line number, or None when the engine did not report one.

    Example:
        >>> raise CompileSyntaxError("Invalid CSS after \\"a\\"", file="a.scss", line=3)
    """

    def __init__(self, message: str, *, file: str, line: int | None = None) -> None:
        """Initialize CompileSyntaxError.

        Args:
            message: Engine error text.
            file: File the error was reported for.
            line: Line number, if known.
        """
        super().__init__(message)
        self.message = message
        self.file = file
        self.line = line

    def to_failure(self) -> SyntaxFailure:
        """Convert the exception into a SyntaxFailure outcome."""
        from restyle_core.engine.base import SyntaxFailure

        return SyntaxFailure(message=self.message, file=self.file, line=self.line)
