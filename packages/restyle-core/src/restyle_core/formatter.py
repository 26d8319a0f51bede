"""User-facing reporting for restyle.

The Formatter prints success and error messages to a Rich console and
forwards a short notification for each one to a Notifier. Success
output can be switched off with hide_success; errors are always shown.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Literal

import structlog
from rich.console import Console

logger = structlog.get_logger(__name__)

NOTIFICATION_TITLE = "restyle"

NotificationImage = Literal["success", "failed"]


class Notifier(ABC):
    """Destination for user-visible notifications."""

    @abstractmethod
    def notify(self, message: str, *, title: str, image: NotificationImage) -> None:
        """Deliver a notification.

        Args:
            message: Notification text.
            title: Notification title.
            image: Outcome the notification describes.
        """


class LogNotifier(Notifier):
    """Notifier that records notifications as structured log events."""

    def __init__(self) -> None:
        self._log = logger.bind(component="notifier")

    def notify(self, message: str, *, title: str, image: NotificationImage) -> None:
        self._log.info("notification", message=message, title=title, image=image)


class Formatter:
    """Show compile results to the user.

    Attributes:
        hide_success: Suppress success messages and notifications.
        console: Rich console messages are printed to.
        notifier: Notification destination.

    Example:
        >>> formatter = Formatter(hide_success=True)
        >>> formatter.error("Sass > Error: bad", notification="rebuild of a.sass failed")
    """

    def __init__(
        self,
        hide_success: bool = False,
        *,
        console: Console | None = None,
        notifier: Notifier | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            hide_success: Whether to suppress success messages.
            console: Optional Rich console (creates one if not provided).
            notifier: Optional notifier (logs notifications if not provided).
        """
        self.hide_success = hide_success
        self.console = console or Console()
        self.notifier = notifier or LogNotifier()

    def success(self, message: str, notification: str) -> None:
        """Show a success message and notification unless successes are hidden."""
        if self.hide_success:
            return
        self.console.print(message, style="green", markup=False, highlight=False)
        self.notify(notification, image="success")

    def error(self, message: str, notification: str) -> None:
        """Show an error message and notification."""
        self.console.print(message, style="red", markup=False, highlight=False)
        self.notify(notification, image="failed")

    def notify(self, message: str, image: NotificationImage) -> None:
        """Send a notification titled for restyle."""
        self.notifier.notify(message, title=NOTIFICATION_TITLE, image=image)
