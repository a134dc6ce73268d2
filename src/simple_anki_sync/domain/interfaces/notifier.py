"""Interface for user-visible, non-blocking notifications."""

from abc import ABC, abstractmethod
from typing import Literal

NoticeLevel = Literal["info", "warning", "error"]


class INotifier(ABC):
    """Surface short status messages to the user.

    Notifications never block or raise; they accompany the structured log
    events, they do not replace them.
    """

    @abstractmethod
    def notify(self, message: str, *, level: NoticeLevel = "info") -> None:
        """Show a message."""


class NullNotifier(INotifier):
    """Notifier that drops every message."""

    def notify(self, message: str, *, level: NoticeLevel = "info") -> None:
        return None
