"""Port for human-readable notifications and audit events.

The core describes what happened ("Installed at store X"); rendering and
delivery belong to whoever implements the sink.  Sinks are called after a
unit of work has committed and must not raise back into the core.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class NotificationSink(ABC):

    @abstractmethod
    def emit(self, event: str, message: str, **context: object) -> None:
        """Publish one event description."""


class NullNotificationSink(NotificationSink):

    def emit(self, event: str, message: str, **context: object) -> None:
        return None
