"""Notification sink that writes events to the ``wms.notifications`` logger."""

from __future__ import annotations

from wms.domain.service.notification_sink import NotificationSink
from wms.logging_config import get_logger

logger = get_logger("notifications")


class LoggingNotificationSink(NotificationSink):

    def emit(self, event: str, message: str, **context: object) -> None:
        details = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        logger.info("%s: %s %s", event, message, details)
