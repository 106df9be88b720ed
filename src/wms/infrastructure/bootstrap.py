"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from wms.domain.model.scan_mode import ScanModeSelector
from wms.domain.repository.unit_of_work import UnitOfWork
from wms.domain.service.notification_sink import NotificationSink
from wms.infrastructure.notifications.logging_sink import LoggingNotificationSink
from wms.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork
from wms.infrastructure.settings import Settings, get_settings


def settings() -> Settings:
    return get_settings()


def unit_of_work() -> UnitOfWork:
    return JsonUnitOfWork(get_settings().document_path)


def notification_sink() -> NotificationSink:
    return LoggingNotificationSink()


def scan_mode_selector() -> ScanModeSelector:
    config = get_settings()
    return ScanModeSelector(
        presets=tuple(config.box_presets),
        default_multiplier=config.default_box_multiplier,
    )
