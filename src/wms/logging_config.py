"""Logging setup for the warehouse core.

Modules obtain loggers through ``get_logger()`` so everything lives under
the ``wms`` namespace; only entry points call ``configure_logging()``.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Any

_LOGGER_PREFIX = "wms"
_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

_STDLIB_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime", "taskName"}


def _json_default(obj: Any) -> str:
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


class StructuredFormatter(logging.Formatter):
    """Plain text line followed by the record's ``extra`` fields as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            key: val for key, val in vars(record).items()
            if key not in _STDLIB_KEYS and not key.startswith("_")
        }
        if not context:
            return line
        fields = json.dumps(context, sort_keys=True, default=_json_default)
        # keep the traceback, if any, after the fields
        head, sep, tail = line.partition("\n")
        return f"{head} {fields}{sep}{tail}"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the wms namespace."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


def configure_logging(level: str = "INFO", log_file: Path | None = None) -> logging.Logger:
    """Attach handlers to the ``wms`` logger.  Safe to call repeatedly."""
    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(level.upper())
    root.propagate = False

    formatter = StructuredFormatter(_FORMAT)

    if not any(getattr(h, "_wms_stream", False) for h in root.handlers):
        stream = logging.StreamHandler()
        stream.setFormatter(formatter)
        stream._wms_stream = True  # type: ignore[attr-defined]
        root.addHandler(stream)

    if log_file is not None:
        log_file = Path(log_file).expanduser()
        target = str(log_file.resolve())
        already = any(
            getattr(h, "baseFilename", None) == target for h in root.handlers
        )
        if not already:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.handlers.RotatingFileHandler(
                log_file, maxBytes=5_000_000, backupCount=3, encoding="utf-8"
            )
            handler.setFormatter(formatter)
            root.addHandler(handler)

    return root


def reset_logging() -> None:
    """Remove handlers installed by ``configure_logging()`` (used by tests)."""
    root = logging.getLogger(_LOGGER_PREFIX)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.propagate = True
