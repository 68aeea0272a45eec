"""JSON logging for the service and the reconciliation audit trail."""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .settings import EngineSettings, get_settings

AUDIT_LOG_FILENAME = "reconcile_audit.log"

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_STANDARD_ATTRIBUTES = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class MinimalJSONFormatter(logging.Formatter):
    """Render a record as one JSON line.

    Dict messages (the telemetry events) are merged into the top level so a
    readiness summary reads as ``{"step": ..., "details": {...}}``.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts": created.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "module": record.name,
        }

        if isinstance(record.msg, dict):
            payload.update(record.msg)
        elif record.getMessage():
            payload["message"] = record.getMessage()

        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRIBUTES and not key.startswith("_")
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def build_logging_config(settings: EngineSettings) -> dict[str, Any]:
    """Return the ``dictConfig`` mapping for *settings* without applying it."""

    audit_path = Path(settings.log_dir) / AUDIT_LOG_FILENAME
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": MinimalJSONFormatter}},
        "handlers": {
            "console": {"class": "logging.StreamHandler", "formatter": "json"},
            "reconcile_audit": {
                "class": "logging.FileHandler",
                "filename": str(audit_path),
                "encoding": "utf-8",
                "delay": True,
                "formatter": "json",
            },
        },
        "root": {"level": settings.log_level, "handlers": ["console"]},
        "loggers": {
            "content_engine.reconcile.audit": {
                "level": "INFO",
                "handlers": ["reconcile_audit"],
                "propagate": False,
            }
        },
    }


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    """Apply JSON logging, creating the audit log directory when needed."""

    settings = settings or get_settings()
    Path(settings.log_dir).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))


__all__ = ["MinimalJSONFormatter", "build_logging_config", "configure_logging"]
