"""Centralised observability helpers for structured lifecycle logging."""

from __future__ import annotations

import logging
import os
import platform
import sys
import time
import traceback
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

LOGGER = logging.getLogger("content_engine.telemetry")
AUDIT_LOGGER = logging.getLogger("content_engine.reconcile.audit")

_ENV_KEYS_TO_LOG: tuple[str, ...] = (
    "ENVIRONMENT",
    "LOG_LEVEL",
    "LOG_DIR",
    "CONTENT_BASE_PATH",
    "CONTENT_PREFIX",
    "CONTENT_FILE_SUFFIX",
    "TAXONOMY_TAGS",
    "SHORTCODE_LOOKBACK",
)


def _format_exception(error: BaseException) -> str:
    return "".join(traceback.format_exception(error.__class__, error, error.__traceback__))


def log_event(
    logger: Optional[logging.Logger],
    step: str,
    *,
    level: str = "info",
    req_id: str | None = None,
    duration_ms: float | None = None,
    exc: BaseException | str | None = None,
    details: dict[str, Any] | None = None,
    **payload: Any,
) -> None:
    """Emit a structured log event with the agreed-upon schema."""

    logger = logger or LOGGER
    event: dict[str, Any] = {"step": step, "module": logger.name}
    if req_id:
        event["req_id"] = req_id
    if duration_ms is not None:
        event["duration_ms"] = round(duration_ms, 3)
    if details is not None:
        event["details"] = details
    event.update(payload)

    exc_info = None
    if exc is not None:
        if isinstance(exc, BaseException):
            event["exc"] = _format_exception(exc)
            exc_info = (exc.__class__, exc, exc.__traceback__)
        else:
            event["exc"] = str(exc)

    log_method = getattr(logger, level.lower(), logger.info)
    log_method(event, exc_info=exc_info)


def emit_app_startup_event() -> None:
    env = {key: os.getenv(key) for key in _ENV_KEYS_TO_LOG}
    log_event(
        LOGGER,
        "app.startup",
        details={
            "cwd": str(Path.cwd()),
            "python": sys.version.split()[0],
            "platform": platform.platform(),
            "env": env,
        },
    )


def emit_readiness_event(
    *,
    markup_chars: int,
    assets: int,
    metadata_records: int,
    errors: int,
    pending_placeholders: int,
    url_mismatches: int | None,
    link_issue: bool,
    taxonomy_category: str | None,
    ready: bool,
    duration_ms: float | None = None,
) -> None:
    details = {
        "markup_chars": markup_chars,
        "assets": assets,
        "metadata_records": metadata_records,
        "errors": errors,
        "pending_placeholders": pending_placeholders,
        "url_mismatches": url_mismatches,
        "link_issue": link_issue,
        "taxonomy_category": taxonomy_category,
        "ready": ready,
    }
    log_event(AUDIT_LOGGER, "readiness.report", duration_ms=duration_ms, details=details)


def emit_exception(
    *,
    module: str,
    error: BaseException,
    req_id: str | None = None,
    suggestion: str | None = None,
) -> None:
    details = {"module": module}
    if suggestion:
        details["suggestion"] = suggestion
    log_event(
        LOGGER,
        "exception",
        level="error",
        req_id=req_id,
        exc=error,
        details=details,
    )


@contextmanager
def traced_duration(step: str, *, logger: Optional[logging.Logger] = None, **fields: Any) -> Iterator[None]:
    start = time.perf_counter()
    log_event(logger or LOGGER, f"{step}.start", level="debug", details=fields)
    try:
        yield
    except Exception as error:
        log_event(logger or LOGGER, f"{step}.error", level="error", details=fields, exc=error)
        raise
    finally:
        end = time.perf_counter()
        log_event(
            logger or LOGGER,
            f"{step}.complete",
            level="debug",
            duration_ms=(end - start) * 1000.0,
            details=fields,
        )


__all__ = [
    "emit_app_startup_event",
    "emit_exception",
    "emit_readiness_event",
    "log_event",
    "traced_duration",
]
