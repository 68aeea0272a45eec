import io
import json
import logging
from pathlib import Path

from content_engine.logging_config import MinimalJSONFormatter, build_logging_config, configure_logging
from content_engine.settings import EngineSettings
from content_engine.telemetry import AUDIT_LOGGER, emit_readiness_event


def _capture(logger: logging.Logger) -> tuple[logging.Handler, io.StringIO]:
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(MinimalJSONFormatter())
    logger.addHandler(handler)
    return handler, stream


def test_readiness_event_is_rendered_as_json() -> None:
    handler, stream = _capture(AUDIT_LOGGER)
    previous_level = AUDIT_LOGGER.level
    AUDIT_LOGGER.setLevel(logging.INFO)
    try:
        emit_readiness_event(
            markup_chars=120,
            assets=3,
            metadata_records=3,
            errors=0,
            pending_placeholders=2,
            url_mismatches=None,
            link_issue=False,
            taxonomy_category="Roofing",
            ready=False,
            duration_ms=1.23456,
        )
    finally:
        AUDIT_LOGGER.removeHandler(handler)
        AUDIT_LOGGER.setLevel(previous_level)

    event = json.loads(stream.getvalue().splitlines()[-1])
    assert event["step"] == "readiness.report"
    assert event["level"] == "INFO"
    assert event["module"] == "content_engine.reconcile.audit"
    assert event["ts"].endswith("Z")
    assert event["duration_ms"] == 1.235
    assert event["details"]["ready"] is False
    assert event["details"]["pending_placeholders"] == 2
    assert event["details"]["url_mismatches"] is None
    assert event["details"]["taxonomy_category"] == "Roofing"


def test_plain_messages_keep_extra_fields() -> None:
    logger = logging.getLogger("content_engine.tests.formatter")
    handler, stream = _capture(logger)
    logger.setLevel(logging.INFO)
    try:
        logger.info("matched %s assets", 2, extra={"tenant": "acme"})
    finally:
        logger.removeHandler(handler)

    event = json.loads(stream.getvalue())
    assert event["message"] == "matched 2 assets"
    assert event["tenant"] == "acme"
    assert "args" not in event and "lineno" not in event


def test_config_follows_settings(tmp_path: Path) -> None:
    settings = EngineSettings(environment="production", log_dir=str(tmp_path / "logs"), log_level="INFO")

    config = build_logging_config(settings)

    assert config["root"]["level"] == "INFO"
    assert config["handlers"]["reconcile_audit"]["filename"] == str(tmp_path / "logs" / "reconcile_audit.log")
    assert config["loggers"]["content_engine.reconcile.audit"]["propagate"] is False


def test_configure_logging_creates_log_directory(tmp_path: Path) -> None:
    log_dir = tmp_path / "nested" / "logs"

    configure_logging(EngineSettings(log_dir=str(log_dir), log_level="INFO"))

    assert log_dir.is_dir()
    assert logging.getLogger().level == logging.INFO
