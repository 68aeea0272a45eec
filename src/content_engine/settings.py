"""Environment driven configuration for the content engine."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional, Tuple

from .engine.tag_balance import DEFAULT_SHORTCODE_LOOKBACK
from .engine.url_template import UrlTemplate

LOGGER = logging.getLogger(__name__)


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        LOGGER.warning("Invalid integer for %s: %s; using default %s", name, value, default)
        return default


def _list_from_env(name: str) -> Tuple[str, ...]:
    value = os.getenv(name, "")
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _template_from_env() -> Optional[UrlTemplate]:
    base_path = os.getenv("CONTENT_BASE_PATH")
    if not base_path:
        return None
    return UrlTemplate(
        base_path=base_path,
        prefix=os.getenv("CONTENT_PREFIX", ""),
        file_suffix=os.getenv("CONTENT_FILE_SUFFIX", ""),
    )


def _log_level_from_env(environment: str) -> str:
    level = os.getenv("LOG_LEVEL", "").strip().upper()
    if level:
        return level
    return "DEBUG" if environment == "development" else "INFO"


@dataclass(slots=True, frozen=True)
class EngineSettings:
    """Defaults applied when a request does not carry its own tenant settings.

    Outside ``development`` the log level defaults to ``INFO`` so matching
    decisions stay out of production logs unless ``LOG_LEVEL`` asks for them.
    """

    environment: str = "development"
    shortcode_lookback: int = DEFAULT_SHORTCODE_LOOKBACK
    default_template: Optional[UrlTemplate] = None
    taxonomy_tags: Tuple[str, ...] = field(default_factory=tuple)
    log_dir: str = "logs"
    log_level: str = "DEBUG"

    @classmethod
    def from_env(cls) -> "EngineSettings":
        environment = os.getenv("ENVIRONMENT", "development").strip().lower() or "development"
        return cls(
            environment=environment,
            shortcode_lookback=max(
                _int_from_env("SHORTCODE_LOOKBACK", DEFAULT_SHORTCODE_LOOKBACK), 0
            ),
            default_template=_template_from_env(),
            taxonomy_tags=_list_from_env("TAXONOMY_TAGS"),
            log_dir=os.getenv("LOG_DIR", "logs"),
            log_level=_log_level_from_env(environment),
        )


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """FastAPI dependency returning settings read once from the environment."""

    return EngineSettings.from_env()


__all__ = ["EngineSettings", "get_settings"]
