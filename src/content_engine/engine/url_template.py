"""Per-tenant naming template: filename to deployment URL and back."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..errors import TemplateContractError
from .normalization import strip_extension, strip_resize_suffix

LOGGER = logging.getLogger(__name__)

_DATE_SEGMENT_RE = re.compile(r"^/?\d{4}/\d{2}/")

_FIELD_ALIASES = {
    "base_path": ("base_path", "basePath"),
    "prefix": ("prefix",),
    "file_suffix": ("file_suffix", "fileSuffix"),
}


@dataclass(slots=True, frozen=True)
class UrlTemplate:
    """Naming template: ``base_path`` ends with ``/``, ``file_suffix`` starts with ``-``."""

    base_path: str
    prefix: str
    file_suffix: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "UrlTemplate":
        """Build a template from camelCase or snake_case keys, failing fast on gaps."""

        values: dict[str, str] = {}
        for field, aliases in _FIELD_ALIASES.items():
            raw = next((data[alias] for alias in aliases if alias in data), None)
            if raw is None:
                raise TemplateContractError(
                    f"Naming template is missing required field '{field}'", field=field
                )
            if not isinstance(raw, str):
                raise TemplateContractError(
                    f"Naming template field '{field}' must be a string", field=field
                )
            values[field] = raw
        template = cls(**values)
        template.require_complete()
        return template

    def require_complete(self) -> None:
        for field in ("base_path", "prefix", "file_suffix"):
            if not isinstance(getattr(self, field), str):
                raise TemplateContractError(
                    f"Naming template field '{field}' must be a string", field=field
                )
        if not self.base_path:
            raise TemplateContractError("Naming template base path is empty", field="base_path")

    def warn_on_contract(self) -> None:
        if not self.base_path.endswith("/"):
            LOGGER.warning("Template base path %r does not end with '/'", self.base_path)
        if self.file_suffix and not self.file_suffix.startswith("-"):
            LOGGER.warning("Template file suffix %r does not start with '-'", self.file_suffix)


def filename_stem(filename: str) -> str:
    """Drop the extension and any ``-<w>x<h>`` resize marker from *filename*."""

    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    return strip_resize_suffix(strip_extension(name))


def build_url(filename: str, template: UrlTemplate, on_date: date) -> str:
    """Return the deployment URL for *filename* uploaded in ``on_date``'s month."""

    return (
        f"{template.base_path}{on_date.year}/{on_date.month:02d}/"
        f"{template.prefix}{filename_stem(filename)}{template.file_suffix}"
    )


def extract_stem(url: Optional[str], template: Optional[UrlTemplate]) -> Optional[str]:
    """Best-effort inverse of :func:`build_url`.

    Used by the preview renderer to bind production URLs back to uploads; the
    result is lowercased and may be empty when nothing recognisable remains.
    """

    if not url or template is None:
        return None

    value = url.strip()
    base = template.base_path
    bare_base = base.rstrip("/")
    if base and value.startswith(base):
        value = value[len(base) :]
    elif bare_base and value.startswith(bare_base):
        value = value[len(bare_base) :]

    value = _DATE_SEGMENT_RE.sub("", value)

    prefix = template.prefix
    if prefix:
        if value.startswith(prefix):
            value = value[len(prefix) :]
        elif prefix in value:
            value = value[value.index(prefix) + len(prefix) :]

    value = value.rstrip("/")
    suffix = template.file_suffix
    if suffix:
        if value.endswith(suffix):
            value = value[: -len(suffix)]
        else:
            without_extension = strip_extension(value)
            if without_extension.endswith(suffix):
                value = without_extension[: -len(suffix)]

    value = strip_extension(value.strip("/"))
    return value.rsplit("/", 1)[-1].lower().strip()


__all__ = ["UrlTemplate", "build_url", "extract_stem", "filename_stem"]
