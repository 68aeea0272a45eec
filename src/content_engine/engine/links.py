"""Detection of anchors and buttons that lead nowhere."""
from __future__ import annotations

import re
from typing import List

from .models import LinkScanResult
from .scanning import iter_tags

_BUTTON_CLASS_RE = re.compile(r"(?<![A-Za-z0-9_])(?:btn|button)(?![A-Za-z0-9_])", re.IGNORECASE)
_EMPTY_TARGETS = {"", "#"}


def _is_navigational(name: str, attributes: dict[str, str]) -> bool:
    if name == "a":
        return True
    return bool(_BUTTON_CLASS_RE.search(attributes.get("class", "")))


def scan_links(markup: str) -> LinkScanResult:
    """Find ``<a>`` tags and button-styled elements without a usable ``href``."""

    offending: List[int] = []
    for tag in iter_tags(markup):
        if tag.is_closing:
            continue
        attributes = tag.attributes
        if not _is_navigational(tag.name, attributes):
            continue
        href = attributes.get("href")
        if href is None or href.strip() in _EMPTY_TARGETS:
            offending.append(tag.offset)

    return LinkScanResult(
        has_issue=bool(offending),
        first_offending_offset=min(offending) if offending else None,
        offending_offsets=tuple(offending),
    )


__all__ = ["scan_links"]
