"""Checks that markup image sources agree with the expected deployment URLs."""
from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional, Sequence, Set

from .models import AssetRecord, PlaceholderStatus, UrlConsistency
from .scanning import attribute_value, find_attribute, iter_img_tags, numeric_placeholder
from .url_template import UrlTemplate, build_url

LOGGER = logging.getLogger(__name__)


def check_placeholder_presence(markup: str) -> PlaceholderStatus:
    """Count images whose ``src`` is empty or still a numeric placeholder."""

    count = 0
    for tag in iter_img_tags(markup):
        src = find_attribute(tag.text, "src")
        if src is None:
            continue
        value = attribute_value(src)
        if not value or numeric_placeholder(value) is not None:
            count += 1
    return PlaceholderStatus(has_pending=count > 0, count=count)


def _published_sources(markup: str) -> Set[str]:
    sources: Set[str] = set()
    for tag in iter_img_tags(markup):
        src = find_attribute(tag.text, "src")
        if src is None:
            continue
        value = attribute_value(src)
        if value and numeric_placeholder(value) is None:
            sources.add(value)
    return sources


def check_url_consistency(
    markup: str,
    assets: Sequence[AssetRecord],
    featured_url: Optional[str],
    template: UrlTemplate,
    on_date: date,
) -> UrlConsistency:
    """Report expected asset URLs that do not appear verbatim in the markup.

    Only meaningful once :func:`check_placeholder_presence` reports nothing
    pending. The featured asset is rendered outside the body and is skipped.
    """

    published = _published_sources(markup)
    missing: List[str] = []
    for asset in assets:
        if featured_url and asset.url == featured_url:
            continue
        expected = build_url(asset.filename, template, on_date)
        if expected not in published:
            missing.append(expected)

    if missing:
        LOGGER.debug("%s expected image URLs are missing from the markup", len(missing))
    return UrlConsistency(
        all_match=not missing,
        mismatch_count=len(missing),
        missing_urls=tuple(missing),
    )


__all__ = ["check_placeholder_presence", "check_url_consistency"]
