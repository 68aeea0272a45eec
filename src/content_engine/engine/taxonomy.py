"""Validation of shortcode categories against the tenant's taxonomy tags."""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Tuple

from .models import TaxonomyResult

_QUOTES = "\"'‘’“”"


@lru_cache(maxsize=8)
def _shortcode_patterns(keyword: str) -> Tuple[re.Pattern[str], re.Pattern[str]]:
    name = re.escape(keyword)
    with_category = re.compile(
        rf"\[{name}\s+category\s*=\s*[{_QUOTES}]([^{_QUOTES}\]]*)[{_QUOTES}]",
        re.IGNORECASE,
    )
    bare = re.compile(rf"\[{name}\s*\]", re.IGNORECASE)
    return with_category, bare


def check_taxonomy(markup: str, allowed_tags: Iterable[str], keyword: str = "faqs") -> TaxonomyResult:
    """Check the first ``[faqs category="X"]`` shortcode against *allowed_tags*.

    A bare ``[faqs]`` reports an empty category; no shortcode at all reports
    ``None``. Category comparison ignores case and surrounding whitespace.
    """

    with_category, bare = _shortcode_patterns(keyword)
    match = with_category.search(markup or "")
    if match is None:
        if bare.search(markup or ""):
            return TaxonomyResult(matches=False, found_category="")
        return TaxonomyResult(matches=False, found_category=None)

    category = match.group(1)
    wanted = category.strip().casefold()
    matches = any(tag.strip().casefold() == wanted for tag in allowed_tags if tag is not None)
    return TaxonomyResult(matches=matches, found_category=category)


__all__ = ["check_taxonomy"]
