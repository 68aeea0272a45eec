"""Numbered placeholders standing in for image URLs inside ``<img src>``."""
from __future__ import annotations

import logging
from typing import List

from .models import EncodedMarkup
from .scanning import attribute_value, find_attribute, iter_img_tags, numeric_placeholder

LOGGER = logging.getLogger(__name__)


def encode_placeholders(markup: str) -> EncodedMarkup:
    """Replace every image URL with ``src="N"``, numbering from 1 in document order.

    Returns the rewritten markup together with the original URLs indexed by
    ``N - 1``. Images without a ``src`` value are left untouched.
    """

    pieces: List[str] = []
    urls: List[str] = []
    cursor = 0

    for tag in iter_img_tags(markup):
        src = find_attribute(tag.text, "src")
        if src is None or not attribute_value(src):
            continue
        urls.append(attribute_value(src))
        start = tag.offset + src.start()
        end = tag.offset + src.end()
        pieces.append(markup[cursor:start])
        pieces.append(f'src="{len(urls)}"')
        cursor = end

    pieces.append(markup[cursor:])
    LOGGER.debug("Encoded %s image sources as placeholders", len(urls))
    return EncodedMarkup(numbered_markup="".join(pieces), original_urls=tuple(urls))


def extract_placeholder_numbers(markup: str) -> List[int]:
    """Return the numeric ``src`` values (``"1"`` or ``"[1]"``) in document order."""

    numbers: List[int] = []
    for tag in iter_img_tags(markup):
        src = find_attribute(tag.text, "src")
        if src is None:
            continue
        number = numeric_placeholder(attribute_value(src))
        if number is not None:
            numbers.append(number)
    return numbers


__all__ = ["encode_placeholders", "extract_placeholder_numbers"]
