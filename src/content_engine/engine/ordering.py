"""Display order of uploaded assets derived from their use in the markup."""
from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Sequence, Set

from .models import AssetRecord
from .normalization import names_overlap, normalize_key, strip_extension
from .placeholders import extract_placeholder_numbers
from .scanning import iter_img_tags

LOGGER = logging.getLogger(__name__)


def extract_alt_texts(markup: str) -> List[str]:
    """Return the non-empty ``alt`` values of ``<img>`` tags in document order."""

    alts: List[str] = []
    for tag in iter_img_tags(markup):
        alt = tag.attributes.get("alt")
        if alt:
            alts.append(alt)
    return alts


def _order_by_placeholders(rest: Sequence[AssetRecord], numbers: Sequence[int]) -> List[int]:
    picked: List[int] = []
    used: Set[int] = set()
    for number in numbers:
        index = number - 1
        if 0 <= index < len(rest) and index not in used:
            picked.append(index)
            used.add(index)
    return picked


def _order_by_alt_text(rest: Sequence[AssetRecord], alts: Sequence[str]) -> List[int]:
    keys = [normalize_key(strip_extension(asset.filename)) for asset in rest]
    picked: List[int] = []
    used: Set[int] = set()
    for alt in alts:
        wanted = normalize_key(alt)
        for index, key in enumerate(keys):
            if index not in used and names_overlap(key, wanted):
                picked.append(index)
                used.add(index)
                break
    return picked


def resolve_order(
    markup: str,
    assets: Sequence[AssetRecord],
    featured_url: Optional[str] = None,
) -> List[AssetRecord]:
    """Order *assets* the way they are referenced in *markup*.

    Numbered placeholders win; without them ``<img alt>`` values are matched
    against filenames. Unreferenced assets keep their upload order and the
    featured asset, when present, is always placed last. Each returned record
    carries its 1-based position in ``doc_order``.
    """

    featured: Optional[AssetRecord] = None
    rest: List[AssetRecord] = []
    for asset in assets:
        if featured is None and featured_url and asset.url == featured_url:
            featured = asset
        else:
            rest.append(asset)

    numbers = extract_placeholder_numbers(markup or "")
    if numbers:
        picked = _order_by_placeholders(rest, numbers)
        strategy = "placeholders"
    else:
        picked = _order_by_alt_text(rest, extract_alt_texts(markup or ""))
        strategy = "alt text" if picked else "upload order"

    chosen = set(picked)
    ordered = [rest[index] for index in picked]
    ordered.extend(asset for index, asset in enumerate(rest) if index not in chosen)
    if featured is not None:
        ordered.append(featured)

    LOGGER.debug("Resolved order of %s assets using %s", len(ordered), strategy)
    return [
        dataclasses.replace(asset, doc_order=position)
        for position, asset in enumerate(ordered, start=1)
    ]


__all__ = ["extract_alt_texts", "resolve_order"]
