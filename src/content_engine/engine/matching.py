"""Assignment of imported metadata records to uploaded assets.

Matching is a greedy, priority ordered assignment:

1. ``metadata[0]`` describes the featured asset.
2. Every numeric placeholder ``p`` found in the markup addresses
   ``metadata[p]`` (placeholder ``1`` is the second record because the first
   one is reserved for the featured asset).
3. Remaining records are assigned in ascending order.

Each phase prefers an unused asset whose normalised filename overlaps the
record's ``file_name`` and otherwise falls back to the first unused asset.
No asset and no metadata record is ever consumed twice.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import List, Optional, Sequence, Set

from .models import AssetMapping, AssetRecord, ImportedMetadataRecord, MatchType
from .normalization import names_overlap, normalize_key, strip_extension
from .placeholders import extract_placeholder_numbers

LOGGER = logging.getLogger(__name__)


def _find_by_filename(
    asset_keys: Sequence[str], record: ImportedMetadataRecord, used_assets: Set[int]
) -> Optional[int]:
    wanted = normalize_key(record.file_name)
    if not wanted:
        return None
    for index, key in enumerate(asset_keys):
        if index not in used_assets and names_overlap(key, wanted):
            return index
    return None


def _first_unused(asset_count: int, used_assets: Set[int]) -> Optional[int]:
    for index in range(asset_count):
        if index not in used_assets:
            return index
    return None


def match_metadata(
    assets: Sequence[AssetRecord],
    metadata: Sequence[ImportedMetadataRecord],
    markup: str,
) -> List[AssetMapping]:
    """Return asset/metadata pairs with their match type, in assignment order."""

    mappings: List[AssetMapping] = []
    if not assets or not metadata:
        return mappings

    asset_keys = [normalize_key(strip_extension(asset.filename)) for asset in assets]
    used_assets: Set[int] = set()
    used_metadata: Set[int] = set()

    def assign(metadata_index: int, match_type: MatchType) -> None:
        record = metadata[metadata_index]
        asset_index = _find_by_filename(asset_keys, record, used_assets)
        how = "filename"
        if asset_index is None:
            asset_index = _first_unused(len(assets), used_assets)
            how = "position"
        if asset_index is None:
            LOGGER.debug("No asset left for metadata record %s", metadata_index)
            return
        LOGGER.debug(
            "Matched metadata %s to asset %s by %s (%s)",
            metadata_index,
            asset_index,
            how,
            match_type.value,
        )
        mappings.append(AssetMapping(asset_index, metadata_index, match_type))
        used_assets.add(asset_index)
        used_metadata.add(metadata_index)

    assign(0, MatchType.FEATURED)

    for number in extract_placeholder_numbers(markup):
        if number >= len(metadata) or number in used_metadata:
            continue
        assign(number, MatchType.PLACEHOLDER)

    for metadata_index in range(1, len(metadata)):
        if metadata_index not in used_metadata:
            assign(metadata_index, MatchType.ORDER)

    return mappings


def apply_metadata(
    assets: Sequence[AssetRecord],
    metadata: Sequence[ImportedMetadataRecord],
    mappings: Sequence[AssetMapping],
) -> List[AssetRecord]:
    """Copy alt text and search titles onto the mapped assets.

    Assets without a mapping keep whatever alt/title they already carried.
    """

    updated = list(assets)
    for mapping in mappings:
        record = metadata[mapping.metadata_index]
        asset = updated[mapping.asset_index]
        updated[mapping.asset_index] = dataclasses.replace(
            asset,
            alt=record.alt_text if record.alt_text is not None else asset.alt,
            title=record.search_title if record.search_title is not None else asset.title,
        )
    return updated


__all__ = ["apply_metadata", "match_metadata"]
