"""Parser for image metadata blocks pasted from an authored document.

Expected layout, repeated once per image::

    IMAGE URL
    roof-repair.jpg

    IMAGE FILE NAME
    roof-repair

    IMAGE (SEARCH) TITLE
    Roof repair in Sussex

    IMAGE ALT TEXT
    Crew replacing shingles on a roof

Headings are matched case-insensitively. Each heading takes the next
non-blank line as its value and ``IMAGE URL`` starts a new record.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .models import ImportedMetadataRecord

LOGGER = logging.getLogger(__name__)

# Value lines such as "Image title for the roof photo" must not read as headings.
_MAX_HEADING_WORDS = 4
# Headings recognised even while a value is still expected.
_EXACT_HEADINGS = {
    "IMAGE URL": "image_url",
    "IMAGE FILE NAME": "file_name",
    "IMAGE (SEARCH) TITLE": "search_title",
    "IMAGE SEARCH TITLE": "search_title",
    "IMAGE ALT TEXT": "alt_text",
}


def _normalise_heading(line: str) -> str:
    return " ".join(line.upper().rstrip(":").split())


def _heading_field(line: str) -> Optional[str]:
    heading = _normalise_heading(line)
    if heading in _EXACT_HEADINGS:
        return _EXACT_HEADINGS[heading]
    if not heading.startswith("IMAGE") or len(heading.split()) > _MAX_HEADING_WORDS:
        return None
    if "IMAGE ALT" in heading or "IMAGE DESCRIPTION" in heading:
        return "alt_text"
    if "SEARCH" in heading or "TITLE" in heading:
        return "search_title"
    return None


def parse_metadata_text(text: str) -> List[ImportedMetadataRecord]:
    """Return one record per image block, numbered from 1 in encounter order.

    While a heading waits for its value only the exact headings above are
    treated as headings; any other line, however heading-like, is the value.
    """

    records: List[ImportedMetadataRecord] = []
    current: Dict[str, str] = {}
    pending: Optional[str] = None

    def flush() -> None:
        if current:
            records.append(ImportedMetadataRecord(order=len(records) + 1, **current))
            current.clear()

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if pending is None:
            field = _heading_field(line)
        else:
            field = _EXACT_HEADINGS.get(_normalise_heading(line))
        if field is not None:
            if field == "image_url":
                flush()
            pending = field
            continue
        if pending is not None:
            current[pending] = line
            pending = None

    flush()
    LOGGER.debug("Parsed %s image metadata records", len(records))
    return records


__all__ = ["parse_metadata_text"]
