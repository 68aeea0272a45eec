"""String normalisation used for fuzzy filename comparisons."""
from __future__ import annotations

import re

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_EXTENSION_RE = re.compile(r"\.[^/.]+$")
_RESIZE_SUFFIX_RE = re.compile(r"-\d+x\d+$")


def normalize_key(value: str | None) -> str:
    """Lowercase *value* and drop everything outside ``[a-z0-9]``."""

    if not value:
        return ""
    return _NON_ALNUM_RE.sub("", value.lower())


def strip_extension(filename: str) -> str:
    return _EXTENSION_RE.sub("", filename)


def strip_resize_suffix(stem: str) -> str:
    """Remove a trailing ``-<width>x<height>`` marker added by image resizers."""

    return _RESIZE_SUFFIX_RE.sub("", stem)


def names_overlap(left: str, right: str) -> bool:
    """Return True when either normalised key contains the other.

    Empty keys never match; an empty string is contained in everything.
    """

    if not left or not right:
        return False
    return left in right or right in left
