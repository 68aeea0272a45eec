"""Tolerant, offset-preserving tag scanning helpers.

These helpers never build a tree; they only locate tags and attribute values
well enough for diagnostics, and they never raise on malformed input.
"""
from __future__ import annotations

import bisect
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

# Comments, CDATA sections, doctypes and processing instructions. Unterminated
# comments and CDATA sections run to the end of the document.
_SKIP_SPAN_RE = re.compile(
    r"<!--.*?(?:-->|\Z)|<!\[CDATA\[.*?(?:\]\]>|\Z)|<![^>]*>|<\?.*?(?:\?>|\Z)",
    re.DOTALL,
)
_TAG_RE = re.compile(
    r"""<(/?)([A-Za-z][A-Za-z0-9:-]*)((?:"[^"]*"|'[^']*'|[^'"<>])*)>""",
)
_ATTRIBUTE_RE = re.compile(
    r"""(?<![\w:.-])([A-Za-z_:][\w:.-]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'=<>`]+))""",
)
_NUMERIC_SRC_RE = re.compile(r"\[([0-9]+)\]|([0-9]+)")


@dataclass(slots=True, frozen=True)
class RawTag:
    """A tag located in the markup together with its raw attribute text."""

    name: str
    offset: int
    is_closing: bool
    is_self_closing: bool
    text: str

    @property
    def attributes(self) -> Dict[str, str]:
        return parse_attributes(self.text)


def skip_spans(markup: str) -> List[Tuple[int, int]]:
    """Return ``(start, end)`` spans of comment-like regions, in order."""

    return [match.span() for match in _SKIP_SPAN_RE.finditer(markup)]


def in_spans(offset: int, spans: List[Tuple[int, int]]) -> bool:
    index = bisect.bisect_right(spans, (offset, float("inf"))) - 1
    if index < 0:
        return False
    start, end = spans[index]
    return start <= offset < end


def iter_tags(markup: str, spans: Optional[List[Tuple[int, int]]] = None) -> Iterator[RawTag]:
    """Yield every well-formed tag outside comment-like spans, in document order."""

    if spans is None:
        spans = skip_spans(markup)
    for match in _TAG_RE.finditer(markup):
        if in_spans(match.start(), spans):
            continue
        text = match.group(0)
        yield RawTag(
            name=match.group(2).lower(),
            offset=match.start(),
            is_closing=bool(match.group(1)),
            is_self_closing=text.endswith("/>"),
            text=text,
        )


def iter_img_tags(markup: str) -> Iterator[RawTag]:
    for tag in iter_tags(markup):
        if tag.name == "img" and not tag.is_closing:
            yield tag


def find_attribute(tag_text: str, name: str) -> Optional[re.Match[str]]:
    """Return the first attribute match called *name* (case-insensitive)."""

    wanted = name.lower()
    for match in _ATTRIBUTE_RE.finditer(tag_text):
        if match.group(1).lower() == wanted:
            return match
    return None


def attribute_value(match: re.Match[str]) -> str:
    for group in (2, 3, 4):
        value = match.group(group)
        if value is not None:
            return value
    return ""


def parse_attributes(tag_text: str) -> Dict[str, str]:
    attributes: Dict[str, str] = {}
    for match in _ATTRIBUTE_RE.finditer(tag_text):
        attributes.setdefault(match.group(1).lower(), attribute_value(match))
    return attributes


def numeric_placeholder(value: str) -> Optional[int]:
    """Parse ``"3"`` or ``"[3]"`` into ``3``; anything else yields ``None``."""

    match = _NUMERIC_SRC_RE.fullmatch(value)
    if match is None:
        return None
    return int(match.group(1) or match.group(2))


__all__ = [
    "RawTag",
    "attribute_value",
    "find_attribute",
    "in_spans",
    "iter_img_tags",
    "iter_tags",
    "numeric_placeholder",
    "parse_attributes",
    "skip_spans",
]
