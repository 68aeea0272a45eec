"""Structural validation of author-supplied markup."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .models import ErrorKind, Tag, ValidationError, ValidationResult
from .scanning import in_spans, iter_tags, skip_spans

LOGGER = logging.getLogger(__name__)

SELF_CLOSING_TAGS = frozenset(
    {
        "img",
        "br",
        "hr",
        "input",
        "meta",
        "link",
        "area",
        "base",
        "col",
        "embed",
        "source",
        "track",
        "wbr",
    }
)
DEFAULT_SHORTCODE_LOOKBACK = 50


def offset_to_line_col(markup: str, offset: int) -> Tuple[int, int]:
    """Translate a character offset into a 1-based ``(line, column)`` pair."""

    offset = max(0, min(offset, len(markup)))
    line = markup.count("\n", 0, offset) + 1
    line_start = markup.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def _scan_tags(markup: str, spans: List[Tuple[int, int]]) -> List[Tag]:
    return [
        Tag(
            name=raw.name,
            opening_offset=raw.offset,
            is_closing=raw.is_closing,
            is_self_closing=raw.is_self_closing or raw.name in SELF_CLOSING_TAGS,
        )
        for raw in iter_tags(markup, spans)
    ]


def _check_balance(tags: List[Tag]) -> List[ValidationError]:
    errors: List[ValidationError] = []
    stack: List[Tuple[str, int]] = []

    for tag in tags:
        if tag.is_self_closing:
            continue
        if not tag.is_closing:
            stack.append((tag.name, tag.opening_offset))
            continue
        if not stack:
            errors.append(
                ValidationError(
                    ErrorKind.STRAY_CLOSING_TAG,
                    f"Closing tag </{tag.name}> has no matching opening tag",
                    tag.opening_offset,
                )
            )
            continue

        open_name, open_offset = stack.pop()
        if open_name == tag.name:
            continue

        errors.append(
            ValidationError(
                ErrorKind.MISMATCHED_TAG,
                f"Expected </{open_name}> but found </{tag.name}>",
                tag.opening_offset,
            )
        )
        # Recover: close the nearest matching ancestor so one slip does not
        # cascade into errors for the rest of the document.
        for depth in range(len(stack) - 1, -1, -1):
            if stack[depth][0] == tag.name:
                del stack[depth:]
                break
        else:
            stack.append((open_name, open_offset))

    for name, offset in stack:
        errors.append(
            ValidationError(ErrorKind.UNCLOSED_TAG, f"Tag <{name}> is never closed", offset)
        )
    return errors


def _inside_shortcode(markup: str, offset: int, lookback: int) -> bool:
    window = markup[max(0, offset - lookback) : offset]
    return window.rfind("[") > window.rfind("]")


def _check_tag_syntax(
    markup: str, start: int
) -> Optional[ValidationError]:
    quote: Optional[str] = None
    quote_offset = start
    previous = ""

    for position in range(start + 1, len(markup)):
        char = markup[position]
        if quote is not None:
            if char == quote:
                quote = None
                previous = char
            elif char == "\n":
                break
            continue
        if char in "\"'" and previous == "=":
            quote = char
            quote_offset = position
        elif char == ">":
            return None
        elif char in "<\n":
            return ValidationError(
                ErrorKind.MISSING_CLOSE_BRACKET,
                "Tag is missing its closing '>'",
                start,
            )
        if not char.isspace():
            previous = char

    if quote is not None:
        return ValidationError(
            ErrorKind.UNCLOSED_QUOTE,
            f"Attribute value opened with {quote} is never closed",
            quote_offset,
        )
    return ValidationError(
        ErrorKind.MISSING_CLOSE_BRACKET, "Tag is missing its closing '>'", start
    )


def _check_syntax(
    markup: str, spans: List[Tuple[int, int]], lookback: int
) -> List[ValidationError]:
    errors: List[ValidationError] = []
    position = markup.find("<")
    while position != -1:
        following = markup[position + 1 : position + 2]
        if (
            (following.isalpha() or following == "/")
            and not in_spans(position, spans)
            and not _inside_shortcode(markup, position, lookback)
        ):
            error = _check_tag_syntax(markup, position)
            if error is not None:
                errors.append(error)
        position = markup.find("<", position + 1)
    return errors


def validate_markup(
    markup: str, *, shortcode_lookback: int = DEFAULT_SHORTCODE_LOOKBACK
) -> ValidationResult:
    """Report unbalanced tags and malformed tag syntax in *markup*.

    The scan tolerates arbitrary input: malformed fragments become entries in
    the returned result instead of exceptions.
    """

    if not markup or not markup.strip():
        error = ValidationError(ErrorKind.EMPTY_CONTENT, "Content is empty")
        return ValidationResult(is_valid=False, errors=(error,))

    spans = skip_spans(markup)
    errors = _check_balance(_scan_tags(markup, spans))
    errors.extend(_check_syntax(markup, spans, shortcode_lookback))
    errors.sort(key=lambda error: error.position if error.position is not None else -1)

    LOGGER.debug("Validated %s characters of markup: %s errors", len(markup), len(errors))
    return ValidationResult(is_valid=not errors, errors=tuple(errors))


class TagBalanceValidator:
    """Validator bound to a configured shortcode lookback window."""

    def __init__(self, shortcode_lookback: int = DEFAULT_SHORTCODE_LOOKBACK) -> None:
        self.shortcode_lookback = max(shortcode_lookback, 0)

    def validate(self, markup: str) -> ValidationResult:
        return validate_markup(markup, shortcode_lookback=self.shortcode_lookback)


__all__ = [
    "SELF_CLOSING_TAGS",
    "TagBalanceValidator",
    "offset_to_line_col",
    "validate_markup",
]
