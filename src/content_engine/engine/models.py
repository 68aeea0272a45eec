"""Data models shared by the reconciliation engine."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ErrorKind(str, Enum):
    """Structural problems reported by the tag balance validator."""

    UNCLOSED_TAG = "UnclosedTag"
    MISMATCHED_TAG = "MismatchedTag"
    UNCLOSED_QUOTE = "UnclosedQuote"
    MISSING_CLOSE_BRACKET = "MissingCloseBracket"
    STRAY_CLOSING_TAG = "StrayClosingTag"
    EMPTY_CONTENT = "EmptyContent"


class MatchType(str, Enum):
    """How an imported metadata record was bound to an uploaded asset."""

    FEATURED = "featured"
    PLACEHOLDER = "placeholder"
    ORDER = "order"


@dataclass(slots=True, frozen=True)
class Tag:
    """A tag encountered while scanning markup."""

    name: str
    opening_offset: int
    is_closing: bool
    is_self_closing: bool


@dataclass(slots=True, frozen=True)
class ValidationError:
    """A single structural diagnostic positioned in the markup."""

    kind: ErrorKind
    message: str
    position: Optional[int] = None


@dataclass(slots=True, frozen=True)
class ValidationResult:
    is_valid: bool
    errors: Tuple[ValidationError, ...]


@dataclass(slots=True, frozen=True)
class AssetRecord:
    """An uploaded asset as supplied by the storage collaborator."""

    url: str
    filename: str
    size_bytes: int = 0
    uploaded_at: str = ""
    alt: Optional[str] = None
    title: Optional[str] = None
    doc_order: Optional[int] = None


@dataclass(slots=True, frozen=True)
class ImportedMetadataRecord:
    """Image metadata imported from an externally authored document.

    ``order`` is 1-based and ``order == 1`` describes the featured asset.
    """

    order: int
    file_name: Optional[str] = None
    alt_text: Optional[str] = None
    search_title: Optional[str] = None
    image_url: Optional[str] = None


@dataclass(slots=True, frozen=True)
class AssetMapping:
    asset_index: int
    metadata_index: int
    match_type: MatchType


@dataclass(slots=True, frozen=True)
class EncodedMarkup:
    numbered_markup: str
    original_urls: Tuple[str, ...]


@dataclass(slots=True, frozen=True)
class PlaceholderStatus:
    """Number of ``<img>`` tags still waiting for a production URL."""

    has_pending: bool
    count: int


@dataclass(slots=True, frozen=True)
class UrlConsistency:
    all_match: bool
    mismatch_count: int
    missing_urls: Tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class LinkScanResult:
    has_issue: bool
    first_offending_offset: Optional[int]
    offending_offsets: Tuple[int, ...] = ()


@dataclass(slots=True, frozen=True)
class TaxonomyResult:
    """Outcome of checking a shortcode category against the allow-list.

    ``found_category`` is ``None`` when no shortcode is present and ``""`` when
    the shortcode carries no category.
    """

    matches: bool
    found_category: Optional[str]


@dataclass(slots=True, frozen=True)
class ReadinessReport:
    """Combined, read-only result of one reconciliation run."""

    validation: ValidationResult
    placeholders: PlaceholderStatus
    url_consistency: Optional[UrlConsistency]
    links: LinkScanResult
    taxonomy: TaxonomyResult
    ordered_assets: Tuple[AssetRecord, ...]
    mappings: Tuple[AssetMapping, ...]

    @property
    def is_ready(self) -> bool:
        if not self.validation.is_valid or self.placeholders.has_pending:
            return False
        if self.url_consistency is not None and not self.url_consistency.all_match:
            return False
        if self.links.has_issue:
            return False
        if self.taxonomy.found_category is not None and not self.taxonomy.matches:
            return False
        return True
