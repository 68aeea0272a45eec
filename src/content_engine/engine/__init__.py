"""Content integrity and asset reconciliation engine.

Every function here is a pure transform over the supplied markup, assets and
configuration; nothing performs network, file or database I/O.
"""

from .consistency import check_placeholder_presence, check_url_consistency
from .links import scan_links
from .matching import apply_metadata, match_metadata
from .metadata_parser import parse_metadata_text
from .models import (
    AssetMapping,
    AssetRecord,
    EncodedMarkup,
    ErrorKind,
    ImportedMetadataRecord,
    LinkScanResult,
    MatchType,
    PlaceholderStatus,
    ReadinessReport,
    TaxonomyResult,
    UrlConsistency,
    ValidationError,
    ValidationResult,
)
from .orchestrator import ReconciliationOrchestrator, build_report
from .ordering import resolve_order
from .placeholders import encode_placeholders, extract_placeholder_numbers
from .tag_balance import TagBalanceValidator, offset_to_line_col, validate_markup
from .taxonomy import check_taxonomy
from .url_template import UrlTemplate, build_url, extract_stem, filename_stem

__all__ = [
    "AssetMapping",
    "AssetRecord",
    "EncodedMarkup",
    "ErrorKind",
    "ImportedMetadataRecord",
    "LinkScanResult",
    "MatchType",
    "PlaceholderStatus",
    "ReadinessReport",
    "ReconciliationOrchestrator",
    "TagBalanceValidator",
    "TaxonomyResult",
    "UrlConsistency",
    "UrlTemplate",
    "ValidationError",
    "ValidationResult",
    "apply_metadata",
    "build_report",
    "build_url",
    "check_placeholder_presence",
    "check_taxonomy",
    "check_url_consistency",
    "encode_placeholders",
    "extract_placeholder_numbers",
    "extract_stem",
    "filename_stem",
    "match_metadata",
    "offset_to_line_col",
    "parse_metadata_text",
    "resolve_order",
    "scan_links",
    "validate_markup",
]
