"""Composition of every check into a single content readiness report."""
from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Optional, Sequence

from ..errors import TemplateContractError
from ..telemetry import traced_duration
from .consistency import check_placeholder_presence, check_url_consistency
from .links import scan_links
from .matching import apply_metadata, match_metadata
from .models import AssetRecord, ImportedMetadataRecord, ReadinessReport
from .ordering import resolve_order
from .tag_balance import DEFAULT_SHORTCODE_LOOKBACK, TagBalanceValidator
from .taxonomy import check_taxonomy
from .url_template import UrlTemplate

LOGGER = logging.getLogger(__name__)


class ReconciliationOrchestrator:
    """Runs validation, reconciliation and integrity checks over one document."""

    def __init__(self, shortcode_lookback: int = DEFAULT_SHORTCODE_LOOKBACK) -> None:
        self.validator = TagBalanceValidator(shortcode_lookback)

    def build(
        self,
        markup: str,
        assets: Sequence[AssetRecord],
        metadata: Sequence[ImportedMetadataRecord],
        template: Optional[UrlTemplate],
        taxonomy_tags: Iterable[str],
        featured_url: Optional[str],
        on_date: date,
    ) -> ReadinessReport:
        """Return the readiness report for *markup* and its assets.

        The naming template is checked before anything else runs; a broken
        template raises :class:`TemplateContractError`. Everything else is
        reported inside the returned value. ``ordered_assets`` carry the alt
        text and search title of their matched metadata record.
        """

        if template is None:
            raise TemplateContractError("A naming template is required", field="template")
        template.require_complete()
        template.warn_on_contract()

        markup = markup or ""
        assets = list(assets or ())
        metadata = list(metadata or ())

        with traced_duration("readiness.build", logger=LOGGER, assets=len(assets)):
            validation = self.validator.validate(markup)
            placeholders = check_placeholder_presence(markup)
            url_consistency = None
            if not placeholders.has_pending:
                url_consistency = check_url_consistency(
                    markup, assets, featured_url, template, on_date
                )
            mappings = match_metadata(assets, metadata, markup)
            annotated = apply_metadata(assets, metadata, mappings)
            return ReadinessReport(
                validation=validation,
                placeholders=placeholders,
                url_consistency=url_consistency,
                links=scan_links(markup),
                taxonomy=check_taxonomy(markup, list(taxonomy_tags or ())),
                ordered_assets=tuple(resolve_order(markup, annotated, featured_url)),
                mappings=tuple(mappings),
            )


def build_report(
    markup: str,
    assets: Sequence[AssetRecord],
    metadata: Sequence[ImportedMetadataRecord],
    template: Optional[UrlTemplate],
    taxonomy_tags: Iterable[str],
    featured_url: Optional[str],
    on_date: date,
) -> ReadinessReport:
    """Convenience wrapper using the default validator settings."""

    return ReconciliationOrchestrator().build(
        markup, assets, metadata, template, taxonomy_tags, featured_url, on_date
    )


__all__ = ["ReconciliationOrchestrator", "build_report"]
