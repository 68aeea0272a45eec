"""API router exposing the reconciliation engine to the editor and preview UI."""
from __future__ import annotations

import dataclasses
import datetime as dt
import time
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from content_engine.engine import (
    AssetRecord,
    ImportedMetadataRecord,
    ReadinessReport,
    ReconciliationOrchestrator,
    UrlTemplate,
    build_url,
    encode_placeholders,
    extract_stem,
    offset_to_line_col,
    parse_metadata_text,
)
from content_engine.errors import TemplateContractError
from content_engine.settings import EngineSettings, get_settings
from content_engine.telemetry import emit_exception, emit_readiness_event

router = APIRouter(tags=["readiness"])


class TemplatePayload(BaseModel):
    """Tenant naming template; ``base_path`` ends with ``/``, ``file_suffix`` starts with ``-``."""

    base_path: Optional[str] = Field(None, alias="basePath")
    prefix: Optional[str] = None
    file_suffix: Optional[str] = Field(None, alias="fileSuffix")

    model_config = ConfigDict(populate_by_name=True)


class AssetPayload(BaseModel):
    url: str
    filename: str
    size_bytes: int = Field(0, ge=0)
    uploaded_at: str = ""
    alt: Optional[str] = None
    title: Optional[str] = None


class MetadataPayload(BaseModel):
    order: int = Field(..., ge=1)
    file_name: Optional[str] = None
    alt_text: Optional[str] = None
    search_title: Optional[str] = None
    image_url: Optional[str] = None


class ReadinessRequest(BaseModel):
    """Request body accepted by the readiness endpoint."""

    markup: str = Field("", description="Markup currently held by the editor.")
    assets: list[AssetPayload] = Field(default_factory=list, description="Uploads in upload order.")
    metadata: list[MetadataPayload] = Field(default_factory=list)
    template: Optional[TemplatePayload] = Field(
        None, description="Naming template; the configured default is used when omitted."
    )
    taxonomy_tags: Optional[list[str]] = None
    featured_url: Optional[str] = None
    date: Optional[dt.date] = Field(None, description="Publication date; defaults to today.")


class ParseMetadataRequest(BaseModel):
    text: str = Field(..., description="Text pasted from the authored document.")


class EncodeRequest(BaseModel):
    markup: str


class EncodeResponse(BaseModel):
    numbered_markup: str
    original_urls: list[str]


class BuildUrlRequest(BaseModel):
    filename: str = Field(..., min_length=1)
    template: Optional[TemplatePayload] = None
    date: Optional[dt.date] = None


class StemRequest(BaseModel):
    url: str
    template: Optional[TemplatePayload] = None


def _resolve_template(payload: Optional[TemplatePayload], settings: EngineSettings) -> UrlTemplate:
    if payload is None:
        if settings.default_template is None:
            raise TemplateContractError("No naming template supplied or configured", field="template")
        return settings.default_template
    return UrlTemplate.from_mapping(payload.model_dump(exclude_none=True))


def _contract_error(error: TemplateContractError) -> HTTPException:
    emit_exception(
        module=__name__,
        error=error,
        suggestion="Check the tenant's base path, prefix and file suffix",
    )
    return HTTPException(status_code=422, detail=str(error))


def _audit_report(request: ReadinessRequest, report: ReadinessReport, duration_ms: float) -> None:
    url_consistency = report.url_consistency
    emit_readiness_event(
        markup_chars=len(request.markup),
        assets=len(request.assets),
        metadata_records=len(request.metadata),
        errors=len(report.validation.errors),
        pending_placeholders=report.placeholders.count,
        url_mismatches=url_consistency.mismatch_count if url_consistency else None,
        link_issue=report.links.has_issue,
        taxonomy_category=report.taxonomy.found_category,
        ready=report.is_ready,
        duration_ms=duration_ms,
    )


def _serialise_report(markup: str, report: ReadinessReport) -> dict[str, Any]:
    payload = dataclasses.asdict(report)
    payload["is_ready"] = report.is_ready
    for error in payload["validation"]["errors"]:
        if error["position"] is None:
            error["line"] = error["column"] = None
        else:
            error["line"], error["column"] = offset_to_line_col(markup, error["position"])
    return payload


@router.post("/readiness")
def readiness(
    request: ReadinessRequest,
    settings: EngineSettings = Depends(get_settings),
) -> dict[str, Any]:
    """Return the readiness report, reordered assets and metadata mapping."""

    try:
        template = _resolve_template(request.template, settings)
    except TemplateContractError as exc:
        raise _contract_error(exc) from exc

    taxonomy_tags = request.taxonomy_tags
    if taxonomy_tags is None:
        taxonomy_tags = list(settings.taxonomy_tags)

    started = time.perf_counter()
    orchestrator = ReconciliationOrchestrator(settings.shortcode_lookback)
    report = orchestrator.build(
        request.markup,
        [AssetRecord(**asset.model_dump()) for asset in request.assets],
        [ImportedMetadataRecord(**record.model_dump()) for record in request.metadata],
        template,
        taxonomy_tags,
        request.featured_url,
        request.date or dt.date.today(),
    )
    _audit_report(request, report, (time.perf_counter() - started) * 1000.0)
    return _serialise_report(request.markup, report)


@router.post("/metadata/parse", response_model=list[MetadataPayload])
def parse_metadata(request: ParseMetadataRequest) -> list[MetadataPayload]:
    """Parse pasted image metadata blocks into ordered records."""

    records = parse_metadata_text(request.text)
    if not records:
        raise HTTPException(status_code=422, detail="No image information found")
    return [MetadataPayload(**dataclasses.asdict(record)) for record in records]


@router.post("/placeholders/encode", response_model=EncodeResponse)
def encode(request: EncodeRequest) -> EncodeResponse:
    """Swap image URLs for numbered placeholders."""

    encoded = encode_placeholders(request.markup)
    return EncodeResponse(
        numbered_markup=encoded.numbered_markup,
        original_urls=list(encoded.original_urls),
    )


@router.post("/urls/build")
def build_deployment_url(
    request: BuildUrlRequest,
    settings: EngineSettings = Depends(get_settings),
) -> dict[str, str]:
    try:
        template = _resolve_template(request.template, settings)
    except TemplateContractError as exc:
        raise _contract_error(exc) from exc
    return {"url": build_url(request.filename, template, request.date or dt.date.today())}


@router.post("/urls/stem")
def url_stem(
    request: StemRequest,
    settings: EngineSettings = Depends(get_settings),
) -> dict[str, Optional[str]]:
    try:
        template = _resolve_template(request.template, settings)
    except TemplateContractError as exc:
        raise _contract_error(exc) from exc
    return {"stem": extract_stem(request.url, template)}
