"""Shared fixtures for the content engine test-suite."""
from __future__ import annotations

import os
import tempfile
from datetime import date
from pathlib import Path

import pytest

# Keep the JSON audit log out of the working tree when the app is imported.
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "content-engine-test-logs"))

from content_engine.engine import AssetRecord, ImportedMetadataRecord, UrlTemplate  # noqa: E402


@pytest.fixture
def template() -> UrlTemplate:
    return UrlTemplate(
        base_path="https://cdn.example.com/wp-content/uploads/",
        prefix="acme-",
        file_suffix="-scaled",
    )


@pytest.fixture
def publish_date() -> date:
    return date(2024, 5, 1)


def make_asset(filename: str, url: str | None = None) -> AssetRecord:
    return AssetRecord(
        url=url or f"https://storage.example.com/uploads/{filename}",
        filename=filename,
        size_bytes=1024,
        uploaded_at="2024-05-01T10:00:00Z",
    )


def make_metadata(order: int, file_name: str | None = None, **fields: str) -> ImportedMetadataRecord:
    return ImportedMetadataRecord(order=order, file_name=file_name, **fields)
