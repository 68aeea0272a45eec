import pytest
from fastapi.testclient import TestClient

from content_engine.api import readiness as readiness_module
from content_engine.engine import UrlTemplate
from content_engine.main import app
from content_engine.settings import EngineSettings, get_settings

TEMPLATE = {
    "basePath": "https://cdn.example.com/wp-content/uploads/",
    "prefix": "acme-",
    "fileSuffix": "-scaled",
}


def _client_with_settings(settings: EngineSettings) -> TestClient:
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


def test_read_root_returns_ok() -> None:
    client = TestClient(app)
    response = client.get("/")
    assert response.status_code == 200
    assert response.text == "ok"


def test_healthz_returns_ok() -> None:
    response = TestClient(app).get("/healthz")

    assert response.status_code == 200
    assert response.text == "ok"


def test_readiness_returns_report_with_line_numbers() -> None:
    payload = {
        "markup": "<div>\n<p>x</div>",
        "assets": [
            {"url": "https://storage/dog.jpg", "filename": "dog.jpg"},
            {"url": "https://storage/cat.jpg", "filename": "cat.jpg"},
        ],
        "metadata": [{"order": 1, "file_name": "cat"}],
        "template": TEMPLATE,
        "taxonomy_tags": ["Roofing"],
        "date": "2024-05-01",
    }

    response = TestClient(app).post("/readiness", json=payload)

    assert response.status_code == 200
    body = response.json()
    assert body["is_ready"] is False
    error = body["validation"]["errors"][0]
    assert error["kind"] == "MismatchedTag"
    assert (error["line"], error["column"]) == (2, 5)
    assert body["mappings"] == [{"asset_index": 1, "metadata_index": 0, "match_type": "featured"}]
    assert body["url_consistency"]["mismatch_count"] == 2
    assert [asset["filename"] for asset in body["ordered_assets"]] == ["dog.jpg", "cat.jpg"]


def test_readiness_uses_configured_template_and_tags() -> None:
    settings = EngineSettings(
        default_template=UrlTemplate("https://cdn.example.com/", "", "-web"),
        taxonomy_tags=("Gutters",),
    )
    client = _client_with_settings(settings)
    try:
        response = client.post(
            "/readiness", json={"markup": '<p>Hi</p>[faqs category="gutters"]', "date": "2024-01-09"}
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    body = response.json()
    assert body["taxonomy"] == {"matches": True, "found_category": "gutters"}
    assert body["is_ready"] is True


def test_readiness_rejects_incomplete_template() -> None:
    client = _client_with_settings(EngineSettings())
    try:
        missing = client.post(
            "/readiness",
            json={"markup": "<p>x</p>", "template": {"basePath": "https://x.com/", "prefix": ""}},
        )
        unconfigured = client.post("/readiness", json={"markup": "<p>x</p>"})
    finally:
        app.dependency_overrides.clear()

    assert missing.status_code == 422
    assert "file_suffix" in missing.json()["detail"]
    assert unconfigured.status_code == 422


def test_parse_metadata_endpoint() -> None:
    client = TestClient(app)

    response = client.post(
        "/metadata/parse", json={"text": "IMAGE URL\na.jpg\nIMAGE ALT TEXT\nPorch at dusk"}
    )
    empty = client.post("/metadata/parse", json={"text": "nothing useful"})

    assert response.status_code == 200
    assert response.json() == [
        {
            "order": 1,
            "file_name": None,
            "alt_text": "Porch at dusk",
            "search_title": None,
            "image_url": "a.jpg",
        }
    ]
    assert empty.status_code == 422


def test_encode_endpoint() -> None:
    response = TestClient(app).post(
        "/placeholders/encode", json={"markup": '<img src="https://x/a.jpg"><img src="https://x/b.jpg">'}
    )

    assert response.status_code == 200
    assert response.json() == {
        "numbered_markup": '<img src="1"><img src="2">',
        "original_urls": ["https://x/a.jpg", "https://x/b.jpg"],
    }


def test_url_endpoints_round_trip() -> None:
    client = TestClient(app)

    built = client.post(
        "/urls/build", json={"filename": "Porch-800x600.jpg", "template": TEMPLATE, "date": "2024-05-01"}
    )
    url = built.json()["url"]
    stem = client.post("/urls/stem", json={"url": url, "template": TEMPLATE})

    assert url == "https://cdn.example.com/wp-content/uploads/2024/05/acme-Porch-scaled"
    assert stem.json() == {"stem": "porch"}


def test_readiness_writes_audit_summary(monkeypatch: pytest.MonkeyPatch) -> None:
    events: list[dict] = []
    monkeypatch.setattr(readiness_module, "emit_readiness_event", lambda **kwargs: events.append(kwargs))

    response = TestClient(app).post(
        "/readiness",
        json={
            "markup": '<p><img src="1" alt="Porch"></p>',
            "assets": [
                {"url": "https://storage/hero.jpg", "filename": "hero.jpg"},
                {"url": "https://storage/porch.jpg", "filename": "porch.jpg"},
            ],
            "featured_url": "https://storage/hero.jpg",
            "metadata": [
                {"order": 1, "file_name": "hero"},
                {"order": 2, "file_name": "porch", "alt_text": "Porch at dusk"},
            ],
            "template": TEMPLATE,
        },
    )

    assert response.status_code == 200
    ordered = {asset["filename"]: asset for asset in response.json()["ordered_assets"]}
    assert ordered["porch.jpg"]["alt"] == "Porch at dusk"
    assert ordered["hero.jpg"]["doc_order"] == 2
    assert len(events) == 1
    assert events[0]["pending_placeholders"] == 1
    assert events[0]["url_mismatches"] is None
    assert events[0]["metadata_records"] == 2
    assert events[0]["ready"] is False
    assert events[0]["duration_ms"] >= 0
