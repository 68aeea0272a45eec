import pytest

from content_engine.engine import UrlTemplate
from content_engine.settings import EngineSettings, get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CONTENT_BASE_PATH", "TAXONOMY_TAGS", "SHORTCODE_LOOKBACK", "ENVIRONMENT", "LOG_DIR", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings == EngineSettings()
    assert settings.default_template is None


def test_reads_template_and_tags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONTENT_BASE_PATH", "https://cdn.example.com/uploads/")
    monkeypatch.setenv("CONTENT_PREFIX", "acme-")
    monkeypatch.setenv("CONTENT_FILE_SUFFIX", "-scaled")
    monkeypatch.setenv("TAXONOMY_TAGS", " Roofing, Siding ,,")
    monkeypatch.setenv("ENVIRONMENT", "Production")
    monkeypatch.delenv("LOG_LEVEL", raising=False)

    settings = EngineSettings.from_env()

    assert settings.default_template == UrlTemplate("https://cdn.example.com/uploads/", "acme-", "-scaled")
    assert settings.taxonomy_tags == ("Roofing", "Siding")
    assert settings.environment == "production"
    assert settings.log_level == "INFO"


def test_invalid_lookback_falls_back(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
    monkeypatch.setenv("SHORTCODE_LOOKBACK", "lots")

    with caplog.at_level("WARNING", logger="content_engine.settings"):
        settings = EngineSettings.from_env()

    assert settings.shortcode_lookback == 50
    assert "SHORTCODE_LOOKBACK" in caplog.text


def test_explicit_log_level_and_directory(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("ENVIRONMENT", "development")
    monkeypatch.setenv("LOG_LEVEL", " warning ")
    monkeypatch.setenv("LOG_DIR", str(tmp_path))

    settings = EngineSettings.from_env()

    assert settings.log_level == "WARNING"
    assert settings.log_dir == str(tmp_path)
