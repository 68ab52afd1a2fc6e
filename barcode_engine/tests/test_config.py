import pytest

from barcode_engine.config import Settings

# barcode_engine/tests/test_config.py


@pytest.fixture
def set_env_vars(monkeypatch):
    monkeypatch.setenv("PROJECT_NAME", "test_project")
    monkeypatch.setenv("API_VERSION", "0.2.0")
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("LOG_DIRECTORY", "test_logs")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ROOT_PATH", "/api/v2")
    monkeypatch.setenv("BATCH_MAX_WORKERS", "4")
    monkeypatch.setenv("BATCH_MAX_ITEMS", "50")
    monkeypatch.setenv("MAX_UPLOAD_FILES", "2")
    monkeypatch.setenv("RENDER_IMAGES", "true")
    monkeypatch.setenv("RENDER_DPI", "300")


@pytest.mark.usefixtures("set_env_vars")
def test_settings():
    settings = Settings()
    assert settings.PROJECT_NAME == "test_project"
    assert settings.API_VERSION == "0.2.0"
    assert settings.ENVIRONMENT == "testing"
    assert settings.LOG_DIRECTORY == "test_logs"
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.ROOT_PATH == "/api/v2"
    assert settings.BATCH_MAX_WORKERS == 4
    assert settings.BATCH_MAX_ITEMS == 50
    assert settings.MAX_UPLOAD_FILES == 2
    assert settings.RENDER_IMAGES is True
    assert settings.RENDER_DPI == 300


def test_explicit_values_override_environment():
    settings = Settings(BATCH_MAX_WORKERS=8, RENDER_IMAGES=False)
    assert settings.BATCH_MAX_WORKERS == 8
    assert settings.RENDER_IMAGES is False
