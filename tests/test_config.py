import pytest

from gateway.config import load_settings


def test_defaults(monkeypatch):
    monkeypatch.setenv("RENDER_API_BASE_URL", "http://render-api.test")
    for key in ("PORT", "SERVICE_PORT", "RENDER_API_GENERATE_PATH", "MAX_OBJECT_WIDTH_MM", "MAX_OBJECT_HEIGHT_MM", "GATEWAY_DEBUG_PAYLOAD"):
        monkeypatch.delenv(key, raising=False)

    settings = load_settings()

    assert settings.SERVICE_PORT == 9100
    assert settings.RENDER_API_GENERATE_PATH == "/api/vector/generate"
    assert settings.MAX_OBJECT_WIDTH_MM == 210
    assert settings.MAX_OBJECT_HEIGHT_MM == 74.25
    assert settings.DEBUG_PAYLOAD is False


def test_missing_base_url(monkeypatch):
    monkeypatch.delenv("RENDER_API_BASE_URL", raising=False)
    with pytest.raises(RuntimeError, match="RENDER_API_BASE_URL"):
        load_settings()


def test_invalid_numbers(monkeypatch):
    monkeypatch.setenv("RENDER_API_BASE_URL", "http://render-api.test")
    monkeypatch.setenv("SERVICE_PORT", "abc")
    monkeypatch.delenv("PORT", raising=False)
    with pytest.raises(RuntimeError, match="SERVICE_PORT"):
        load_settings()

    monkeypatch.setenv("SERVICE_PORT", "9100")
    monkeypatch.setenv("RENDER_API_TIMEOUT_S", "soon")
    with pytest.raises(RuntimeError, match="RENDER_API_TIMEOUT_S"):
        load_settings()
