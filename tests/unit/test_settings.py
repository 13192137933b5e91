"""Unit tests for shelter.infra.fastapi.settings."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from shelter.infra.fastapi.settings import AppSettings, CORSSettings


class TestCORSSettings:
    @pytest.mark.unit
    def test_defaults(self) -> None:
        cors = CORSSettings()
        assert cors.allow_origins == ["*"]
        assert cors.allow_methods == ["*"]
        assert cors.allow_headers == ["*"]
        assert cors.allow_credentials is False
        assert cors.expose_headers == ["X-Request-ID", "Location"]

    @pytest.mark.unit
    def test_parse_comma_separated_string(self) -> None:
        cors = CORSSettings(allow_origins="http://a.com, http://b.com")  # type: ignore[arg-type]
        assert cors.allow_origins == ["http://a.com", "http://b.com"]

    @pytest.mark.unit
    def test_parse_list_passthrough(self) -> None:
        cors = CORSSettings(allow_origins=["http://a.com"])
        assert cors.allow_origins == ["http://a.com"]

    @pytest.mark.unit
    def test_credentials_with_wildcard_rejected(self) -> None:
        with pytest.raises(ValueError, match="allow_credentials"):
            CORSSettings(allow_credentials=True)

    @pytest.mark.unit
    def test_comma_separated_env_var(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.com,http://b.com")
        assert CORSSettings().allow_origins == ["http://a.com", "http://b.com"]

    @pytest.mark.unit
    def test_credentials_with_explicit_origins(self) -> None:
        cors = CORSSettings(allow_credentials=True, allow_origins=["http://a.com"])
        assert cors.allow_credentials is True


class TestAppSettings:
    @pytest.mark.unit
    def test_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = AppSettings()
        assert settings.title == "Shelter API"
        assert settings.version
        assert settings.docs_url == "/docs"
        assert settings.openapi_url == "/openapi.json"
        assert settings.debug is False
        assert settings.host == "127.0.0.1"
        assert settings.port == 8000

    @pytest.mark.unit
    def test_custom_values(self) -> None:
        settings = AppSettings(title="Custom", version="2.0.0", debug=True)
        assert settings.title == "Custom"
        assert settings.version == "2.0.0"
        assert settings.debug is True

    @pytest.mark.unit
    def test_from_env_vars(self) -> None:
        env = {"APP_TITLE": "Shelter (staging)", "APP_PORT": "9000", "APP_HOST": "0.0.0.0"}
        with patch.dict("os.environ", env, clear=True):
            settings = AppSettings()
        assert settings.title == "Shelter (staging)"
        assert settings.port == 9000
        assert settings.host == "0.0.0.0"

    @pytest.mark.unit
    def test_port_bounds(self) -> None:
        with pytest.raises(ValueError):
            AppSettings(port=0)

    @pytest.mark.unit
    def test_cors_nested_default(self) -> None:
        settings = AppSettings()
        assert isinstance(settings.cors, CORSSettings)
        assert settings.cors.allow_origins == ["*"]
