"""Testes das settings (base e gateway)."""

from __future__ import annotations

from pathlib import Path

import pytest

from config.settings import (
    BaseSettings,
    GatewaySettings,
    get_base_settings,
    get_gateway_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_base_settings.cache_clear()
    get_gateway_settings.cache_clear()
    yield
    get_base_settings.cache_clear()
    get_gateway_settings.cache_clear()


class TestBaseSettings:
    def test_defaults_are_valid(self) -> None:
        settings = BaseSettings()
        assert settings.validate() == []
        assert settings.is_development is True

    def test_invalid_values_are_reported(self) -> None:
        errors = BaseSettings(service_name="", log_level="LOUD").validate()
        assert len(errors) == 2

    def test_environment_aliases(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "prod")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = get_base_settings()

        assert settings.is_production is True
        assert settings.log_level == "DEBUG"


class TestGatewaySettings:
    def test_defaults_need_connector(self) -> None:
        errors = GatewaySettings().validate()
        assert errors == ["GATEWAY_PROVIDER_CONNECTOR não configurado"]

    def test_connector_must_be_import_path(self) -> None:
        errors = GatewaySettings(provider_connector="module_only").validate()
        assert "formato 'modulo:atributo'" in errors[0]

    def test_limits_are_validated(self) -> None:
        settings = GatewaySettings(
            provider_connector="pkg.mod:connect",
            webhook_timeout_seconds=0,
            webhook_max_concurrency=0,
            event_queue_size=0,
            store_backend="redis",  # type: ignore[arg-type]
        )
        assert len(settings.validate()) == 4

    def test_loads_from_env(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("GATEWAY_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("GATEWAY_WEBHOOKS_FILE", str(tmp_path / "hooks.json"))
        monkeypatch.setenv("GATEWAY_PROVIDER_CONNECTOR", "pkg.mod:connect")
        monkeypatch.setenv("GATEWAY_STORE_BACKEND", "MEMORY")
        monkeypatch.setenv("GATEWAY_REJECT_CALLS", "false")
        monkeypatch.setenv("GATEWAY_MAX_CONCURRENT_BATCHES", "3")

        settings = get_gateway_settings()

        assert settings.chats_file == tmp_path / "whatsapp_data.json"
        assert settings.webhooks_file == tmp_path / "hooks.json"
        assert settings.credentials_file == tmp_path / "auth_info" / "creds.json"
        assert settings.store_backend == "memory"
        assert settings.reject_calls is False
        assert settings.max_concurrent_batches == 3
        assert settings.validate() == []
