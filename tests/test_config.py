"""Tests for settings loading and the default provider factory."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest

from llm_fallback import (
    DEFAULT_PROVIDER_ORDER,
    GeminiProvider,
    OpenRouterProvider,
    ProviderRegistry,
    ProviderSettings,
    build_default_providers,
    configure_logging,
    default_registry,
)
from llm_fallback.config import load_env, parse_provider_order


class TestProviderSettings:
    def test_defaults_from_empty_mapping(self) -> None:
        settings = ProviderSettings.from_env({})
        assert settings.openrouter_api_key == ""
        assert settings.provider_order == DEFAULT_PROVIDER_ORDER
        assert settings.request_timeout == 90.0
        assert settings.site_url == "http://localhost:3000"
        assert settings.openrouter_model is None

    def test_reads_explicit_mapping(self) -> None:
        settings = ProviderSettings.from_env(
            {
                "OPENROUTER_API_KEY": "or",
                "GEMINI_API_KEY": "gm",
                "GEMINI_MODEL": "gemini-2.0-flash",
                "OPENROUTER_SITE_NAME": "Docs Bot",
                "LLM_REQUEST_TIMEOUT": "15",
                "LLM_PROVIDER_ORDER": " Gemini , openrouter ",
            }
        )
        assert settings.openrouter_api_key == "or"
        assert settings.gemini_model == "gemini-2.0-flash"
        assert settings.site_name == "Docs Bot"
        assert settings.request_timeout == 15.0
        assert settings.provider_order == ("gemini", "openrouter")
        assert settings.keys_present() == {
            "openrouter": True,
            "huggingface": False,
            "nvidia": False,
            "gemini": True,
        }

    def test_mapping_does_not_load_dotenv(self) -> None:
        with patch("llm_fallback.config.load_dotenv") as loader:
            ProviderSettings.from_env({})
        loader.assert_not_called()

    @pytest.mark.parametrize("value", ["soon", "0", "-3"])
    def test_invalid_timeout(self, value: str) -> None:
        with pytest.raises(ValueError, match="LLM_REQUEST_TIMEOUT"):
            ProviderSettings.from_env({"LLM_REQUEST_TIMEOUT": value})

    def test_loads_dotenv_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NVIDIA_API_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("NVIDIA_API_KEY=from-dotenv\n", encoding="utf-8")
        try:
            settings = ProviderSettings.from_env(dotenv_path=str(env_file))
        finally:
            os.environ.pop("NVIDIA_API_KEY", None)
        assert settings.nvidia_api_key == "from-dotenv"

    def test_never_logs_key_values(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="llm_fallback.config"):
            ProviderSettings.from_env({"OPENROUTER_API_KEY": "sk-secret"})
        assert "API keys available" in caplog.text
        assert "sk-secret" not in caplog.text


class TestHelpers:
    def test_load_env_reads_mapping_with_default(self) -> None:
        assert load_env("FOO", default="bar", environ={}) == "bar"
        assert load_env("FOO", environ={"FOO": "set"}) == "set"
        assert load_env("FOO", environ={}) is None

    def test_parse_provider_order_blank_uses_default(self) -> None:
        assert parse_provider_order("  ") == DEFAULT_PROVIDER_ORDER
        assert parse_provider_order("nvidia,,gemini") == ("nvidia", "gemini")

    def test_configure_logging_reads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        with patch("logging.basicConfig") as basic_config:
            configure_logging()
        basic_config.assert_called_once_with(level=logging.DEBUG)

    def test_configure_logging_unknown_level_falls_back_to_info(self) -> None:
        with patch("logging.basicConfig") as basic_config:
            configure_logging("chatty")
        basic_config.assert_called_once_with(level=logging.INFO)


class TestDefaultProviders:
    def test_default_order(self) -> None:
        providers = build_default_providers(ProviderSettings())
        assert [p.name for p in providers] == ["openrouter", "huggingface", "nvidia", "gemini"]

    def test_settings_flow_into_providers(self) -> None:
        settings = ProviderSettings(
            openrouter_api_key="or",
            openrouter_model="meta/llama-3-8b",
            site_url="https://docs.example",
            request_timeout=30.0,
            provider_order=("openrouter", "gemini"),
        )
        openrouter, gemini = build_default_providers(settings)

        assert isinstance(openrouter, OpenRouterProvider)
        assert openrouter.api_key == "or"
        assert openrouter.default_model == "meta/llama-3-8b"
        assert openrouter.site_url == "https://docs.example"
        assert openrouter.timeout == 30.0
        assert isinstance(gemini, GeminiProvider)
        assert gemini.default_model == "gemini-1.5-flash"
        assert gemini.is_available() is False

    def test_model_override_does_not_leak_between_instances(self) -> None:
        custom = OpenRouterProvider("k", model="custom/model")
        plain = OpenRouterProvider("k")
        assert custom.default_model == "custom/model"
        assert plain.default_model == "mistralai/mistral-7b-instruct:free"

    def test_unknown_provider_name(self) -> None:
        settings = ProviderSettings(provider_order=("openrouter", "anthropic"))
        with pytest.raises(ValueError, match="Unknown provider 'anthropic'"):
            build_default_providers(settings)

    def test_custom_registry(self) -> None:
        registry = ProviderRegistry()
        registry.register("Local", lambda s: GeminiProvider("local-key", base_url="http://localhost:9000"))
        settings = ProviderSettings(provider_order=("local",))

        (provider,) = build_default_providers(settings, registry)

        assert provider.base_url == "http://localhost:9000"
        assert "LOCAL" in registry
        assert list(registry.names()) == ["local"]

    def test_default_registry_names(self) -> None:
        registry = default_registry()
        assert set(registry.names()) == set(DEFAULT_PROVIDER_ORDER)
        assert registry.get("missing") is None
