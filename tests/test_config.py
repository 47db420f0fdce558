"""Tests for configuration loading and validation."""

import pytest

from jaeger_assist.config import LLMConfig, Settings, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ANTHROPIC_API_KEY", "LLM_PROVIDER", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_default_settings(self):
        settings = Settings()
        assert settings.llm.provider == "mock"
        assert settings.llm.temperature == 0.0
        assert settings.llm.query_max_tokens == 500
        assert settings.llm.explain_max_tokens == 800
        assert settings.logging.level == "INFO"

    def test_custom_settings(self):
        settings = Settings(
            llm=LLMConfig(provider="anthropic", model="custom-model"),
            anthropic_api_key="sk-test",
        )
        assert settings.llm.provider == "anthropic"
        assert settings.llm.model == "custom-model"
        assert settings.anthropic_api_key == "sk-test"


class TestLoadConfig:
    def test_load_default_config(self):
        settings = load_config()
        assert isinstance(settings, Settings)
        assert settings.llm.provider == "mock"

    def test_load_missing_config(self, tmp_path):
        settings = load_config(tmp_path / "nonexistent.yaml")
        assert isinstance(settings, Settings)

    def test_load_custom_config(self, tmp_path):
        config_file = tmp_path / "test.yaml"
        config_file.write_text("llm:\n  provider: anthropic\n  query_max_tokens: 256\n")
        settings = load_config(config_file)
        assert settings.llm.provider == "anthropic"
        assert settings.llm.query_max_tokens == 256

    def test_env_var_override(self, monkeypatch, tmp_path):
        config_file = tmp_path / "test.yaml"
        config_file.write_text("llm:\n  provider: mock\n")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-from-env")
        monkeypatch.setenv("LLM_PROVIDER", "anthropic")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        settings = load_config(config_file)
        assert settings.anthropic_api_key == "sk-from-env"
        assert settings.llm.provider == "anthropic"
        assert settings.logging.level == "DEBUG"
