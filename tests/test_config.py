from unittest.mock import patch

import pytest
from pydantic import ValidationError

from solar_lead_relay.config import Settings, load_settings

ENV_VARS = [
    "GOOGLE_API_KEY",
    "N8N_WEBHOOK_URL",
    "ALLOWED_ORIGINS",
    "PORT",
    "SOLAR_REQUIRED_QUALITY",
    "OUTBOUND_TIMEOUT_SECONDS",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    with patch("solar_lead_relay.config.load_dotenv"):
        yield monkeypatch


class TestLoadSettings:

    def test_defaults(self, clean_env):
        settings = load_settings()
        assert settings.google_api_key is None
        assert settings.n8n_webhook_url is None
        assert settings.allowed_origins == ["*"]
        assert settings.port == 3000
        assert settings.solar_required_quality == "HIGH"
        assert settings.outbound_timeout is None
        assert settings.log_level == "INFO"

    def test_reads_environment(self, clean_env):
        clean_env.setenv("GOOGLE_API_KEY", "abc123")
        clean_env.setenv("N8N_WEBHOOK_URL", "https://n8n.example.com/webhook/x")
        clean_env.setenv("ALLOWED_ORIGINS", "https://a.example.com, https://b.example.com,")
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("SOLAR_REQUIRED_QUALITY", "MEDIUM")
        clean_env.setenv("OUTBOUND_TIMEOUT_SECONDS", "2.5")

        settings = load_settings()

        assert settings.google_api_key == "abc123"
        assert settings.n8n_webhook_url == "https://n8n.example.com/webhook/x"
        assert settings.allowed_origins == ["https://a.example.com", "https://b.example.com"]
        assert settings.port == 8080
        assert settings.solar_required_quality == "MEDIUM"
        assert settings.outbound_timeout == 2.5

    def test_blank_values_count_as_unset(self, clean_env):
        clean_env.setenv("GOOGLE_API_KEY", "   ")
        clean_env.setenv("PORT", "")

        settings = load_settings()

        assert settings.google_api_key is None
        assert settings.port == 3000

    def test_invalid_port_fails_at_startup(self, clean_env):
        clean_env.setenv("PORT", "eighty")
        with pytest.raises(ValidationError):
            load_settings()


def test_settings_are_immutable():
    settings = Settings(google_api_key="abc")
    with pytest.raises(ValidationError):
        settings.google_api_key = "other"


class TestLogLevel:

    def test_lowercase_name_is_normalized(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")
        assert load_settings().log_level == "DEBUG"

    @pytest.mark.parametrize("level", ["verbose", "loud", "42"])
    def test_unknown_name_falls_back_to_info(self, clean_env, level):
        clean_env.setenv("LOG_LEVEL", level)
        assert load_settings().log_level == "INFO"
