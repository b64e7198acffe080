"""Tests for config module."""

import pytest

from photo_reviewer.config import (
    PROVIDER_MODELS,
    Settings,
    select_provider,
)
from photo_reviewer.errors import ConfigurationError


class TestSelectProvider:
    """Tests for select_provider function."""

    def test_auto_with_only_openai_key(self) -> None:
        """Test auto picks openai when it is the only key."""
        credentials = {"anthropic": None, "openai": "sk-test", "google": None}
        assert select_provider("auto", credentials) == "openai"

    def test_auto_priority_order(self) -> None:
        """Test anthropic wins over openai and google."""
        credentials = {"anthropic": "a", "openai": "o", "google": "g"}
        assert select_provider("auto", credentials) == "anthropic"

    def test_auto_falls_through_to_google(self) -> None:
        credentials = {"anthropic": None, "openai": "", "google": "g"}
        assert select_provider("auto", credentials) == "google"

    def test_auto_without_keys_names_all_variables(self) -> None:
        """Test auto with no keys raises naming every expected variable."""
        with pytest.raises(ConfigurationError) as exc_info:
            select_provider("auto", {})

        message = str(exc_info.value)
        assert "ANTHROPIC_API_KEY" in message
        assert "OPENAI_API_KEY" in message
        assert "GOOGLE_API_KEY" in message

    def test_explicit_provider_skips_credential_check(self) -> None:
        """Test explicit provider is returned even without its key."""
        assert select_provider("google", {}) == "google"

    def test_explicit_provider_is_case_insensitive(self) -> None:
        assert select_provider("OpenAI", {}) == "openai"

    def test_unknown_provider(self) -> None:
        """Test unknown provider raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Unsupported provider"):
            select_provider("mistral", {"anthropic": "a"})


class TestSettings:
    """Tests for Settings."""

    def test_from_env_reads_credentials(self) -> None:
        """Test credentials and provider are read from the mapping."""
        environ = {
            "AI_PROVIDER": "Google",
            "GOOGLE_API_KEY": "g-key",
            "OPENAI_API_KEY": "",
        }
        settings = Settings.from_env(environ)

        assert settings.provider == "google"
        assert settings.get_credential("google") == "g-key"
        assert settings.get_credential("openai") is None
        assert settings.get_credential("anthropic") is None

    def test_from_env_defaults_to_auto(self) -> None:
        settings = Settings.from_env({})
        assert settings.provider == "auto"
        assert dict(settings.models) == PROVIDER_MODELS

    def test_explicit_provider_overrides_env(self) -> None:
        settings = Settings.from_env({"AI_PROVIDER": "google"}, provider="openai")
        assert settings.provider == "openai"

    def test_model_override(self) -> None:
        """Test --model replaces every provider's default model."""
        settings = Settings.from_env({}, model="custom-model")
        assert settings.get_model("anthropic") == "custom-model"
        assert settings.get_model("google") == "custom-model"

    def test_settings_are_immutable(self) -> None:
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.provider = "openai"  # type: ignore[misc]

    def test_from_env_uses_process_environment(self, monkeypatch) -> None:
        """Test that os.environ is used when no mapping is passed."""
        monkeypatch.setattr("photo_reviewer.config.load_dotenv", lambda: False)
        monkeypatch.delenv("AI_PROVIDER", raising=False)
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

        settings = Settings.from_env()

        assert settings.provider == "auto"
        assert settings.get_credential("openai") == "sk-env"
        assert select_provider(settings.provider, settings.credentials) == "openai"
