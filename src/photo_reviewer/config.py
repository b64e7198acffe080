"""Provider configuration, credential lookup and provider selection."""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from dotenv import load_dotenv

from photo_reviewer.errors import ConfigurationError

logger = logging.getLogger(__name__)

ANTHROPIC = "anthropic"
OPENAI = "openai"
GOOGLE = "google"
AUTO = "auto"

# Probe order used when the provider is "auto"
PROVIDER_PRIORITY = (ANTHROPIC, OPENAI, GOOGLE)

PROVIDER_CHOICES = (AUTO, *PROVIDER_PRIORITY)

PROVIDER_MODELS = {
    ANTHROPIC: "claude-3-5-sonnet-20241022",
    OPENAI: "gpt-4o",
    GOOGLE: "gemini-2.0-flash",
}

CREDENTIAL_ENV_VARS = {
    ANTHROPIC: "ANTHROPIC_API_KEY",
    OPENAI: "OPENAI_API_KEY",
    GOOGLE: "GOOGLE_API_KEY",
}

PROVIDER_ENV_VAR = "AI_PROVIDER"

MAX_TOKENS = 1024


@dataclass(frozen=True)
class Settings:
    """Immutable configuration for a single review run.

    Attributes:
        provider: Provider preference ("auto" or a provider id)
        models: Model name per provider id
        credentials: API key per provider id (None when absent)
        max_tokens: Completion token limit sent to the provider
    """

    provider: str = AUTO
    models: Mapping[str, str] = field(default_factory=lambda: dict(PROVIDER_MODELS))
    credentials: Mapping[str, str | None] = field(default_factory=dict)
    max_tokens: int = MAX_TOKENS

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        provider: str | None = None,
        model: str | None = None,
    ) -> "Settings":
        """Build settings from environment variables.

        Loads a .env file first when reading the real process environment.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            provider: Explicit provider preference, overrides AI_PROVIDER
            model: Model name that replaces the selected provider's default

        Returns:
            Settings instance
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        if provider is None:
            provider = environ.get(PROVIDER_ENV_VAR) or AUTO

        credentials = {
            name: environ.get(var) or None for name, var in CREDENTIAL_ENV_VARS.items()
        }

        models = dict(PROVIDER_MODELS)
        if model:
            # Same override for every provider; only the selected one is used
            models = {name: model for name in models}

        return cls(
            provider=provider.lower(),
            models=models,
            credentials=credentials,
        )

    def get_credential(self, provider: str) -> str | None:
        return self.credentials.get(provider) or None

    def get_model(self, provider: str) -> str:
        return self.models.get(provider, PROVIDER_MODELS[provider])


def select_provider(preference: str, credentials: Mapping[str, str | None]) -> str:
    """Choose which provider to call.

    An explicit preference is returned unchanged; a missing credential for it
    is reported later, when the provider client is created.

    Args:
        preference: "auto" or one of the provider ids
        credentials: API key per provider id

    Returns:
        Provider id

    Raises:
        ConfigurationError: If the preference is unknown, or "auto" finds no key
    """
    preference = preference.lower()

    if preference not in PROVIDER_CHOICES:
        raise ConfigurationError(
            f"Unsupported provider: {preference} "
            f"(expected one of: {', '.join(PROVIDER_CHOICES)})"
        )

    if preference != AUTO:
        return preference

    for provider in PROVIDER_PRIORITY:
        if credentials.get(provider):
            logger.debug(f"Auto-selected provider: {provider}")
            return provider

    expected = ", ".join(CREDENTIAL_ENV_VARS[p] for p in PROVIDER_PRIORITY)
    raise ConfigurationError(f"No API key found. Set one of: {expected}")
