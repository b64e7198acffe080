"""Provider clients that send a photo for critique and return the raw reply."""

import logging
from pathlib import Path
from typing import Any

import anthropic
from google import genai
from openai import OpenAI

from photo_reviewer.config import (
    ANTHROPIC,
    CREDENTIAL_ENV_VARS,
    GOOGLE,
    OPENAI,
    Settings,
)
from photo_reviewer.errors import ConfigurationError
from photo_reviewer.prepare import (
    build_anthropic_request,
    build_google_request,
    build_openai_request,
    load_image,
)

logger = logging.getLogger(__name__)


def _require_api_key(provider: str, api_key: str | None) -> str:
    if not api_key:
        raise ConfigurationError(
            f"API key required. Set {CREDENTIAL_ENV_VARS[provider]} "
            "environment variable."
        )
    return api_key


def _extract_openai_text(response: Any) -> str:
    choices = response.choices
    if not choices:
        return ""
    return choices[0].message.content or ""


class AnthropicReviewClient:
    """Client for Anthropic's Messages API."""

    def __init__(self, api_key: str | None, model: str, max_tokens: int) -> None:
        """Initialize review client.

        Args:
            api_key: Anthropic API key
            model: Claude model to use
            max_tokens: Completion token limit

        Raises:
            ConfigurationError: If API key is missing
        """
        api_key = _require_api_key(ANTHROPIC, api_key)
        self.client = anthropic.Anthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens
        logger.debug(f"Anthropic client initialized (model={model})")

    def critique(self, image_path: Path) -> str:
        """Request a critique of one image.

        Args:
            image_path: Path to the image

        Returns:
            Raw response text
        """
        return self.critique_image(load_image(image_path))

    def critique_image(self, image_data: dict[str, Any]) -> str:
        """Request a critique of an already loaded image.

        Args:
            image_data: Image data from load_image()

        Returns:
            Raw response text
        """
        request = build_anthropic_request(image_data, self.model, self.max_tokens)

        try:
            message = self.client.messages.create(**request)
        except Exception as e:
            logger.error(f"Anthropic request failed: {e}")
            raise

        for block in message.content:
            if block.type == "text":
                return block.text
        return ""


class OpenAIReviewClient:
    """Client for OpenAI's Chat Completions API."""

    def __init__(self, api_key: str | None, model: str, max_tokens: int) -> None:
        """Initialize review client.

        Args:
            api_key: OpenAI API key
            model: OpenAI model to use
            max_tokens: Completion token limit

        Raises:
            ConfigurationError: If API key is missing
        """
        api_key = _require_api_key(OPENAI, api_key)
        self.client = OpenAI(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens
        logger.debug(f"OpenAI client initialized (model={model})")

    def critique(self, image_path: Path) -> str:
        return self.critique_image(load_image(image_path))

    def critique_image(self, image_data: dict[str, Any]) -> str:
        request = build_openai_request(image_data, self.model, self.max_tokens)

        try:
            response = self.client.chat.completions.create(**request)
        except Exception as e:
            logger.error(f"OpenAI request failed: {e}")
            raise

        return _extract_openai_text(response)


class GoogleReviewClient:
    """Client for the Google GenAI (Gemini) API."""

    def __init__(self, api_key: str | None, model: str, max_tokens: int) -> None:
        api_key = _require_api_key(GOOGLE, api_key)
        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens
        logger.debug(f"Google client initialized (model={model})")

    def critique(self, image_path: Path) -> str:
        return self.critique_image(load_image(image_path))

    def critique_image(self, image_data: dict[str, Any]) -> str:
        request = build_google_request(image_data, self.model, self.max_tokens)

        try:
            response = self.client.models.generate_content(**request)
        except Exception as e:
            logger.error(f"Google request failed: {e}")
            raise

        return response.text or ""


class ReviewClient:
    """Client for whichever provider was selected."""

    def __init__(self, provider: str, settings: Settings) -> None:
        provider_normalized = provider.lower()
        api_key = settings.get_credential(provider_normalized)

        if provider_normalized == ANTHROPIC:
            client_class = AnthropicReviewClient
        elif provider_normalized == OPENAI:
            client_class = OpenAIReviewClient
        elif provider_normalized == GOOGLE:
            client_class = GoogleReviewClient
        else:
            raise ConfigurationError(f"Unsupported provider: {provider}")

        self.client = client_class(
            api_key=api_key,
            model=settings.get_model(provider_normalized),
            max_tokens=settings.max_tokens,
        )
        self.provider = provider_normalized

    def critique(self, image_path: Path) -> str:
        return self.client.critique(image_path)

    def critique_image(self, image_data: dict[str, Any]) -> str:
        return self.client.critique_image(image_data)
