"""Exceptions raised while reviewing a photo."""


class ReviewError(Exception):
    """Base class for all photo review failures."""


class ConfigurationError(ReviewError, ValueError):
    """No usable provider or credential could be configured."""


class ImageNotFoundError(ReviewError, FileNotFoundError):
    """The image to review does not exist."""


class ProviderError(ReviewError):
    """The AI provider call failed (network, auth, or API error)."""

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider} request failed: {message}")
        self.provider = provider


class ParseError(ReviewError, ValueError):
    """The AI response could not be turned into a review."""
