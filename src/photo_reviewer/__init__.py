"""Photo Reviewer - AI photography critique of a single image using vision APIs."""

__version__ = "0.1.0"
__author__ = "Michael Colenso"
__email__ = "github@michaelcolenso.com"

from photo_reviewer.config import Settings, select_provider
from photo_reviewer.errors import (
    ConfigurationError,
    ImageNotFoundError,
    ParseError,
    ProviderError,
    ReviewError,
)
from photo_reviewer.prepare import get_media_type
from photo_reviewer.providers import ReviewClient
from photo_reviewer.report import Review, format_json, format_yaml, parse_review
from photo_reviewer.review import review_photo

__all__ = [
    "review_photo",
    "select_provider",
    "get_media_type",
    "parse_review",
    "format_json",
    "format_yaml",
    "Review",
    "ReviewClient",
    "Settings",
    "ReviewError",
    "ConfigurationError",
    "ImageNotFoundError",
    "ProviderError",
    "ParseError",
]
