"""Review a single photo: select provider, call it, parse the reply."""

import logging
from pathlib import Path

from photo_reviewer.config import Settings, select_provider
from photo_reviewer.errors import ImageNotFoundError, ProviderError, ReviewError
from photo_reviewer.prepare import load_image
from photo_reviewer.providers import ReviewClient
from photo_reviewer.report import Review, parse_review

logger = logging.getLogger(__name__)


def review_photo(image_path: Path | str, settings: Settings) -> Review:
    """Get an AI critique of one photo.

    Args:
        image_path: Path to the image
        settings: Provider configuration and credentials

    Returns:
        Parsed review tagged with the provider that produced it

    Raises:
        ImageNotFoundError: If the image does not exist or cannot be read
        ConfigurationError: If no provider or credential is usable
        ProviderError: If the provider call fails
        ParseError: If the reply cannot be parsed into a review
    """
    image_path = Path(image_path)
    logger.info(f"Reviewing: {image_path}")

    if not image_path.is_file():
        raise ImageNotFoundError(f"File not found: {image_path}")

    try:
        image_data = load_image(image_path)
    except OSError as e:
        raise ImageNotFoundError(f"Cannot read image {image_path}: {e}") from e

    provider = select_provider(settings.provider, settings.credentials)

    try:
        client = ReviewClient(provider, settings)
        logger.info(f"Using {provider} ({settings.get_model(provider)})")
        response_text = client.critique_image(image_data)
    except ReviewError:
        raise
    except Exception as e:
        raise ProviderError(provider, str(e)) from e

    review = parse_review(response_text).with_provider(provider)

    logger.info(
        f"Review complete - Grade: {review.overall_grade} "
        f"({review.overall_score}/100)"
    )
    return review
