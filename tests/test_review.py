"""Tests for review module."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from photo_reviewer import review as review_module
from photo_reviewer.config import Settings
from photo_reviewer.errors import (
    ConfigurationError,
    ImageNotFoundError,
    ParseError,
    ProviderError,
)
from photo_reviewer.review import review_photo

SAMPLE = {
    "overall_grade": "A-",
    "overall_score": 90,
    "ratings": {
        "composition": 9,
        "lighting": 9,
        "exposure": 8,
        "subject": 9,
        "creativity": 8,
        "technical": 9,
    },
    "strengths": ["Bold framing", "Rich color"],
    "improvements": ["Straighten horizon", "Reduce noise"],
    "summary": "A striking street photograph.",
    "mood": "dramatic",
    "style": "street",
}


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    path = tmp_path / "street.jpg"
    path.write_bytes(b"jpeg-bytes")
    return path


@pytest.fixture
def fake_client(monkeypatch) -> MagicMock:
    """Replace ReviewClient with a mock returning a canned reply."""
    client_class = MagicMock()
    client_class.return_value.critique_image.return_value = (
        f"```json\n{json.dumps(SAMPLE)}\n```"
    )
    monkeypatch.setattr(review_module, "ReviewClient", client_class)
    return client_class


class TestReviewPhoto:
    """Tests for review_photo function."""

    def test_review_is_tagged_with_provider(
        self, fake_client: MagicMock, image_path: Path
    ) -> None:
        settings = Settings(credentials={"openai": "o-key"})
        result = review_photo(image_path, settings)

        assert result.provider == "openai"
        assert result.overall_grade == "A-"
        fake_client.assert_called_once_with("openai", settings)
        image_data = fake_client.return_value.critique_image.call_args.args[0]
        assert image_data["data"] == b"jpeg-bytes"
        assert image_data["media_type"] == "image/jpeg"

    def test_missing_image(self, fake_client: MagicMock, tmp_path: Path) -> None:
        """Test missing image fails before any provider call."""
        settings = Settings(credentials={"openai": "o-key"})
        with pytest.raises(ImageNotFoundError, match="File not found"):
            review_photo(tmp_path / "missing.jpg", settings)
        fake_client.assert_not_called()

    def test_no_credentials(self, fake_client: MagicMock, image_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="GOOGLE_API_KEY"):
            review_photo(image_path, Settings())
        fake_client.assert_not_called()

    def test_provider_failure_wrapped(
        self, fake_client: MagicMock, image_path: Path
    ) -> None:
        """Test SDK errors surface as ProviderError."""
        error = ConnectionError("connection reset")
        fake_client.return_value.critique_image.side_effect = error

        with pytest.raises(ProviderError, match="connection reset") as exc_info:
            review_photo(image_path, Settings(credentials={"anthropic": "a"}))

        assert exc_info.value.provider == "anthropic"
        assert exc_info.value.__cause__ is error

    def test_unparseable_reply(self, fake_client: MagicMock, image_path: Path) -> None:
        fake_client.return_value.critique_image.return_value = "Sorry, I can't help."
        with pytest.raises(ParseError):
            review_photo(image_path, Settings(credentials={"anthropic": "a"}))

    def test_explicit_provider_without_key_fails_at_invocation(
        self, image_path: Path
    ) -> None:
        """Test google without GOOGLE_API_KEY fails when the client is built."""
        settings = Settings(provider="google", credentials={"openai": "o-key"})
        with pytest.raises(ConfigurationError, match="GOOGLE_API_KEY"):
            review_photo(image_path, settings)

    def test_unreadable_image_is_not_a_provider_error(
        self, fake_client: MagicMock, image_path: Path, monkeypatch
    ) -> None:
        """Test a failed image read raises ImageNotFoundError, not ProviderError."""

        def deny(self) -> bytes:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "read_bytes", deny)

        with pytest.raises(ImageNotFoundError, match="Permission denied") as exc_info:
            review_photo(image_path, Settings(credentials={"anthropic": "a"}))

        assert not isinstance(exc_info.value, ProviderError)
        fake_client.return_value.critique_image.assert_not_called()

    def test_client_construction_failure_wrapped(
        self, fake_client: MagicMock, image_path: Path
    ) -> None:
        """Test SDK client setup errors surface as ProviderError."""
        error = TypeError("unexpected keyword argument 'proxies'")
        fake_client.side_effect = error

        with pytest.raises(ProviderError, match="proxies") as exc_info:
            review_photo(image_path, Settings(credentials={"openai": "o-key"}))

        assert exc_info.value.provider == "openai"
        assert exc_info.value.__cause__ is error
