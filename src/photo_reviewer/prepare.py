"""Image loading and request building for the provider APIs."""

import base64
import logging
from pathlib import Path
from typing import Any

from google.genai import types

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "image/jpeg"

MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
}

RATING_CATEGORIES = (
    "composition",
    "lighting",
    "exposure",
    "subject",
    "creativity",
    "technical",
)

# Prompt sent alongside the image to every provider
REVIEW_PROMPT = """You are an expert photography critic with decades of experience in fine art, commercial, and documentary photography. Your reviews are insightful, constructive, and specific.

Analyze this photograph and provide a detailed critique. Consider:

1. **Composition** - Rule of thirds, leading lines, framing, balance, negative space
2. **Lighting** - Quality, direction, color temperature, mood, highlights/shadows
3. **Exposure** - Brightness, dynamic range, histogram distribution
4. **Subject & Focus** - Subject clarity, depth of field, focal point effectiveness
5. **Creativity & Impact** - Originality, emotional resonance, storytelling
6. **Technical Execution** - Sharpness, noise, color accuracy, post-processing

Provide your response in this exact JSON format:
{
  "overall_grade": "A letter grade from A+ to F",
  "overall_score": "Numeric score from 1-100",
  "ratings": {
    "composition": "Score 1-10",
    "lighting": "Score 1-10",
    "exposure": "Score 1-10",
    "subject": "Score 1-10",
    "creativity": "Score 1-10",
    "technical": "Score 1-10"
  },
  "strengths": ["List 2-3 specific strengths"],
  "improvements": ["List 2-3 specific areas for improvement"],
  "summary": "A concise 2-3 sentence overall assessment",
  "mood": "One word describing the mood/feeling (e.g., serene, dramatic, melancholic)",
  "style": "Photography style/genre (e.g., landscape, portrait, street, documentary)"
}

Be honest but encouraging. Focus on actionable feedback."""


def get_media_type(path: Path | str) -> str:
    """Map a file extension to its image media type.

    Args:
        path: Image path

    Returns:
        Media type string, image/jpeg when the extension is unknown or missing
    """
    return MEDIA_TYPES.get(Path(path).suffix.lower(), DEFAULT_MEDIA_TYPE)


def encode_image_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("utf-8")


def load_image(path: Path) -> dict[str, Any]:
    """Read an image into memory for API submission.

    No decoding or resizing happens here; the raw bytes are sent as-is.

    Args:
        path: Path to image file

    Returns:
        Dictionary with raw bytes, base64 data and media type

    Raises:
        OSError: If the file cannot be read
    """
    logger.debug(f"Loading image: {path}")
    data = path.read_bytes()

    return {
        "path": str(path),
        "filename": path.name,
        "data": data,
        "base64_data": encode_image_base64(data),
        "media_type": get_media_type(path),
    }


def build_anthropic_request(
    image_data: dict[str, Any], model: str, max_tokens: int
) -> dict[str, Any]:
    """Build keyword arguments for the Anthropic Messages API.

    Args:
        image_data: Image data from load_image()
        model: Anthropic model to use
        max_tokens: Completion token limit

    Returns:
        Request dictionary for client.messages.create()
    """
    return {
        "model": model,
        "max_tokens": max_tokens,
        "messages": [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": image_data["media_type"],
                            "data": image_data["base64_data"],
                        },
                    },
                    {
                        "type": "text",
                        "text": REVIEW_PROMPT,
                    },
                ],
            }
        ],
    }


def build_openai_request(
    image_data: dict[str, Any], model: str, max_tokens: int
) -> dict[str, Any]:
    """Build keyword arguments for the OpenAI Chat Completions API.

    Args:
        image_data: Image data from load_image()
        model: OpenAI model to use
        max_tokens: Completion token limit

    Returns:
        Request dictionary for client.chat.completions.create()
    """
    data_url = (
        f"data:{image_data['media_type']};base64,{image_data['base64_data']}"
    )
    return {
        "model": model,
        "max_tokens": max_tokens,
        "messages": [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": REVIEW_PROMPT},
                    {"type": "image_url", "image_url": {"url": data_url}},
                ],
            }
        ],
    }


def build_google_request(
    image_data: dict[str, Any], model: str, max_tokens: int
) -> dict[str, Any]:
    """Build keyword arguments for the Google GenAI generate_content call.

    The image goes in as an inline-data part; the SDK base64-encodes the
    bytes on the wire.

    Args:
        image_data: Image data from load_image()
        model: Gemini model to use
        max_tokens: Completion token limit

    Returns:
        Request dictionary for client.models.generate_content()
    """
    return {
        "model": model,
        "contents": [
            types.Part.from_bytes(
                data=image_data["data"], mime_type=image_data["media_type"]
            ),
            REVIEW_PROMPT,
        ],
        "config": types.GenerateContentConfig(max_output_tokens=max_tokens),
    }
