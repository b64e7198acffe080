"""Review parsing and output formatting (JSON and YAML front matter)."""

import json
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from photo_reviewer.errors import ParseError
from photo_reviewer.prepare import RATING_CATEGORIES

logger = logging.getLogger(__name__)

# ```json ... ``` block, interior captured; closing fence must start a line
FENCED_JSON_PATTERN = re.compile(
    r"```json[^\n]*\n([\s\S]*?)^[ \t]*```[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)

# Greedy: first "{" through last "}" of the searched region
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

PARSE_ERROR_MESSAGE = "Could not parse JSON from AI response"


def _coerce_number(value: Any, name: str) -> int | float:
    """Accept ints, floats and numeric strings; whole numbers become ints."""
    if isinstance(value, bool):
        raise ParseError(f"Invalid {name} in AI response: {value!r}")

    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ParseError(f"Invalid {name} in AI response: {value!r}") from None

    if not isinstance(value, (int, float)) or (
        isinstance(value, float) and not math.isfinite(value)
    ):
        raise ParseError(f"Invalid {name} in AI response: {value!r}")

    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _require_string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ParseError(f"Missing or invalid '{key}' in AI response")
    return value


def _require_string_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ParseError(f"Missing or invalid '{key}' in AI response")
    return tuple(value)


@dataclass(frozen=True)
class Review:
    """Structured photography critique."""

    overall_grade: str
    overall_score: int | float
    ratings: Mapping[str, int | float]
    strengths: tuple[str, ...]
    improvements: tuple[str, ...]
    summary: str
    mood: str
    style: str
    provider: str | None = field(default=None)

    def __post_init__(self) -> None:
        # Read-only views so the record cannot change after construction
        ratings = {c: self.ratings[c] for c in RATING_CATEGORIES}
        object.__setattr__(self, "ratings", MappingProxyType(ratings))
        object.__setattr__(self, "strengths", tuple(self.strengths))
        object.__setattr__(self, "improvements", tuple(self.improvements))

    @classmethod
    def from_dict(cls, data: Any) -> "Review":
        """Build a review from parsed AI output.

        Extra keys are ignored. Ratings are reordered into the fixed
        category order.

        Args:
            data: Object decoded from the AI response

        Returns:
            Review instance

        Raises:
            ParseError: If any required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ParseError(f"{PARSE_ERROR_MESSAGE}: expected a JSON object")

        if "overall_score" not in data:
            raise ParseError("Missing 'overall_score' in AI response")

        raw_ratings = data.get("ratings")
        if not isinstance(raw_ratings, dict):
            raise ParseError("Missing or invalid 'ratings' in AI response")

        ratings = {}
        for category in RATING_CATEGORIES:
            if category not in raw_ratings:
                raise ParseError(f"Missing rating '{category}' in AI response")
            ratings[category] = _coerce_number(raw_ratings[category], category)

        return cls(
            overall_grade=_require_string(data, "overall_grade"),
            overall_score=_coerce_number(data["overall_score"], "overall_score"),
            ratings=ratings,
            strengths=_require_string_list(data, "strengths"),
            improvements=_require_string_list(data, "improvements"),
            summary=_require_string(data, "summary"),
            mood=_require_string(data, "mood"),
            style=_require_string(data, "style"),
        )

    def with_provider(self, provider: str) -> "Review":
        return replace(self, provider=provider)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "overall_grade": self.overall_grade,
            "overall_score": self.overall_score,
            "ratings": {c: self.ratings[c] for c in RATING_CATEGORIES},
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "summary": self.summary,
            "mood": self.mood,
            "style": self.style,
        }
        if self.provider is not None:
            result["provider"] = self.provider
        return result


def extract_json(text: str) -> Any:
    """Extract and decode the JSON object embedded in a model reply.

    A ```json fenced block is preferred when present; otherwise the whole
    text is searched. The object span runs from the first "{" to the last
    "}" of the searched region.

    Args:
        text: Raw response text

    Returns:
        Decoded JSON value

    Raises:
        ParseError: If no object span is found or it is not valid JSON
    """
    fenced = FENCED_JSON_PATTERN.search(text)
    region = fenced.group(1) if fenced else text

    match = JSON_OBJECT_PATTERN.search(region)
    if not match:
        logger.debug(f"No JSON object in response: {text[:200]!r}")
        raise ParseError(PARSE_ERROR_MESSAGE)

    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise ParseError(f"{PARSE_ERROR_MESSAGE}: {e}") from e


def parse_review(text: str) -> Review:
    """Parse a raw model reply into a Review.

    Args:
        text: Raw response text

    Returns:
        Review (without provider)

    Raises:
        ParseError: If the reply does not contain a complete review
    """
    return Review.from_dict(extract_json(text))


def format_json(review: Review) -> str:
    return json.dumps(review.to_dict(), indent=2, ensure_ascii=False)


def format_yaml(review: Review) -> str:
    """Format a review as a YAML front matter fragment.

    Values are written inside double quotes without escaping.

    Args:
        review: Review to format

    Returns:
        YAML text under an "ai_review:" key, without trailing newline
    """
    lines = [
        "ai_review:",
        f'  overall_grade: "{review.overall_grade}"',
        f"  overall_score: {review.overall_score}",
        "  ratings:",
    ]

    for category in RATING_CATEGORIES:
        lines.append(f"    {category}: {review.ratings[category]}")

    lines.append("  strengths:")
    for strength in review.strengths:
        lines.append(f'    - "{strength}"')

    lines.append("  improvements:")
    for improvement in review.improvements:
        lines.append(f'    - "{improvement}"')

    lines.extend(
        [
            f'  summary: "{review.summary}"',
            f'  mood: "{review.mood}"',
            f'  style: "{review.style}"',
        ]
    )

    if review.provider is not None:
        lines.append(f'  provider: "{review.provider}"')

    return "\n".join(lines)


def format_review(review: Review, format: str = "json") -> str:
    """Format a review for output.

    Args:
        review: Review to format
        format: Output format ('json' or 'yaml')

    Raises:
        ValueError: If format is invalid
    """
    if format == "json":
        return format_json(review)
    if format == "yaml":
        return format_yaml(review)
    raise ValueError(f"Invalid format: {format}")
