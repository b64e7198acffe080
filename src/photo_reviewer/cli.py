"""CLI entry point for photo-review."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from photo_reviewer.config import PROVIDER_CHOICES, PROVIDER_ENV_VAR, Settings
from photo_reviewer.errors import ReviewError
from photo_reviewer.report import format_review
from photo_reviewer.review import review_photo

# Diagnostics go to stderr so stdout carries only the review
console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler.

    Args:
        verbose: If True, set log level to DEBUG
    """
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@click.command()
@click.argument("image_path", type=click.Path(path_type=Path))
@click.option(
    "--json",
    "output_format",
    flag_value="json",
    help="Output as JSON (default)",
)
@click.option(
    "--yaml",
    "output_format",
    flag_value="yaml",
    help="Output as YAML for front matter",
)
@click.option(
    "--provider",
    "-p",
    type=click.Choice(PROVIDER_CHOICES, case_sensitive=False),
    envvar=PROVIDER_ENV_VAR,
    default="auto",
    show_envvar=True,
    help="AI provider to use",
)
@click.option(
    "--model",
    type=str,
    default=None,
    help="Override the provider's default model",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging",
)
def main(
    image_path: Path,
    output_format: str | None,
    provider: str,
    model: str | None,
    verbose: bool,
) -> None:
    """Photo Review - AI photography critique for a single image.

    Sends IMAGE_PATH to Anthropic, OpenAI or Google and prints a structured
    review. With --provider auto, the first of ANTHROPIC_API_KEY,
    OPENAI_API_KEY, GOOGLE_API_KEY that is set decides the provider.

    Examples:

        \b
        # JSON review using whichever API key is set
        $ photo-review ./photos/sunset.jpg

        \b
        # YAML for Jekyll front matter, forcing OpenAI
        $ AI_PROVIDER=openai photo-review ./photos/sunset.jpg --yaml
    """
    setup_logging(verbose)

    try:
        settings = Settings.from_env(provider=provider, model=model)
        review = review_photo(image_path, settings)
        output = format_review(review, format=output_format or "json")
    except ReviewError as e:
        console.print(f"[bold red]Failed to review photo:[/bold red] {escape(str(e))}")
        sys.exit(1)

    click.echo(output)


if __name__ == "__main__":
    main()
