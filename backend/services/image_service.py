"""
Image generation service.
Ties filename generation, composition and storage together for one request.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from services.composer_service import ImageComposer
from services.filename_service import make_filename
from services.storage_service import StorageService
from services.style_service import DEFAULT_STYLE

logger = logging.getLogger(__name__)


class PromptRequiredError(ValueError):
    """Raised when a generate request has a missing or blank prompt."""

    def __init__(self, message: str = "Prompt is required"):
        super().__init__(message)


@dataclass(frozen=True)
class GeneratedImage:
    """A rendered image that has been written to storage."""
    filename: str
    prompt: str
    style: str
    created_at: datetime
    size_bytes: int


def validate_prompt(prompt: Optional[str]) -> str:
    """
    Check that a prompt has visible content.

    Args:
        prompt: Prompt from the request, possibly None

    Returns:
        The prompt unchanged

    Raises:
        PromptRequiredError: If the prompt is missing or whitespace only
    """
    if prompt is None or not prompt.strip():
        raise PromptRequiredError()
    return prompt


class ImageGenerationService:
    """Renders prompts to PNG files in the image store."""

    def __init__(
        self,
        composer: ImageComposer,
        storage: StorageService,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the generation service.

        Args:
            composer: Renders prompts to images
            storage: Persists the encoded images
            rng: Optional seeded random source, used for filenames and shapes
        """
        self.composer = composer
        self.storage = storage
        self.rng = rng

    def generate(self, prompt: Optional[str], style: Optional[str] = DEFAULT_STYLE) -> GeneratedImage:
        """
        Validate, render and store one image.

        Args:
            prompt: Text prompt; must not be blank
            style: Requested style keyword; None means the default style and unknown
                styles render with the default palette

        Returns:
            GeneratedImage describing the stored file
        """
        prompt = validate_prompt(prompt)
        if style is None:
            style = DEFAULT_STYLE
        now = datetime.now()

        filename = make_filename(prompt, style, now=now, rng=self.rng)
        data = self.composer.render_png(prompt, style, rng=self.rng, today=now.date())
        self.storage.save_image(filename, data)

        logger.info(
            "Generated %s (style=%s, rendered as %s, %d bytes)",
            filename, style, self.composer.catalog.resolve(style), len(data),
        )

        return GeneratedImage(
            filename=filename,
            prompt=prompt,
            style=style,
            created_at=now,
            size_bytes=len(data),
        )
