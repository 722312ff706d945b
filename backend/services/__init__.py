"""
Services package for the AI Image Generator.
"""

from .style_service import get_style_catalog, StyleCatalog, STYLE_PALETTES
from .composer_service import ImageComposer
from .filename_service import make_filename, FILENAME_PATTERN
from .storage_service import StorageService
from .image_service import ImageGenerationService, GeneratedImage, PromptRequiredError

__all__ = [
    "get_style_catalog",
    "StyleCatalog",
    "STYLE_PALETTES",
    "ImageComposer",
    "make_filename",
    "FILENAME_PATTERN",
    "StorageService",
    "ImageGenerationService",
    "GeneratedImage",
    "PromptRequiredError",
]
