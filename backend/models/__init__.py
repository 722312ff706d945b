"""
Models package for the AI Image Generator.
"""

from .image import *

__all__ = [
    "GenerateImageRequest",
    "GenerateImageResponse",
    "ImageInfo",
    "ImageListResponse",
    "StyleInfo",
    "StyleListResponse",
    "HealthResponse",
    "ErrorResponse",
]
