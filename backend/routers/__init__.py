"""
Routers package for the AI Image Generator API.
"""

from . import images, styles

__all__ = ["images", "styles"]
