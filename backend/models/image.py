"""
Pydantic models for API request/response validation.
These models define the schema for data transfer between frontend and backend.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


# ============================================
# Image Generation Models
# ============================================

class GenerateImageRequest(BaseModel):
    """Request model for image generation."""
    # Blank or missing prompts are rejected by the service with a 400, not a schema error
    prompt: Optional[str] = Field(None, description="Text prompt to render")
    style: Optional[str] = Field("abstract", description="Style keyword; unknown styles fall back to abstract")

    model_config = {
        "json_schema_extra": {
            "example": {
                "prompt": "a calm lake at dawn",
                "style": "ocean",
            }
        }
    }


class GenerateImageResponse(BaseModel):
    """Response model for a generated image."""
    success: bool = True
    filename: str
    prompt: str
    style: str
    url: str
    timestamp: str
    message: str = "AI image generated successfully!"


# ============================================
# Image Listing Models
# ============================================

class ImageInfo(BaseModel):
    """A stored image as reported by the listing endpoint."""
    filename: str
    url: str
    created: str
    size: str


class ImageListResponse(BaseModel):
    """Response model for the image list."""
    success: bool = True
    count: int
    images: List[ImageInfo]


# ============================================
# Style Models
# ============================================

class StyleInfo(BaseModel):
    """A style and its palette."""
    name: str
    colors: List[str]
    displayName: str


class StyleListResponse(BaseModel):
    """Response model for the style list."""
    success: bool = True
    styles: List[StyleInfo]


# ============================================
# Generic Response Models
# ============================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "OK"
    service: str
    timestamp: str


class ErrorResponse(BaseModel):
    """Generic error response."""
    success: bool = False
    error: str
