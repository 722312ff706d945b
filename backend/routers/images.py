"""
Router for image generation and listing endpoints.
Handles rendering new images and listing the ones already on disk.
"""

import logging
from datetime import datetime, timezone

import anyio
from fastapi import APIRouter, Depends, HTTPException, Request, status

from models.image import (
    GenerateImageRequest,
    GenerateImageResponse,
    ImageListResponse,
    ErrorResponse,
)
from services.image_service import ImageGenerationService
from services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Images"])


def get_generation_service(request: Request) -> ImageGenerationService:
    return request.app.state.generation_service


def get_storage(request: Request) -> StorageService:
    return request.app.state.storage_service


@router.post(
    "/generate",
    response_model=GenerateImageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Prompt missing or blank"},
        500: {"model": ErrorResponse, "description": "Generation failed"},
    },
    summary="Generate Image",
    description="Render a procedural image for a prompt and style and save it as a PNG.",
)
async def generate_image(
    request: GenerateImageRequest,
    generation_service: ImageGenerationService = Depends(get_generation_service),
):
    """
    Generate an image from a text prompt.

    The generated image will be:
    - A diagonal gradient in the style's first two colors
    - Overlaid with 20 random translucent shapes from the palette
    - Captioned with the wrapped prompt and a signature line

    Args:
        request: Generation request with prompt and optional style
        generation_service: Service that renders and stores the image

    Returns:
        Generated image metadata including URL and filename
    """
    try:
        # Rendering and the disk write are CPU/IO bound; keep them off the event loop
        generated = await anyio.to_thread.run_sync(
            generation_service.generate, request.prompt, request.style
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logger.error(f"AI generation error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="AI failed to generate image",
        )

    return GenerateImageResponse(
        filename=generated.filename,
        prompt=generated.prompt,
        style=generated.style,
        url=generation_service.storage.get_image_url(generated.filename),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get(
    "/images",
    response_model=ImageListResponse,
    responses={
        500: {"model": ErrorResponse, "description": "Directory scan failed"},
    },
    summary="List Generated Images",
    description="List every generated PNG in the image directory, newest first.",
)
async def list_images(
    storage: StorageService = Depends(get_storage),
):
    """
    List all generated images.

    Args:
        storage: Image store

    Returns:
        Image count and metadata
    """
    try:
        images = await anyio.to_thread.run_sync(storage.list_images)
    except Exception as e:
        logger.error(f"Failed to list images: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load images",
        )

    return {
        "success": True,
        "count": len(images),
        "images": images,
    }
