"""
Main FastAPI application for the AI Image Generator.

This application provides a small API for:
- Rendering procedural "AI-generated" images from a prompt and a style
- Listing the images generated so far
- Listing the available styles and their palettes

Run with: uvicorn main:app --reload --host 0.0.0.0 --port 5000
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
import logging
import random

from config import (
    CORS_ORIGINS,
    API_HOST,
    API_PORT,
    IMAGES_DIR,
    PUBLIC_BASE_URL,
    LOG_LEVEL,
    SERVICE_NAME,
)
from models.image import HealthResponse
from services.composer_service import ImageComposer
from services.image_service import ImageGenerationService
from services.storage_service import StorageService
from services.style_service import get_style_catalog

# Import routers
from routers import images, styles

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Logs where the service listens and where images are written.
    """
    # Startup
    storage = app.state.storage_service
    logger.info(f"{SERVICE_NAME} running on {storage.base_url}")
    logger.info(f"Images saved to: {storage.images_dir}")
    logger.info(f"Available styles: {', '.join(app.state.style_catalog.names)}")

    yield

    # Shutdown
    logger.info("Shutting down API...")


def create_app(
    images_dir: Union[str, Path] = IMAGES_DIR,
    base_url: str = PUBLIC_BASE_URL,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        images_dir: Directory generated images are written to and served from
        base_url: Public base URL used in image URLs
        rng: Optional seeded random source for reproducible output

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=SERVICE_NAME,
        description="""
    Procedural image generator with "AI" branding.

    ## Endpoints

    - **Generate**: `POST /api/generate` renders a prompt in a style and saves a PNG
    - **Images**: `GET /api/images` lists generated images, newest first
    - **Styles**: `GET /api/styles` lists styles and their palettes
    - **Files**: `GET /images/{filename}` serves a generated PNG
    """,
        version="1.0.0",
        lifespan=lifespan,
    )

    catalog = get_style_catalog()
    storage_service = StorageService(images_dir, base_url)
    storage_service.ensure_directory()
    composer = ImageComposer(catalog)

    app.state.style_catalog = catalog
    app.state.storage_service = storage_service
    app.state.generation_service = ImageGenerationService(composer, storage_service, rng=rng)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount static files for image access
    app.mount("/images", StaticFiles(directory=str(storage_service.images_dir)), name="images")

    # Include routers
    app.include_router(images.router)
    app.include_router(styles.router)

    @app.get("/api/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """
        Health check endpoint.

        Returns:
            Static status payload with the current time
        """
        return HealthResponse(
            status="OK",
            service=SERVICE_NAME,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Render HTTP errors in the {success, error} envelope."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400 instead of 422."""
        logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Global exception handler for unhandled errors.

        Args:
            request: The incoming request
            exc: The exception that was raised

        Returns:
            JSON error response
        """
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
            },
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
    )
