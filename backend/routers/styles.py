"""
Router for style listing endpoints.
"""

from fastapi import APIRouter, Depends, Request

from models.image import StyleListResponse
from services.style_service import StyleCatalog

router = APIRouter(prefix="/api", tags=["Styles"])


def get_catalog(request: Request) -> StyleCatalog:
    return request.app.state.style_catalog


@router.get(
    "/styles",
    response_model=StyleListResponse,
    summary="List Styles",
    description="List the available styles with their palettes.",
)
async def list_styles(
    catalog: StyleCatalog = Depends(get_catalog),
):
    """
    List all styles.

    Returns:
        Styles with name, colors and display name
    """
    return {
        "success": True,
        "styles": catalog.describe(),
    }
