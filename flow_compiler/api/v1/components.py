"""Component catalog API endpoints."""
from fastapi import APIRouter
from typing import Any, Dict

from flow_compiler.models.schemas.component_catalog import export_component_catalog

router = APIRouter()


@router.get(
    "/components",
    tags=["Components"],
    summary="Get component catalog",
    description="Returns the component types the compiler strips ids from, and the keys it recurses into."
)
async def get_component_catalog() -> Dict[str, Any]:
    return export_component_catalog()
