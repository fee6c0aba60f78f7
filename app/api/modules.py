"""
Learning module API endpoints
"""
from fastapi import APIRouter, Depends
from typing import List
import logging

from app.api.deps import get_catalog_service
from app.schemas.module import ExerciseSchema, ModuleSchema
from app.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/modules", tags=["modules"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[ModuleSchema])
async def list_modules(catalog_service: CatalogService = Depends(get_catalog_service)):
    """All modules with objectives, concepts and exercises, in catalog order"""
    return catalog_service.list_modules()


@router.get("/{module_id}", response_model=ModuleSchema)
async def get_module(
    module_id: str,
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    """A single module; 404 if unknown"""
    return catalog_service.get_module(module_id)


@router.get("/{module_id}/exercises/{exercise_id}", response_model=ExerciseSchema)
async def get_exercise(
    module_id: str,
    exercise_id: str,
    catalog_service: CatalogService = Depends(get_catalog_service)
):
    return catalog_service.get_exercise(module_id, exercise_id)
