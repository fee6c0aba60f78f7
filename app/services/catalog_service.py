"""
Exercise catalog lookups with a read-through cache
"""
import logging
from typing import List

from app.exceptions import ExerciseNotFound, ModuleNotFound
from app.repositories.base import CatalogRepository
from app.schemas.module import ExerciseSchema, ModuleSchema
from app.utils.cache import CacheService, cache_service

logger = logging.getLogger(__name__)


class CatalogService:
    """Read-only access to modules and exercises"""

    def __init__(self, catalog: CatalogRepository, cache: CacheService = None):
        self.catalog = catalog
        self.cache = cache or cache_service

    def list_modules(self) -> List[ModuleSchema]:
        key = self.cache.modules_key()
        cached = self.cache.get(key)
        if cached is not None:
            return [ModuleSchema.model_validate(item) for item in cached]

        modules = self.catalog.list_modules()
        self.cache.set(key, [module.model_dump() for module in modules])
        return modules

    def get_module(self, module_id: str) -> ModuleSchema:
        """
        Raises:
            ModuleNotFound: unknown module id
        """
        key = self.cache.module_key(module_id)
        cached = self.cache.get(key)
        if cached is not None:
            return ModuleSchema.model_validate(cached)

        module = self.catalog.get_module(module_id)
        if module is None:
            raise ModuleNotFound(module_id)

        self.cache.set(key, module.model_dump())
        return module

    def get_exercise(self, module_id: str, exercise_id: str) -> ExerciseSchema:
        """
        Raises:
            ModuleNotFound / ExerciseNotFound: unknown ids
        """
        exercise = self.catalog.get_exercise(module_id, exercise_id)
        if exercise is not None:
            return exercise

        if self.catalog.get_module(module_id) is None:
            raise ModuleNotFound(module_id)
        raise ExerciseNotFound(module_id, exercise_id)
