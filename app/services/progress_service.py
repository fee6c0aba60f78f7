"""
Progress tracking, derived completion figures and the leaderboard
"""
import logging
import time
from typing import Any, Dict, List

from app.config import settings
from app.repositories.base import CatalogRepository, ProgressRecord, ProgressRepository
from app.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Per-user exercise completion

    Completing an exercise is idempotent: a (module, exercise) pair is recorded
    at most once per user and awards POINTS_PER_EXERCISE only the first time.
    """

    def __init__(self, progress: ProgressRepository, catalog: CatalogRepository, catalog_service: CatalogService = None):
        self.progress = progress
        self.catalog = catalog
        self.catalog_service = catalog_service or CatalogService(catalog)

    def get_progress(self, user_id: int) -> ProgressRecord:
        """Current progress, created empty on first access"""
        return self.progress.get_or_create(user_id)

    def complete_exercise(self, user_id: int, module_id: str, exercise_id: str) -> ProgressRecord:
        """
        Record a completed exercise

        Raises:
            ModuleNotFound / ExerciseNotFound: the pair is not in the catalog
        """
        self.catalog_service.get_exercise(module_id, exercise_id)

        progress = self.progress.complete_exercise(
            user_id=user_id,
            module_id=module_id,
            exercise_id=exercise_id,
            award=settings.POINTS_PER_EXERCISE,
            timestamp_ms=int(time.time() * 1000)
        )

        logger.info(
            f"Exercise completed: user={user_id}, exercise={module_id}/{exercise_id}, "
            f"points={progress.points}"
        )

        return progress

    def get_summary(self, user_id: int) -> Dict[str, Any]:
        """
        Completion figures derived from the catalog and the user's progress

        Returns:
            Dictionary matching the ProgressSummary schema
        """
        progress = self.get_progress(user_id)
        modules = self.catalog_service.list_modules()

        done = {(entry["moduleId"], entry["exerciseId"]) for entry in progress.completed_exercises}

        module_progress = []
        completed_total = 0
        exercise_total = 0
        completed_modules = 0

        for module in modules:
            total = len(module.exercises)
            completed = sum(1 for exercise in module.exercises if (module.id, exercise.id) in done)

            completed_total += completed
            exercise_total += total
            if total > 0 and completed == total:
                completed_modules += 1

            module_progress.append({
                "module_id": module.id,
                "title": module.title,
                "completed": completed,
                "total": total,
                "percentage": round(completed / total * 100, 2) if total > 0 else 0.0
            })

        overall = round(completed_total / exercise_total * 100, 2) if exercise_total > 0 else 0.0

        return {
            "modules": module_progress,
            "completed_exercises": completed_total,
            "total_exercises": exercise_total,
            "completed_modules": completed_modules,
            "total_modules": len(modules),
            "overall_percentage": overall,
            "points": progress.points
        }

    def get_leaderboard(self, limit: int = None) -> List[Dict[str, Any]]:
        """Top users by points, ranked from 1"""
        rows = self.progress.leaderboard(
            limit=limit or settings.LEADERBOARD_LIMIT,
            tiebreak_by_completed=settings.LEADERBOARD_TIEBREAK_BY_COMPLETED
        )

        return [
            {
                "rank": position,
                "user_id": row.user_id,
                "username": row.username,
                "points": row.points,
                "completed_exercises": row.completed_exercises
            }
            for position, row in enumerate(rows, start=1)
        ]
