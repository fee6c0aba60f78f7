"""
Progress and leaderboard API endpoints
"""
from fastapi import APIRouter, Depends
from typing import List
import logging

from app.api.deps import get_current_user, get_progress_service
from app.repositories.base import ProgressRecord, UserRecord
from app.schemas.progress import (
    CompleteExerciseRequest,
    CompletedExercise,
    LeaderboardEntry,
    ProgressSummary,
    UserProgressResponse,
)
from app.services.progress_service import ProgressService

router = APIRouter(prefix="/api", tags=["progress"])
logger = logging.getLogger(__name__)


def _progress_response(progress: ProgressRecord) -> UserProgressResponse:
    return UserProgressResponse(
        completed_exercises=[
            CompletedExercise(
                module_id=entry["moduleId"],
                exercise_id=entry["exerciseId"],
                timestamp=entry["timestamp"]
            )
            for entry in progress.completed_exercises
        ],
        points=progress.points
    )


@router.get("/progress", response_model=UserProgressResponse)
async def get_progress(
    user: UserRecord = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service)
):
    """Completed exercises and points for the authenticated user"""
    return _progress_response(progress_service.get_progress(user.id))


@router.get("/progress/summary", response_model=ProgressSummary)
async def get_progress_summary(
    user: UserRecord = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service)
):
    """
    Completion figures for the authenticated user

    Returns:
    - Per-module completed/total and percentage
    - Overall completed/total exercises
    - Number of fully completed modules
    - Total points
    """
    return ProgressSummary(**progress_service.get_summary(user.id))


@router.post("/progress/complete", response_model=UserProgressResponse)
async def complete_exercise(
    request: CompleteExerciseRequest,
    user: UserRecord = Depends(get_current_user),
    progress_service: ProgressService = Depends(get_progress_service)
):
    """
    Mark an exercise as completed

    Idempotent: repeating the call returns the same progress without
    awarding points again.
    """
    progress = progress_service.complete_exercise(user.id, request.module_id, request.exercise_id)
    return _progress_response(progress)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
async def get_leaderboard(progress_service: ProgressService = Depends(get_progress_service)):
    """Top users by points"""
    return [LeaderboardEntry(**entry) for entry in progress_service.get_leaderboard()]
