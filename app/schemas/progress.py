"""
Pydantic schemas for progress tracking and leaderboard
"""
from typing import List

from pydantic import Field

from app.schemas.base import CamelModel


class CompletedExercise(CamelModel):
    module_id: str
    exercise_id: str
    timestamp: int  # epoch milliseconds


class UserProgressResponse(CamelModel):
    """Completed exercises and accumulated points for one user"""
    completed_exercises: List[CompletedExercise]
    points: int


class CompleteExerciseRequest(CamelModel):
    module_id: str = Field(..., min_length=1)
    exercise_id: str = Field(..., min_length=1)


class ModuleProgress(CamelModel):
    module_id: str
    title: str
    completed: int
    total: int
    percentage: float


class ProgressSummary(CamelModel):
    """Derived completion figures across the catalog"""
    modules: List[ModuleProgress]
    completed_exercises: int
    total_exercises: int
    completed_modules: int
    total_modules: int
    overall_percentage: float
    points: int


class LeaderboardEntry(CamelModel):
    rank: int
    user_id: int
    username: str
    points: int
    completed_exercises: int
