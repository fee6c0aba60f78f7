"""
Database models package
"""
from app.models.user import User
from app.models.user_progress import UserProgress
from app.models.module import Module, Exercise
from app.models.prompt_submission import PromptSubmission

__all__ = ["User", "UserProgress", "Module", "Exercise", "PromptSubmission"]
