"""
Store interfaces used by the services

SQLAlchemy implementations live in app.repositories.sql.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.schemas.module import ExerciseSchema, ModuleSchema


@dataclass
class UserRecord:
    id: int
    email: str
    username: str
    password_hash: str
    is_verified: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    reset_token: Optional[str] = None
    reset_token_expiry: Optional[datetime] = None


@dataclass
class ProgressRecord:
    completed_exercises: List[Dict[str, Any]] = field(default_factory=list)
    points: int = 0

    def has_completed(self, module_id: str, exercise_id: str) -> bool:
        return any(
            entry["moduleId"] == module_id and entry["exerciseId"] == exercise_id
            for entry in self.completed_exercises
        )


@dataclass
class LeaderboardRow:
    user_id: int
    username: str
    points: int
    completed_exercises: int


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def get_by_reset_token(self, token: str) -> Optional[UserRecord]: ...

    @abstractmethod
    def create(self, email: str, password_hash: str, username: str, is_verified: bool) -> UserRecord:
        """
        Insert the user and its empty progress row in one transaction

        Raises DuplicateEmail / DuplicateUsername when a unique key is taken.
        """

    @abstractmethod
    def set_reset_token(self, user_id: int, token: str, expiry: datetime) -> None: ...

    @abstractmethod
    def update_password(self, user_id: int, password_hash: str) -> None:
        """Replace the password hash and clear any reset token"""


class ProgressRepository(ABC):

    @abstractmethod
    def get_or_create(self, user_id: int) -> ProgressRecord: ...

    @abstractmethod
    def complete_exercise(
        self,
        user_id: int,
        module_id: str,
        exercise_id: str,
        award: int,
        timestamp_ms: int
    ) -> ProgressRecord:
        """Append the completion and add the award atomically; no-op if already present"""

    @abstractmethod
    def leaderboard(self, limit: int, tiebreak_by_completed: bool) -> List[LeaderboardRow]:
        """Users with points > 0, best first"""


class CatalogRepository(ABC):

    @abstractmethod
    def list_modules(self) -> List[ModuleSchema]: ...

    @abstractmethod
    def get_module(self, module_id: str) -> Optional[ModuleSchema]: ...

    @abstractmethod
    def get_exercise(self, module_id: str, exercise_id: str) -> Optional[ExerciseSchema]: ...


class SubmissionRepository(ABC):

    @abstractmethod
    def record(
        self,
        user_id: Optional[int],
        module_id: str,
        exercise_id: str,
        prompt: str,
        score: float,
        suggestions: List[str],
        source: str
    ) -> None: ...
