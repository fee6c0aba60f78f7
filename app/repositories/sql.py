"""
SQLAlchemy-backed stores
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.exceptions import DuplicateEmail, DuplicateUsername
from app.models import Exercise, Module, PromptSubmission, User, UserProgress
from app.repositories.base import (
    CatalogRepository,
    LeaderboardRow,
    ProgressRecord,
    ProgressRepository,
    SubmissionRepository,
    UserRecord,
    UserRepository,
)
from app.schemas.module import Concept, ExerciseSchema, ModuleSchema

logger = logging.getLogger(__name__)


def _to_user_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        email=user.email,
        username=user.username,
        password_hash=user.password,
        is_verified=bool(user.is_verified),
        created_at=user.created_at,
        updated_at=user.updated_at,
        reset_token=user.reset_token,
        reset_token_expiry=user.reset_token_expiry,
    )


def _to_progress_record(progress: UserProgress) -> ProgressRecord:
    return ProgressRecord(
        completed_exercises=list(progress.completed_exercises or []),
        points=progress.points or 0,
    )


def _to_exercise_schema(exercise: Exercise) -> ExerciseSchema:
    return ExerciseSchema(
        id=exercise.id,
        title=exercise.title,
        description=exercise.description,
        problem=exercise.problem,
        example=exercise.example,
        model_answer=exercise.model_answer,
    )


def _to_module_schema(module: Module) -> ModuleSchema:
    return ModuleSchema(
        id=module.id,
        title=module.title,
        description=module.description,
        objectives=list(module.objectives or []),
        concepts=[Concept(**concept) for concept in (module.concepts or [])],
        exercises=[_to_exercise_schema(exercise) for exercise in module.exercises],
    )


class SqlUserRepository(UserRepository):

    def __init__(self, db: Session):
        self.db = db

    def _first(self, *criteria) -> Optional[UserRecord]:
        user = self.db.query(User).filter(*criteria).first()
        return _to_user_record(user) if user else None

    def get_by_id(self, user_id: int) -> Optional[UserRecord]:
        return self._first(User.id == user_id)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return self._first(User.email == email)

    def get_by_username(self, username: str) -> Optional[UserRecord]:
        return self._first(User.username == username)

    def get_by_reset_token(self, token: str) -> Optional[UserRecord]:
        return self._first(User.reset_token == token)

    def create(self, email: str, password_hash: str, username: str, is_verified: bool) -> UserRecord:
        user = User(
            email=email,
            password=password_hash,
            username=username,
            is_verified=is_verified
        )
        user.progress = UserProgress(completed_exercises=[], points=0, completed_count=0)

        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            # Lost a race against a concurrent registration
            if self.get_by_email(email):
                raise DuplicateEmail()
            raise DuplicateUsername()

        self.db.refresh(user)
        return _to_user_record(user)

    def set_reset_token(self, user_id: int, token: str, expiry: datetime) -> None:
        self.db.query(User).filter(User.id == user_id).update(
            {User.reset_token: token, User.reset_token_expiry: expiry}
        )
        self.db.commit()

    def update_password(self, user_id: int, password_hash: str) -> None:
        self.db.query(User).filter(User.id == user_id).update(
            {
                User.password: password_hash,
                User.reset_token: None,
                User.reset_token_expiry: None,
            }
        )
        self.db.commit()


class SqlProgressRepository(ProgressRepository):

    def __init__(self, db: Session):
        self.db = db

    def _ensure_row(self, user_id: int) -> None:
        exists = self.db.query(UserProgress.id).filter(UserProgress.user_id == user_id).first()
        if exists:
            return

        try:
            self.db.add(UserProgress(user_id=user_id, completed_exercises=[], points=0, completed_count=0))
            self.db.commit()
            logger.info(f"Initialized progress for user {user_id}")
        except IntegrityError:
            # Created concurrently by another request
            self.db.rollback()

    def get_or_create(self, user_id: int) -> ProgressRecord:
        self._ensure_row(user_id)
        progress = self.db.query(UserProgress).filter(UserProgress.user_id == user_id).one()
        return _to_progress_record(progress)

    def complete_exercise(
        self,
        user_id: int,
        module_id: str,
        exercise_id: str,
        award: int,
        timestamp_ms: int
    ) -> ProgressRecord:
        self._ensure_row(user_id)

        try:
            progress = (
                self.db.query(UserProgress)
                .filter(UserProgress.user_id == user_id)
                .with_for_update()
                .one()
            )
            record = _to_progress_record(progress)

            if record.has_completed(module_id, exercise_id):
                self.db.commit()
                return record

            # Reassign so the JSON column is flagged dirty
            progress.completed_exercises = record.completed_exercises + [
                {"moduleId": module_id, "exerciseId": exercise_id, "timestamp": timestamp_ms}
            ]
            progress.points = record.points + award
            progress.completed_count = len(progress.completed_exercises)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(progress)
        return _to_progress_record(progress)

    def leaderboard(self, limit: int, tiebreak_by_completed: bool) -> List[LeaderboardRow]:
        ordering = [UserProgress.points.desc()]
        if tiebreak_by_completed:
            ordering.append(UserProgress.completed_count.desc())
        ordering.append(User.id.asc())

        rows = (
            self.db.query(User.id, User.username, UserProgress.points, UserProgress.completed_count)
            .join(UserProgress, UserProgress.user_id == User.id)
            .filter(UserProgress.points > 0)
            .order_by(*ordering)
            .limit(limit)
            .all()
        )

        return [
            LeaderboardRow(
                user_id=row.id,
                username=row.username,
                points=row.points,
                completed_exercises=row.completed_count or 0,
            )
            for row in rows
        ]


class SqlCatalogRepository(CatalogRepository):

    def __init__(self, db: Session):
        self.db = db

    def list_modules(self) -> List[ModuleSchema]:
        modules = (
            self.db.query(Module)
            .options(selectinload(Module.exercises))
            .order_by(Module.position, Module.id)
            .all()
        )
        return [_to_module_schema(module) for module in modules]

    def get_module(self, module_id: str) -> Optional[ModuleSchema]:
        module = (
            self.db.query(Module)
            .options(selectinload(Module.exercises))
            .filter(Module.id == module_id)
            .first()
        )
        return _to_module_schema(module) if module else None

    def get_exercise(self, module_id: str, exercise_id: str) -> Optional[ExerciseSchema]:
        exercise = self.db.query(Exercise).filter(
            Exercise.module_id == module_id,
            Exercise.id == exercise_id
        ).first()
        return _to_exercise_schema(exercise) if exercise else None


class SqlSubmissionRepository(SubmissionRepository):

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        user_id: Optional[int],
        module_id: str,
        exercise_id: str,
        prompt: str,
        score: float,
        suggestions: List[str],
        source: str
    ) -> None:
        submission = PromptSubmission(
            user_id=user_id,
            module_id=module_id,
            exercise_id=exercise_id,
            prompt=prompt,
            score=score,
            suggestions=suggestions,
            source=source
        )
        try:
            self.db.add(submission)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
