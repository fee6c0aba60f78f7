"""
In-memory test doubles for the store interfaces and the LLM client
"""
from copy import deepcopy
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.exceptions import DuplicateEmail, DuplicateUsername, UpstreamUnavailable
from app.repositories.base import (
    CatalogRepository,
    LeaderboardRow,
    ProgressRecord,
    ProgressRepository,
    SubmissionRepository,
    UserRecord,
    UserRepository,
)
from app.schemas.module import ExerciseSchema, ModuleSchema
from app.services.feedback import Feedback
from app.services.llm_service import LLMClient


class InMemoryUserRepository(UserRepository):

    def __init__(self):
        self.users: Dict[int, UserRecord] = {}
        self.progress_rows: List[int] = []
        self._next_id = 1

    def _find(self, predicate) -> Optional[UserRecord]:
        for user in self.users.values():
            if predicate(user):
                return deepcopy(user)
        return None

    def get_by_id(self, user_id):
        return deepcopy(self.users.get(user_id))

    def get_by_email(self, email):
        return self._find(lambda user: user.email == email)

    def get_by_username(self, username):
        return self._find(lambda user: user.username == username)

    def get_by_reset_token(self, token):
        return self._find(lambda user: user.reset_token == token)

    def create(self, email, password_hash, username, is_verified):
        if self.get_by_email(email):
            raise DuplicateEmail()
        if self.get_by_username(username):
            raise DuplicateUsername()

        now = datetime.now(timezone.utc)
        user = UserRecord(
            id=self._next_id,
            email=email,
            username=username,
            password_hash=password_hash,
            is_verified=is_verified,
            created_at=now,
            updated_at=now,
        )
        self.users[user.id] = user
        self.progress_rows.append(user.id)
        self._next_id += 1
        return deepcopy(user)

    def set_reset_token(self, user_id, token, expiry):
        self.users[user_id].reset_token = token
        self.users[user_id].reset_token_expiry = expiry

    def update_password(self, user_id, password_hash):
        user = self.users[user_id]
        user.password_hash = password_hash
        user.reset_token = None
        user.reset_token_expiry = None


class InMemoryProgressRepository(ProgressRepository):

    def __init__(self, usernames: Dict[int, str] = None):
        self.rows: Dict[int, ProgressRecord] = {}
        self.usernames = usernames or {}

    def get_or_create(self, user_id):
        if user_id not in self.rows:
            self.rows[user_id] = ProgressRecord()
        return deepcopy(self.rows[user_id])

    def complete_exercise(self, user_id, module_id, exercise_id, award, timestamp_ms):
        self.get_or_create(user_id)
        row = self.rows[user_id]
        if not row.has_completed(module_id, exercise_id):
            row.completed_exercises.append(
                {"moduleId": module_id, "exerciseId": exercise_id, "timestamp": timestamp_ms}
            )
            row.points += award
        return deepcopy(row)

    def leaderboard(self, limit, tiebreak_by_completed):
        rows = [
            LeaderboardRow(
                user_id=user_id,
                username=self.usernames.get(user_id, f"user{user_id}"),
                points=record.points,
                completed_exercises=len(record.completed_exercises),
            )
            for user_id, record in self.rows.items()
            if record.points > 0
        ]
        if tiebreak_by_completed:
            rows.sort(key=lambda row: (-row.points, -row.completed_exercises, row.user_id))
        else:
            rows.sort(key=lambda row: (-row.points, row.user_id))
        return rows[:limit]


class InMemoryCatalogRepository(CatalogRepository):

    def __init__(self, modules: List[dict]):
        self.modules = [ModuleSchema.model_validate(module) for module in modules]

    def list_modules(self):
        return list(self.modules)

    def get_module(self, module_id):
        return next((module for module in self.modules if module.id == module_id), None)

    def get_exercise(self, module_id, exercise_id) -> Optional[ExerciseSchema]:
        module = self.get_module(module_id)
        if module is None:
            return None
        return next((exercise for exercise in module.exercises if exercise.id == exercise_id), None)


class InMemorySubmissionRepository(SubmissionRepository):

    def __init__(self):
        self.records: List[dict] = []

    def record(self, user_id, module_id, exercise_id, prompt, score, suggestions, source):
        self.records.append({
            "user_id": user_id,
            "module_id": module_id,
            "exercise_id": exercise_id,
            "prompt": prompt,
            "score": score,
            "suggestions": suggestions,
            "source": source,
        })


class DisabledCache:
    """Cache stand-in that never hits"""

    def modules_key(self):
        return "catalog:modules"

    def module_key(self, module_id):
        return f"catalog:module:{module_id}"

    def get(self, key):
        return None

    def set(self, key, value, ttl=None):
        return False


class DictCache(DisabledCache):
    """Cache stand-in backed by a dict"""

    def __init__(self):
        self.store = {}

    def get(self, key):
        return deepcopy(self.store.get(key))

    def set(self, key, value, ttl=None):
        self.store[key] = deepcopy(value)
        return True


class FakeLLMClient(LLMClient):
    """Returns a fixed Feedback or raises a fixed error; records calls"""

    name = "fake"

    def __init__(self, feedback: Feedback = None, error: Exception = None):
        super().__init__(timeout=1)
        self.feedback = feedback
        self.error = error
        self.calls = []

    async def generate_feedback(self, system_prompt, user_message, user_prompt):
        self.calls.append({"system": system_prompt, "message": user_message, "prompt": user_prompt})
        if self.error is not None:
            raise self.error
        if self.feedback is None:
            raise UpstreamUnavailable("no feedback configured")
        return self.feedback


SAMPLE_MODULES = [
    {
        "id": "zero-shot",
        "title": "Zero-Shot Prompting",
        "description": "Prompts without examples.",
        "objectives": ["Write clear instructions"],
        "concepts": [{"term": "Zero-Shot Learning", "definition": "No examples given"}],
        "exercises": [
            {
                "id": "zs-1",
                "title": "Basic Instructions",
                "description": "Create a simple prompt",
                "problem": "Craft a zero-shot prompt that asks the AI to generate a short poem about technology.",
                "example": "Write a poem about the ocean that has exactly 4 lines and mentions seagulls.",
                "model_answer": "Write a short poem about technology with one metaphor.",
            },
            {
                "id": "zs-2",
                "title": "Format Specification",
                "description": "Specify output format",
                "problem": "Create a prompt that asks for book recommendations.",
                "example": "Generate a table of 3 healthy breakfast recipes.",
                "model_answer": None,
            },
        ],
    },
    {
        "id": "few-shot",
        "title": "Few-Shot Prompting",
        "description": "Prompts with examples.",
        "objectives": [],
        "concepts": [],
        "exercises": [
            {
                "id": "fs-1",
                "title": "Simple Examples",
                "description": "Provide examples",
                "problem": "Create a prompt with examples of fantasy creatures.",
                "example": "Creature: Luminfrost\nAbility: glows",
            },
        ],
    },
]
