"""
Prompt evaluation with LLM scoring and heuristic fallback

Flow:
- Resolve the exercise; unknown exercises get a zero-score Feedback
- One LLM attempt (no retry); any upstream failure falls back to the
  deterministic HeuristicGrader
- Optionally log the submission
"""
import logging
from typing import Optional

from app.config import settings
from app.exceptions import NotFoundError, UpstreamError
from app.repositories.base import CatalogRepository, SubmissionRepository
from app.schemas.module import ExerciseSchema
from app.services.catalog_service import CatalogService
from app.services.feedback import Feedback, SOURCE_FALLBACK
from app.services.heuristic_grader import HeuristicGrader, heuristic_grader
from app.services.llm_service import (
    EVALUATION_SYSTEM_PROMPT,
    LLMClient,
    build_evaluation_message,
)

logger = logging.getLogger(__name__)

EXERCISE_NOT_FOUND_SUGGESTION = "Exercise not found. Please select a valid module and exercise."


class EvaluationService:
    """Scores a learner prompt against one exercise"""

    def __init__(
        self,
        catalog: CatalogRepository,
        llm_client: Optional[LLMClient],
        submissions: Optional[SubmissionRepository] = None,
        grader: HeuristicGrader = None
    ):
        self.catalog_service = CatalogService(catalog)
        self.llm_client = llm_client
        self.submissions = submissions
        self.grader = grader or heuristic_grader

    async def evaluate(
        self,
        user_prompt: str,
        module_id: str,
        exercise_id: str,
        user_id: Optional[int] = None
    ) -> Feedback:
        """
        Evaluate a prompt for the given exercise

        Never raises for upstream problems; the worst case is a heuristic score.
        """
        try:
            exercise = self.catalog_service.get_exercise(module_id, exercise_id)
        except NotFoundError as e:
            logger.warning(f"Evaluation requested for unknown exercise: {e.message}")
            return Feedback(score=0, suggestions=[EXERCISE_NOT_FOUND_SUGGESTION], source=SOURCE_FALLBACK)

        feedback = await self._evaluate_with_llm(user_prompt, exercise)
        if feedback is None:
            feedback = self.grader.grade(user_prompt, exercise.problem, exercise.example)

        logger.info(
            f"Prompt evaluated: exercise={module_id}/{exercise_id}, "
            f"score={feedback.score}, source={feedback.source}"
        )

        if self.submissions is not None and settings.LOG_SUBMISSIONS:
            self._log_submission(user_id, module_id, exercise_id, user_prompt, feedback)

        return feedback

    async def _evaluate_with_llm(self, user_prompt: str, exercise: ExerciseSchema) -> Optional[Feedback]:
        """Single upstream attempt; None means use the fallback"""
        if self.llm_client is None:
            return None

        user_message = build_evaluation_message(
            user_prompt=user_prompt,
            problem=exercise.problem,
            example=exercise.example,
            model_answer=exercise.model_answer
        )

        try:
            return await self.llm_client.generate_feedback(
                EVALUATION_SYSTEM_PROMPT,
                user_message,
                user_prompt
            )
        except UpstreamError as e:
            logger.warning(f"LLM evaluation unavailable ({self.llm_client.name}): {e.message}")
            return None

    def _log_submission(
        self,
        user_id: Optional[int],
        module_id: str,
        exercise_id: str,
        user_prompt: str,
        feedback: Feedback
    ) -> None:
        """Submission logging is best-effort and never fails the evaluation"""
        try:
            self.submissions.record(
                user_id=user_id,
                module_id=module_id,
                exercise_id=exercise_id,
                prompt=user_prompt,
                score=feedback.score,
                suggestions=feedback.suggestions,
                source=feedback.source
            )
        except Exception as e:
            logger.error(f"Failed to log prompt submission: {str(e)}")
