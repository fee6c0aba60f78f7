"""
Prompt evaluation API endpoint
"""
from fastapi import APIRouter, Depends
from typing import Optional
import logging

from app.api.deps import get_evaluation_service, get_optional_user
from app.repositories.base import UserRecord
from app.schemas.evaluation import EvaluatePromptRequest, FeedbackResponse
from app.services.evaluation_service import EvaluationService

router = APIRouter(prefix="/api", tags=["evaluation"])
logger = logging.getLogger(__name__)


@router.post("/evaluate", response_model=FeedbackResponse)
async def evaluate_prompt(
    request: EvaluatePromptRequest,
    user: Optional[UserRecord] = Depends(get_optional_user),
    evaluation_service: EvaluationService = Depends(get_evaluation_service)
):
    """
    Score a prompt for an exercise

    Grading strategy:
    - Configured LLM provider scores the prompt (one attempt)
    - On any upstream failure: deterministic length/keyword/structure heuristic
    - Unknown exercise: score 0 with an explanatory suggestion
    """
    feedback = await evaluation_service.evaluate(
        user_prompt=request.user_prompt,
        module_id=request.module_id,
        exercise_id=request.exercise_id,
        user_id=user.id if user else None
    )

    return FeedbackResponse(
        score=feedback.score,
        suggestions=feedback.suggestions,
        source=feedback.source
    )
