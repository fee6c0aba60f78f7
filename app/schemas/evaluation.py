"""
Pydantic schemas for prompt evaluation
"""
from typing import List

from pydantic import Field

from app.schemas.base import CamelModel


class EvaluatePromptRequest(CamelModel):
    """Schema for submitting a prompt against an exercise"""
    user_prompt: str = Field(..., min_length=1)
    module_id: str
    exercise_id: str


class FeedbackResponse(CamelModel):
    """Evaluator output"""
    score: float
    suggestions: List[str]
    source: str = Field("llm", description="llm or fallback")
