"""
PromptSubmission model - optional log of evaluated prompts
"""
from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, func
from app.database import Base
from app.models.types import JSONColumn


class PromptSubmission(Base):
    """
    Prompt submissions table - one row per evaluation when LOG_SUBMISSIONS is on
    """
    __tablename__ = "prompt_submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    module_id = Column(String(64), nullable=False)
    exercise_id = Column(String(64), nullable=False)
    prompt = Column(Text, nullable=False)
    score = Column(Float, nullable=False)
    suggestions = Column(JSONColumn, nullable=False, default=list)
    source = Column(String(20), nullable=False)  # llm | fallback
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<PromptSubmission(user_id={self.user_id}, exercise={self.module_id}/{self.exercise_id}, score={self.score})>"
