"""
UserProgress model - completed exercises and accumulated points
"""
from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.types import JSONColumn


class UserProgress(Base):
    """
    User progress table - one row per user

    completed_exercises holds [{"moduleId", "exerciseId", "timestamp"}] in
    completion order; timestamp is epoch milliseconds.
    """
    __tablename__ = "user_progress"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    completed_exercises = Column(JSONColumn, nullable=False, default=list)
    points = Column(Integer, nullable=False, default=0)
    completed_count = Column(Integer, nullable=False, default=0)  # len(completed_exercises), for ordering

    user = relationship("User", back_populates="progress")

    def __repr__(self):
        return f"<UserProgress(user_id={self.user_id}, points={self.points})>"
