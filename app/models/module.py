"""
Module and Exercise models - seeded learning content
"""
from sqlalchemy import Column, String, Text, Integer, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.types import JSONColumn


class Module(Base):
    """
    Modules table - themed unit of learning content
    """
    __tablename__ = "modules"

    id = Column(String(64), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    objectives = Column(JSONColumn, nullable=False, default=list)  # ["Understand ..."]
    concepts = Column(JSONColumn, nullable=False, default=list)  # [{"term", "definition"}]
    position = Column(Integer, nullable=False, default=0)

    exercises = relationship(
        "Exercise",
        back_populates="module",
        order_by="Exercise.position",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Module(id={self.id}, title={self.title})>"


class Exercise(Base):
    """
    Exercises table - a single prompt-writing task inside a module
    """
    __tablename__ = "exercises"

    id = Column(String(64), primary_key=True)
    module_id = Column(String(64), ForeignKey("modules.id", ondelete="CASCADE"), primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    problem = Column(Text, nullable=False)
    example = Column(Text, nullable=False)
    model_answer = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    module = relationship("Module", back_populates="exercises")

    def __repr__(self):
        return f"<Exercise(module_id={self.module_id}, id={self.id})>"
