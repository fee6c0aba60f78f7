"""
Pydantic schemas for the exercise catalog
"""
from typing import List, Optional

from app.schemas.base import CamelModel


class Concept(CamelModel):
    term: str
    definition: str


class ExerciseSchema(CamelModel):
    """A single prompt-writing task"""
    id: str
    title: str
    description: str
    problem: str
    example: str
    model_answer: Optional[str] = None


class ModuleSchema(CamelModel):
    """A themed learning unit with its exercises in order"""
    id: str
    title: str
    description: str
    objectives: List[str]
    concepts: List[Concept]
    exercises: List[ExerciseSchema]
