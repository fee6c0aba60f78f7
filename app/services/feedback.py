"""
Evaluation result shared by the LLM and heuristic paths
"""
from dataclasses import dataclass, field
from typing import List

SOURCE_LLM = "llm"
SOURCE_FALLBACK = "fallback"


@dataclass
class Feedback:
    """Score and improvement suggestions for one prompt"""
    score: float
    suggestions: List[str] = field(default_factory=list)
    source: str = SOURCE_LLM
