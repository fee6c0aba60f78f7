"""
Deterministic prompt grading used when the LLM path is unavailable

Strategy:
- Base score by prompt length: <20 chars -> 3, <50 chars -> 5, otherwise 7
- +1 when the prompt reuses a significant word from the problem statement
- +2 when the prompt shares a structural pattern with the example
- Capped at the configured maximum score
"""
import logging

from app.config import settings
from app.services.feedback import Feedback, SOURCE_FALLBACK
from app.utils.text_structure import has_keyword_match, has_pattern_match

logger = logging.getLogger(__name__)

TOO_SHORT = "Your prompt is too short. Consider adding more specific instructions."
NEEDS_DETAIL = "Your prompt could be more detailed to get better results."
MISSING_KEYWORDS = "Try including more specific terms related to the exercise problem."
MISSING_PATTERN = "Your prompt could benefit from following the pattern shown in the example."
PRAISE = "Great job! Your prompt is clear and well-structured."
DISCLAIMER = "Note: This is a simplified evaluation. Try again later for AI-powered feedback."


class HeuristicGrader:
    """Keyword and structure based grader"""

    SHORT_PROMPT_LENGTH = 20
    MEDIUM_PROMPT_LENGTH = 50

    SHORT_SCORE = 3
    MEDIUM_SCORE = 5
    LONG_SCORE = 7

    KEYWORD_BONUS = 1
    PATTERN_BONUS = 2

    PRAISE_THRESHOLD = 8

    def __init__(self, max_score: int = None):
        self.max_score = max_score if max_score is not None else settings.MAX_SCORE

    def base_score(self, user_prompt: str) -> int:
        """Score from prompt length alone"""
        length = len(user_prompt)
        if length < self.SHORT_PROMPT_LENGTH:
            return self.SHORT_SCORE
        if length < self.MEDIUM_PROMPT_LENGTH:
            return self.MEDIUM_SCORE
        return self.LONG_SCORE

    def grade(self, user_prompt: str, problem: str, example: str) -> Feedback:
        """
        Grade a prompt against an exercise problem and example

        Args:
            user_prompt: The learner's prompt
            problem: Exercise problem statement
            example: Example prompt for the exercise

        Returns:
            Feedback whose last suggestion is always the simplified-evaluation note
        """
        suggestions = []
        score = self.base_score(user_prompt)

        if score == self.SHORT_SCORE:
            suggestions.append(TOO_SHORT)
        elif score == self.MEDIUM_SCORE:
            suggestions.append(NEEDS_DETAIL)

        if has_keyword_match(user_prompt, problem):
            score += self.KEYWORD_BONUS
        else:
            suggestions.append(MISSING_KEYWORDS)

        if has_pattern_match(user_prompt, example):
            score += self.PATTERN_BONUS
        else:
            suggestions.append(MISSING_PATTERN)

        score = min(score, self.max_score)

        if score >= self.PRAISE_THRESHOLD and len(suggestions) < 3:
            suggestions.append(PRAISE)

        suggestions.append(DISCLAIMER)

        logger.info(f"Heuristic grade: length={len(user_prompt)}, score={score}")

        return Feedback(score=score, suggestions=suggestions, source=SOURCE_FALLBACK)


# Global instance
heuristic_grader = HeuristicGrader()
