"""
Text structure analysis shared by the heuristic grader
"""
import re
from typing import List

# Pattern tag -> regex; each feature is detected independently
STRUCTURE_PATTERNS = [
    ("numbered-list", re.compile(r"\d+\.\s")),
    ("bullet-points", re.compile(r"•|\*|-\s")),
    ("section-headers", re.compile(r"[A-Z][^.!?]*:")),
    ("questions", re.compile(r"\?")),
]

COMMAND_PATTERN = re.compile(r"^(write|create|generate|list|explain|analyze)", re.IGNORECASE)

PLAIN_TEXT = "plain-text"

SIGNIFICANT_WORD_MIN_LENGTH = 6
MAX_SIGNIFICANT_WORDS = 5


def get_text_structure(text: str) -> List[str]:
    """
    Identify structural patterns in a piece of text

    Returns the matching tags in a fixed order, or ["plain-text"] when the
    text has none of them.
    """
    patterns = [tag for tag, regex in STRUCTURE_PATTERNS if regex.search(text)]

    if COMMAND_PATTERN.match(text):
        patterns.append("command")

    return patterns or [PLAIN_TEXT]


def significant_words(text: str) -> List[str]:
    """First few long words of a text, lowercased, punctuation kept"""
    words = [word for word in text.lower().split() if len(word) >= SIGNIFICANT_WORD_MIN_LENGTH]
    return words[:MAX_SIGNIFICANT_WORDS]


def has_keyword_match(user_prompt: str, problem: str) -> bool:
    """True if the prompt contains any significant word of the problem statement"""
    prompt_lower = user_prompt.lower()
    return any(word in prompt_lower for word in significant_words(problem))


def has_pattern_match(user_prompt: str, example: str) -> bool:
    """True if the prompt shares at least one structural pattern with the example"""
    example_structure = set(get_text_structure(example))
    return any(pattern in example_structure for pattern in get_text_structure(user_prompt))
