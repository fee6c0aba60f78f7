"""
LLM provider clients for prompt evaluation

Each client makes exactly one upstream attempt per call and raises
UpstreamUnavailable or MalformedUpstreamResponse on failure.
"""
import json
import math
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import google.generativeai as genai
import httpx

from app.config import settings
from app.exceptions import MalformedUpstreamResponse, UpstreamUnavailable
from app.services.feedback import Feedback, SOURCE_LLM

logger = logging.getLogger(__name__)


EVALUATION_SYSTEM_PROMPT = """You are an expert in prompt engineering evaluation.
Your task is to evaluate a user's prompt engineering attempt based on the following criteria:
1. Clarity and specificity of instructions
2. Alignment with the given problem
3. Effectiveness of structure and formatting
4. Inclusion of necessary constraints and parameters
5. Overall quality compared to the example

Rate the prompt on a scale of 1-10 and provide 2-3 specific, constructive suggestions for improvement.
Respond in valid JSON format with two fields: "score" (number between 1-10) and "suggestions" (array of strings)."""


def build_evaluation_message(
    user_prompt: str,
    problem: str,
    example: str,
    model_answer: Optional[str] = None
) -> str:
    """User message carrying the exercise context and the prompt under review"""
    model_answer_line = f"Model answer: {model_answer}\n" if model_answer else ""

    return f"""Problem: {problem}

Example prompt: {example}
{model_answer_line}
User's prompt: {user_prompt}

Evaluate this prompt and provide a score (1-10) and 2-3 specific suggestions for improvement in JSON format."""


def extract_feedback(text: str, max_score: int = None) -> Optional[Feedback]:
    """
    Best-effort extraction of {"score", "suggestions"} from free-form model output

    Takes the span from the first "{" to the last "}", decodes it and validates
    the field types. Returns None when no usable object is present.
    """
    if max_score is None:
        max_score = settings.MAX_SCORE

    if not isinstance(text, str) or not text:
        return None

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None

    try:
        payload = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None

    if not isinstance(payload, dict):
        return None

    score = payload.get("score")
    suggestions = payload.get("suggestions")

    # bool is an int subclass but never a valid score
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return None
    if not isinstance(suggestions, list):
        return None

    score = max(0, min(score, max_score))

    return Feedback(
        score=score,
        suggestions=[str(item) for item in suggestions],
        source=SOURCE_LLM
    )


def _round_half_up(value: float) -> int:
    """2.5 -> 3, unlike round() which goes to the even neighbour"""
    return math.floor(value + 0.5)


class LLMClient(ABC):
    """One upstream provider"""

    name = "llm"

    def __init__(self, timeout: float = None):
        self.timeout = timeout if timeout is not None else settings.LLM_TIMEOUT_SECONDS

    @abstractmethod
    async def generate_feedback(
        self,
        system_prompt: str,
        user_message: str,
        user_prompt: str
    ) -> Feedback:
        """Score a prompt; raises an UpstreamError subclass on any failure"""


class ChatCompletionClient(LLMClient):
    """Providers returning free text expected to contain a JSON object"""

    @abstractmethod
    async def complete(self, system_prompt: str, user_message: str) -> str:
        """Return the raw model text"""

    async def generate_feedback(
        self,
        system_prompt: str,
        user_message: str,
        user_prompt: str
    ) -> Feedback:
        content = await self.complete(system_prompt, user_message)
        logger.debug(f"{self.name} response: {content[:500]}")

        feedback = extract_feedback(content)
        if feedback is None:
            raise MalformedUpstreamResponse(
                f"{self.name} response did not contain a valid score/suggestions object"
            )
        return feedback


class GroqClient(ChatCompletionClient):
    """Groq OpenAI-compatible chat completions over httpx"""

    name = "groq"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        api_url: str,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(timeout)
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self._transport = transport

    async def complete(self, system_prompt: str, user_message: str) -> str:
        if not self.api_key:
            raise UpstreamUnavailable("GROQ_API_KEY not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.api_url, headers=headers, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"Groq request failed: {e}") from e

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise MalformedUpstreamResponse(f"Unexpected Groq payload: {e}") from e

        if not isinstance(content, str):
            raise MalformedUpstreamResponse(
                f"Groq message content is {type(content).__name__}, expected text"
            )
        return content


class GeminiClient(ChatCompletionClient):
    """Google Gemini through google-generativeai"""

    name = "gemini"

    def __init__(self, api_key: Optional[str], model: str, timeout: float = None):
        super().__init__(timeout)
        self.api_key = api_key
        self.model_name = model
        if api_key:
            genai.configure(api_key=api_key)

    async def complete(self, system_prompt: str, user_message: str) -> str:
        if not self.api_key:
            raise UpstreamUnavailable("GEMINI_API_KEY not configured")

        try:
            model = genai.GenerativeModel(self.model_name, system_instruction=system_prompt)
            response = await model.generate_content_async(
                user_message,
                request_options={"timeout": self.timeout}
            )
        except Exception as e:
            raise UpstreamUnavailable(f"Gemini request failed: {str(e)}") from e

        try:
            return response.text.strip()
        except ValueError as e:
            # Raised when the candidate was blocked or empty
            raise MalformedUpstreamResponse(f"Gemini returned no text: {str(e)}") from e


class HuggingFaceSentimentClient(LLMClient):
    """
    Hugging Face Inference API sentiment model

    Sentiment is mapped onto the score scale: POSITIVE p -> 5 + 5p, NEGATIVE p -> 5 - 4p,
    with halves rounded up.
    """

    name = "huggingface"

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        api_url: str,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__(timeout)
        self.api_key = api_key
        self.model = model
        self.api_url = api_url.rstrip("/")
        self._transport = transport

    async def generate_feedback(
        self,
        system_prompt: str,
        user_message: str,
        user_prompt: str
    ) -> Feedback:
        if not self.api_key:
            raise UpstreamUnavailable("HUGGINGFACE_API_KEY not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.api_url}/{self.model}",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json={"inputs": user_prompt}
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamUnavailable(f"Hugging Face request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedUpstreamResponse("Hugging Face returned non-JSON body") from e

        sentiment = self._top_sentiment(data)
        if sentiment is None:
            raise MalformedUpstreamResponse("Hugging Face response had no sentiment label")

        return self._sentiment_to_feedback(sentiment["label"], float(sentiment["score"]))

    @staticmethod
    def _top_sentiment(data: Any) -> Optional[dict]:
        """Pick the highest-scoring {label, score} from [{..}] or [[{..}, ..]]"""
        if not isinstance(data, list) or not data:
            return None

        candidates: List[Any] = data[0] if isinstance(data[0], list) else data
        valid = [
            item for item in candidates
            if isinstance(item, dict)
            and isinstance(item.get("label"), str)
            and isinstance(item.get("score"), (int, float))
        ]
        if not valid:
            return None
        return max(valid, key=lambda item: item["score"])

    @staticmethod
    def _sentiment_to_feedback(label: str, confidence: float) -> Feedback:
        if label.upper() == "POSITIVE":
            score = _round_half_up(5 + confidence * 5)
            if score >= 8:
                suggestions = [
                    "Great job! Your prompt has a positive structure.",
                    "Your prompt is well-formed and likely to produce good results.",
                ]
            else:
                suggestions = [
                    "Your prompt is good, but could be more specific and enthusiastic.",
                    "Try adding more descriptive terms to enhance the clarity.",
                ]
        else:
            score = _round_half_up(5 - confidence * 4)
            suggestions = [
                "Your prompt may sound a bit negative or confusing.",
                "Try to use more positive language and clearer instructions.",
                "Consider reorganizing your prompt with a clear structure.",
            ]

        return Feedback(score=score, suggestions=suggestions, source=SOURCE_LLM)


def build_llm_client(provider: str = None) -> Optional[LLMClient]:
    """Create the client selected by LLM_PROVIDER; None disables the LLM path"""
    provider = (provider or settings.LLM_PROVIDER).lower()

    if provider == "groq":
        return GroqClient(
            api_key=settings.GROQ_API_KEY,
            model=settings.GROQ_MODEL,
            api_url=settings.GROQ_API_URL
        )
    if provider == "gemini":
        return GeminiClient(api_key=settings.GEMINI_API_KEY, model=settings.GEMINI_MODEL)
    if provider == "huggingface":
        return HuggingFaceSentimentClient(
            api_key=settings.HUGGINGFACE_API_KEY,
            model=settings.HUGGINGFACE_MODEL,
            api_url=settings.HUGGINGFACE_API_URL
        )
    if provider != "none":
        logger.warning(f"Unknown LLM_PROVIDER '{provider}', using heuristic grading only")
    return None


# Global instance
llm_client = build_llm_client()
