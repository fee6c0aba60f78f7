import asyncio

import httpx

from app.config import settings
from app.exceptions import MalformedUpstreamResponse, UpstreamUnavailable
from app.services.evaluation_service import EXERCISE_NOT_FOUND_SUGGESTION, EvaluationService
from app.services.feedback import Feedback
from app.services.heuristic_grader import DISCLAIMER, HeuristicGrader
from app.services.llm_service import GroqClient
from tests.fakes import (
    SAMPLE_MODULES,
    FakeLLMClient,
    InMemoryCatalogRepository,
    InMemorySubmissionRepository,
)


def _service(llm_client, submissions=None):
    return EvaluationService(
        catalog=InMemoryCatalogRepository(SAMPLE_MODULES),
        llm_client=llm_client,
        submissions=submissions,
        grader=HeuristicGrader(max_score=10),
    )


def test_llm_feedback_is_returned_as_is():
    llm = FakeLLMClient(feedback=Feedback(score=8, suggestions=["Add a length limit"]))

    feedback = asyncio.run(_service(llm).evaluate("Write a poem.", "zero-shot", "zs-1"))

    assert feedback.score == 8
    assert feedback.suggestions == ["Add a length limit"]
    assert feedback.source == "llm"

    message = llm.calls[0]["message"]
    assert "Problem: Craft a zero-shot prompt" in message
    assert "Model answer: Write a short poem about technology" in message
    assert "User's prompt: Write a poem." in message
    assert llm.calls[0]["prompt"] == "Write a poem."


def test_upstream_unavailable_falls_back_to_heuristic():
    llm = FakeLLMClient(error=UpstreamUnavailable("timeout"))

    feedback = asyncio.run(_service(llm).evaluate("Write a poem.", "zero-shot", "zs-1"))

    assert feedback.source == "fallback"
    assert feedback.score == 5
    assert feedback.suggestions[-1] == DISCLAIMER
    assert len(llm.calls) == 1


def test_malformed_response_falls_back_to_heuristic():
    llm = FakeLLMClient(error=MalformedUpstreamResponse("no json"))

    feedback = asyncio.run(_service(llm).evaluate("Write a poem.", "zero-shot", "zs-1"))

    assert feedback.source == "fallback"
    assert feedback.suggestions[-1] == DISCLAIMER


def test_no_llm_configured_uses_heuristic():
    feedback = asyncio.run(_service(None).evaluate("Write a poem.", "zero-shot", "zs-1"))

    assert feedback.source == "fallback"
    assert feedback.score == 5


def test_unknown_exercise_scores_zero_without_calling_llm():
    llm = FakeLLMClient(feedback=Feedback(score=9))
    service = _service(llm)

    for module_id, exercise_id in [("zero-shot", "zs-99"), ("missing", "zs-1")]:
        feedback = asyncio.run(service.evaluate("Write a poem.", module_id, exercise_id))
        assert feedback.score == 0
        assert feedback.suggestions == [EXERCISE_NOT_FOUND_SUGGESTION]
        assert feedback.source == "fallback"

    assert llm.calls == []


def test_submissions_logged_when_enabled(monkeypatch):
    monkeypatch.setattr(settings, "LOG_SUBMISSIONS", True)
    submissions = InMemorySubmissionRepository()

    asyncio.run(_service(None, submissions).evaluate("Write a poem.", "zero-shot", "zs-1", user_id=7))

    assert len(submissions.records) == 1
    record = submissions.records[0]
    assert record["user_id"] == 7
    assert record["exercise_id"] == "zs-1"
    assert record["source"] == "fallback"


def test_submissions_not_logged_by_default():
    submissions = InMemorySubmissionRepository()

    asyncio.run(_service(None, submissions).evaluate("Write a poem.", "zero-shot", "zs-1"))

    assert submissions.records == []


def test_submission_log_failure_does_not_fail_evaluation(monkeypatch):
    monkeypatch.setattr(settings, "LOG_SUBMISSIONS", True)

    class BrokenSubmissions(InMemorySubmissionRepository):
        def record(self, **kwargs):
            raise RuntimeError("database is down")

    feedback = asyncio.run(
        _service(None, BrokenSubmissions()).evaluate("Write a poem.", "zero-shot", "zs-1")
    )

    assert feedback.score == 5


def test_groq_object_content_falls_back_to_heuristic():
    def handler(request):
        return httpx.Response(200, json={"choices": [{"message": {"content": {"score": 7}}}]})

    groq = GroqClient(
        api_key="gsk-test",
        model="test-model",
        api_url="https://groq.test/v1/chat/completions",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )

    feedback = asyncio.run(_service(groq).evaluate("Write a poem.", "zero-shot", "zs-1"))

    assert feedback.source == "fallback"
    assert feedback.score == 5
    assert feedback.suggestions[-1] == DISCLAIMER
