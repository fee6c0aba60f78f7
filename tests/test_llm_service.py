import asyncio
import json

import httpx
import pytest

from app.exceptions import MalformedUpstreamResponse, UpstreamUnavailable
from app.services.llm_service import (
    EVALUATION_SYSTEM_PROMPT,
    GeminiClient,
    GroqClient,
    HuggingFaceSentimentClient,
    build_evaluation_message,
    build_llm_client,
    extract_feedback,
)

GROQ_URL = "https://groq.test/v1/chat/completions"
HF_URL = "https://hf.test/models"


def _groq(handler, api_key="gsk-test"):
    return GroqClient(
        api_key=api_key,
        model="test-model",
        api_url=GROQ_URL,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def _hf(handler, api_key="hf-test"):
    return HuggingFaceSentimentClient(
        api_key=api_key,
        model="sentiment",
        api_url=HF_URL,
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


def _chat_response(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


# extract_feedback

def test_extract_feedback_from_surrounding_text():
    feedback = extract_feedback('Here you go: {"score": 8, "suggestions": ["a", "b"]} thanks', max_score=10)
    assert feedback.score == 8
    assert feedback.suggestions == ["a", "b"]
    assert feedback.source == "llm"


def test_extract_feedback_clamps_score():
    assert extract_feedback('{"score": 14, "suggestions": []}', max_score=10).score == 10
    assert extract_feedback('{"score": -3, "suggestions": []}', max_score=10).score == 0


def test_extract_feedback_stringifies_suggestions():
    feedback = extract_feedback('{"score": 6.5, "suggestions": [1, "b"]}', max_score=10)
    assert feedback.score == 6.5
    assert feedback.suggestions == ["1", "b"]


@pytest.mark.parametrize("text", [
    "",
    "no json at all",
    "{score: 8}",
    '{"score": "8", "suggestions": []}',
    '{"score": true, "suggestions": []}',
    '{"score": 8, "suggestions": "be clearer"}',
    '{"suggestions": ["a"]}',
    "} backwards {",
])
def test_extract_feedback_rejects_unusable_output(text):
    assert extract_feedback(text, max_score=10) is None


def test_evaluation_message_includes_context():
    message = build_evaluation_message("my prompt", "the problem", "the example", model_answer="the answer")
    assert "Problem: the problem" in message
    assert "Example prompt: the example" in message
    assert "Model answer: the answer" in message
    assert "User's prompt: my prompt" in message

    assert "Model answer" not in build_evaluation_message("p", "q", "e")


# Groq

def test_groq_returns_parsed_feedback():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return _chat_response('{"score": 7, "suggestions": ["Be specific"]}')

    client = _groq(handler)
    feedback = asyncio.run(client.generate_feedback(EVALUATION_SYSTEM_PROMPT, "message", "prompt"))

    assert feedback.score == 7
    assert feedback.suggestions == ["Be specific"]
    assert seen["auth"] == "Bearer gsk-test"
    assert seen["body"]["model"] == "test-model"
    assert seen["body"]["messages"][0] == {"role": "system", "content": EVALUATION_SYSTEM_PROMPT}
    assert seen["body"]["messages"][1] == {"role": "user", "content": "message"}


def test_groq_http_error_is_unavailable():
    client = _groq(lambda request: httpx.Response(500, json={"error": "boom"}))
    with pytest.raises(UpstreamUnavailable):
        asyncio.run(client.generate_feedback("s", "m", "p"))


def test_groq_network_error_is_unavailable():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(UpstreamUnavailable):
        asyncio.run(_groq(handler).generate_feedback("s", "m", "p"))


def test_groq_without_json_object_is_malformed():
    client = _groq(lambda request: _chat_response("I would rate this prompt highly."))
    with pytest.raises(MalformedUpstreamResponse):
        asyncio.run(client.generate_feedback("s", "m", "p"))


def test_groq_unexpected_payload_is_malformed():
    client = _groq(lambda request: httpx.Response(200, json={"id": "x"}))
    with pytest.raises(MalformedUpstreamResponse):
        asyncio.run(client.generate_feedback("s", "m", "p"))


def test_groq_without_key_makes_no_request():
    calls = []

    def handler(request):
        calls.append(request)
        return _chat_response('{"score": 7, "suggestions": []}')

    with pytest.raises(UpstreamUnavailable):
        asyncio.run(_groq(handler, api_key=None).generate_feedback("s", "m", "p"))
    assert calls == []


# Gemini

def test_gemini_without_key_is_unavailable():
    client = GeminiClient(api_key=None, model="gemini-test", timeout=5)
    with pytest.raises(UpstreamUnavailable):
        asyncio.run(client.generate_feedback("s", "m", "p"))


# Hugging Face

def test_huggingface_positive_sentiment():
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[[
            {"label": "NEGATIVE", "score": 0.36},
            {"label": "POSITIVE", "score": 0.64},
        ]])

    feedback = asyncio.run(_hf(handler).generate_feedback("s", "m", "my prompt"))

    assert feedback.score == 8
    assert feedback.suggestions[0].startswith("Great job!")
    assert seen["url"] == f"{HF_URL}/sentiment"
    assert seen["body"] == {"inputs": "my prompt"}


def test_huggingface_weak_positive_sentiment():
    client = _hf(lambda request: httpx.Response(200, json=[{"label": "POSITIVE", "score": 0.2}]))
    feedback = asyncio.run(client.generate_feedback("s", "m", "p"))

    assert feedback.score == 6
    assert len(feedback.suggestions) == 2
    assert not feedback.suggestions[0].startswith("Great job!")


def test_huggingface_negative_sentiment():
    client = _hf(lambda request: httpx.Response(200, json=[[{"label": "NEGATIVE", "score": 0.75}]]))
    feedback = asyncio.run(client.generate_feedback("s", "m", "p"))

    assert feedback.score == 2
    assert len(feedback.suggestions) == 3


def test_huggingface_empty_result_is_malformed():
    client = _hf(lambda request: httpx.Response(200, json=[]))
    with pytest.raises(MalformedUpstreamResponse):
        asyncio.run(client.generate_feedback("s", "m", "p"))


# Provider selection

def test_build_llm_client_by_provider():
    assert isinstance(build_llm_client("groq"), GroqClient)
    assert isinstance(build_llm_client("GEMINI"), GeminiClient)
    assert isinstance(build_llm_client("huggingface"), HuggingFaceSentimentClient)
    assert build_llm_client("none") is None
    assert build_llm_client("unknown-provider") is None


@pytest.mark.parametrize("content", [{"score": 7}, ["score", 7], 7, None])
def test_groq_non_text_content_is_malformed(content):
    client = _groq(lambda request: _chat_response(content))
    with pytest.raises(MalformedUpstreamResponse):
        asyncio.run(client.generate_feedback("s", "m", "p"))


@pytest.mark.parametrize("value", [None, 7, {"score": 7}, ["{}"]])
def test_extract_feedback_ignores_non_text(value):
    assert extract_feedback(value, max_score=10) is None


def test_huggingface_rounds_halves_up():
    positive = _hf(lambda request: httpx.Response(200, json=[{"label": "POSITIVE", "score": 0.3}]))
    negative = _hf(lambda request: httpx.Response(200, json=[{"label": "NEGATIVE", "score": 0.625}]))

    assert asyncio.run(positive.generate_feedback("s", "m", "p")).score == 7
    assert asyncio.run(negative.generate_feedback("s", "m", "p")).score == 3
