from unittest.mock import AsyncMock

import httpx
import pytest
from _pytest.monkeypatch import MonkeyPatch
from httpx import Response

from verify_api.errors import ModelRequestError
from verify_api.utils.gemini import (
    GeminiClient,
    InlineMedia,
    build_payload,
    extract_text,
    is_quota_error,
)

BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def _client(api_key="test-key") -> GeminiClient:
    return GeminiClient(
        api_key=api_key, model="gemini-2.5-flash-lite", base_url=BASE_URL, timeout=5
    )


def _candidate(*texts: str):
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": t} for t in texts]}}
        ]
    }


def test_url():
    assert (
        _client().url
        == f"{BASE_URL}/models/gemini-2.5-flash-lite:generateContent"
    )


def test_build_payload_text_only():
    payload = build_payload("Hello")

    assert payload == {"contents": [{"role": "user", "parts": [{"text": "Hello"}]}]}


def test_build_payload_with_media_schema_and_instruction():
    schema = {"type": "OBJECT", "properties": {"aiProbability": {"type": "NUMBER"}}}
    payload = build_payload(
        "Analyze",
        media=InlineMedia("image/png", b"\x89PNG"),
        response_schema=schema,
        system_instruction="Be brief",
    )

    parts = payload["contents"][0]["parts"]
    assert parts[0] == {"text": "Analyze"}
    assert parts[1] == {"inlineData": {"mimeType": "image/png", "data": "iVBORw=="}}
    assert payload["systemInstruction"] == {"parts": [{"text": "Be brief"}]}
    assert payload["generationConfig"] == {
        "responseMimeType": "application/json",
        "responseSchema": schema,
    }


def test_extract_text_joins_parts():
    assert extract_text(_candidate('{"aiProbability"', ": 12}")) == '{"aiProbability": 12}'


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"candidates": []},
        {"candidates": [{"finishReason": "SAFETY"}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
    ],
)
def test_extract_text_without_text(body):
    assert extract_text(body) == ""


@pytest.mark.asyncio
async def test_generate_content_success(monkeypatch: MonkeyPatch):
    mock_post = AsyncMock()
    mock_post.return_value = Response(200, json=_candidate("All good"))
    monkeypatch.setattr("httpx.AsyncClient.post", mock_post)

    text = await _client().generate_content("Hi", system_instruction="Be nice")

    assert text == "All good"
    args, kwargs = mock_post.call_args
    assert args[0].endswith("/models/gemini-2.5-flash-lite:generateContent")
    assert kwargs["headers"]["x-goog-api-key"] == "test-key"
    assert kwargs["json"]["systemInstruction"] == {"parts": [{"text": "Be nice"}]}
    assert kwargs["timeout"] == 5


@pytest.mark.asyncio
async def test_generate_content_quota_exhausted(monkeypatch: MonkeyPatch):
    mock_post = AsyncMock()
    mock_post.return_value = Response(
        429,
        json={
            "error": {
                "code": 429,
                "message": "You exceeded your current quota",
                "status": "RESOURCE_EXHAUSTED",
            }
        },
    )
    monkeypatch.setattr("httpx.AsyncClient.post", mock_post)

    with pytest.raises(ModelRequestError) as exc_info:
        await _client().generate_content("Hi")

    assert exc_info.value.status_code == 429
    assert exc_info.value.message == (
        "[429 RESOURCE_EXHAUSTED] You exceeded your current quota"
    )
    assert is_quota_error(exc_info.value)


@pytest.mark.asyncio
async def test_generate_content_other_error(monkeypatch: MonkeyPatch):
    mock_post = AsyncMock()
    mock_post.return_value = Response(500, text="upstream exploded")
    monkeypatch.setattr("httpx.AsyncClient.post", mock_post)

    with pytest.raises(ModelRequestError) as exc_info:
        await _client().generate_content("Hi")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "[500] upstream exploded"
    assert not is_quota_error(exc_info.value)


@pytest.mark.asyncio
async def test_generate_content_timeout(monkeypatch: MonkeyPatch):
    mock_post = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))
    monkeypatch.setattr("httpx.AsyncClient.post", mock_post)

    with pytest.raises(ModelRequestError) as exc_info:
        await _client().generate_content("Hi")

    assert exc_info.value.status_code is None
    assert "timed-out" in exc_info.value.message


@pytest.mark.asyncio
async def test_generate_content_connection_error(monkeypatch: MonkeyPatch):
    mock_post = AsyncMock(side_effect=httpx.ConnectError("no route"))
    monkeypatch.setattr("httpx.AsyncClient.post", mock_post)

    with pytest.raises(ModelRequestError):
        await _client().generate_content("Hi")


@pytest.mark.asyncio
async def test_generate_content_without_api_key(monkeypatch: MonkeyPatch):
    mock_post = AsyncMock()
    monkeypatch.setattr("httpx.AsyncClient.post", mock_post)

    with pytest.raises(ModelRequestError):
        await _client(api_key=None).generate_content("Hi")

    mock_post.assert_not_called()


@pytest.mark.parametrize(
    "exc, expected",
    [
        (ModelRequestError("quota", status_code=429), True),
        (ModelRequestError("[429 RESOURCE_EXHAUSTED] quota"), True),
        (ModelRequestError("RESOURCE_EXHAUSTED"), True),
        (ModelRequestError("[503 UNAVAILABLE] overloaded", status_code=503), False),
        (ValueError("something else"), False),
    ],
)
def test_is_quota_error(exc, expected):
    assert is_quota_error(exc) is expected


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        Response(200, text="<html>proxy</html>"),
        Response(200, json=["not", "an", "object"]),
        Response(200, json={"candidates": [{"content": {"parts": ["text"]}}]}),
    ],
)
async def test_generate_content_unreadable_body(monkeypatch: MonkeyPatch, response):
    mock_post = AsyncMock()
    mock_post.return_value = response
    monkeypatch.setattr("httpx.AsyncClient.post", mock_post)

    with pytest.raises(ModelRequestError) as exc_info:
        await _client().generate_content("Hi")

    assert exc_info.value.message.startswith("Invalid model response")
    assert not is_quota_error(exc_info.value)
