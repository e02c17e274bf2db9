"""Thin async client for the Gemini `generateContent` REST endpoint."""
import base64
from typing import Any, Dict, List, Optional

from fastapi.logger import logger
from httpx import AsyncClient, HTTPError, TimeoutException
from httpx import Response as HTTPXResponse

from ..errors import ModelRequestError

QUOTA_SIGNATURES = ("429", "RESOURCE_EXHAUSTED")


class InlineMedia:
    """Binary payload sent inline, base64 encoded, next to the prompt."""

    def __init__(self, mime_type: str, data: bytes):
        self.mime_type = mime_type
        self.data = data

    def to_part(self) -> Dict[str, Any]:
        return {
            "inlineData": {
                "mimeType": self.mime_type,
                "data": base64.b64encode(self.data).decode("ascii"),
            }
        }


class GeminiClient:
    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        base_url: str,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate_content(
        self,
        prompt: str,
        media: Optional[InlineMedia] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        """Send a single prompt and return the text of the first candidate."""

        if not self.api_key:
            raise ModelRequestError("GEMINI_API_KEY is not configured")

        payload = build_payload(prompt, media, response_schema, system_instruction)
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

        logger.debug(
            f"Calling model {self.model} with a {len(prompt)} character prompt"
            + (f" and {media.mime_type} media" if media else "")
        )

        try:
            async with AsyncClient() as client:
                response: HTTPXResponse = await client.post(
                    self.url, json=payload, headers=headers, timeout=self.timeout
                )
        except TimeoutException:
            raise ModelRequestError("Call to model timed-out. Please try again.")
        except HTTPError as e:
            raise ModelRequestError(f"Call to model failed: {e}")

        if response.status_code != 200:
            message = _error_message(response)
            logger.error(
                f"Model responded with status code {response.status_code}: {message}"
            )
            raise ModelRequestError(message, status_code=response.status_code)

        try:
            return extract_text(response.json())
        except (ValueError, AttributeError, TypeError) as e:
            logger.error(f"Model answered with an unreadable body: {response.text[:200]!r}")
            raise ModelRequestError(f"Invalid model response: {e}")


def build_payload(
    prompt: str,
    media: Optional[InlineMedia] = None,
    response_schema: Optional[Dict[str, Any]] = None,
    system_instruction: Optional[str] = None,
) -> Dict[str, Any]:
    parts: List[Dict[str, Any]] = [{"text": prompt}]
    if media is not None:
        parts.append(media.to_part())

    payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": parts}]}
    if system_instruction:
        payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
    if response_schema:
        payload["generationConfig"] = {
            "responseMimeType": "application/json",
            "responseSchema": response_schema,
        }
    return payload


def extract_text(body: Dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate.

    A blocked or empty answer yields an empty string, which the
    normalizer turns into an empty result.
    """
    candidates = body.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)


def is_quota_error(exc: Exception) -> bool:
    if getattr(exc, "status_code", None) == 429:
        return True
    message = str(getattr(exc, "message", None) or exc)
    return any(signature in message for signature in QUOTA_SIGNATURES)


def _error_message(response: HTTPXResponse) -> str:
    try:
        error = response.json()["error"]
        return f"[{error.get('code', response.status_code)} {error.get('status', '')}] {error['message']}"
    except (ValueError, KeyError, TypeError, AttributeError):
        return f"[{response.status_code}] {response.text}"
