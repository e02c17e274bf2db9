"""Free-form conversation with the VERIFY assistant."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.logger import logger
from fastapi.responses import ORJSONResponse

from ..application import get_model_client
from ..errors import ModelRequestError
from ..models.pydantic.assistant import (
    ChatRequestIn,
    ChatResponse,
    CompareRequestIn,
    CompareResponse,
    GenerateRequestIn,
    GenerateResponse,
)
from ..utils.fallback import DEMO_CHAT_REPLY, DEMO_COMPARISON, DEMO_GENERATION
from ..utils.gemini import GeminiClient, is_quota_error
from ..utils.prompts import ASSISTANT_INSTRUCTION, build_compare_prompt
from . import require

router = APIRouter()


@router.post(
    "/chat",
    response_class=ORJSONResponse,
    response_model=ChatResponse,
    tags=["Assistant"],
)
async def chat(
    request: ChatRequestIn, model_client: GeminiClient = Depends(get_model_client)
):
    """Ask the assistant about content authenticity and the platform."""
    message = require(request.message, "Message required")
    text = await _complete(
        model_client, message, DEMO_CHAT_REPLY, system_instruction=ASSISTANT_INSTRUCTION
    )
    return ChatResponse(text=text)


@router.post(
    "/compare",
    response_class=ORJSONResponse,
    response_model=CompareResponse,
    tags=["Assistant"],
)
async def compare(
    request: CompareRequestIn, model_client: GeminiClient = Depends(get_model_client)
):
    """Compare two versions of a content for signs of AI generation."""
    content1 = require(request.content1, "Both contents are required")
    content2 = require(request.content2, "Both contents are required")

    prompt = build_compare_prompt(request.type, content1, content2)
    comparison = await _complete(model_client, prompt.text, DEMO_COMPARISON)
    return CompareResponse(comparison=comparison)


@router.post(
    "/generate",
    response_class=ORJSONResponse,
    response_model=GenerateResponse,
    tags=["Assistant"],
)
async def generate(
    request: GenerateRequestIn, model_client: GeminiClient = Depends(get_model_client)
):
    """Pass a prompt through to the model unchanged."""
    prompt = require(request.prompt, "Prompt is required")
    text = await _complete(model_client, prompt, DEMO_GENERATION)
    return GenerateResponse(text=text)


async def _complete(
    model_client: GeminiClient, prompt: str, demo_reply: str, **kwargs
) -> str:
    try:
        return await model_client.generate_content(prompt, **kwargs)
    except ModelRequestError as e:
        if is_quota_error(e):
            logger.warning("Model quota exhausted, answering in demo mode")
            return demo_reply
        raise HTTPException(status_code=500, detail=e.message)
