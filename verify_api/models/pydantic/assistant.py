from typing import Optional

from pydantic import Field

from .base import StrictBaseModel


class ChatRequestIn(StrictBaseModel):
    message: Optional[str] = Field(None, description="User message")


class ChatResponse(StrictBaseModel):
    text: str


class CompareRequestIn(StrictBaseModel):
    type: str = Field("text", description="Kind of content being compared")
    content1: Optional[str] = None
    content2: Optional[str] = None


class CompareResponse(StrictBaseModel):
    comparison: str


class GenerateRequestIn(StrictBaseModel):
    prompt: Optional[str] = None


class GenerateResponse(StrictBaseModel):
    text: str
