"""Forward content to the external model and return its authenticity
verdict.

Every analysis is stored in the history of the submitting user. While
the model quota is exhausted a canned demo verdict is returned instead.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.logger import logger
from fastapi.responses import ORJSONResponse

from ..application import Database, get_db, get_model_client
from ..crud.analysis_history import create_analysis_record
from ..errors import InvalidResponseError, ModelRequestError
from ..models.enum.analysis import ContentType
from ..models.pydantic.analysis import (
    LinkAnalysisRequestIn,
    ProfileAnalysisRequestIn,
    TextAnalysisRequestIn,
)
from ..settings.globals import CONTENT_SUMMARY_LENGTH
from ..utils.exif import extract_exif
from ..utils.fallback import demo_result
from ..utils.gemini import GeminiClient, InlineMedia, is_quota_error
from ..utils.normalize import normalize_result
from ..utils.prompts import build_prompt
from . import read_upload, require, resolve_user

router = APIRouter()


@router.post("/text", response_class=ORJSONResponse, tags=["Analysis"])
async def analyze_text(
    request: TextAnalysisRequestIn,
    db: Database = Depends(get_db),
    model_client: GeminiClient = Depends(get_model_client),
):
    """Estimate whether a text was written by a human or generated by AI,
    with plagiarism, credibility and suspicious passages."""
    text = require(request.text, "Text is required")

    result = await _analyze(
        ContentType.text,
        model_client,
        prompt_payload={"text": text, "language": request.language},
        fallback_text=text,
    )
    await create_analysis_record(
        db,
        resolve_user(request.userEmail),
        ContentType.text,
        text[:CONTENT_SUMMARY_LENGTH],
        result,
    )
    return result


@router.post("/image", response_class=ORJSONResponse, tags=["Analysis"])
async def analyze_image(
    request: Request,
    image: Optional[UploadFile] = File(None),
    userEmail: Optional[str] = Form(None),
    db: Database = Depends(get_db),
    model_client: GeminiClient = Depends(get_model_client),
):
    """Forensic analysis of an uploaded image, including its EXIF
    metadata."""
    if image is None:
        raise HTTPException(status_code=400, detail="Image is required")

    data = await read_upload(request, image)
    exif = extract_exif(data)

    result = await _analyze(
        ContentType.image,
        model_client,
        media=InlineMedia(image.content_type or "image/jpeg", data),
    )
    result["exif"] = exif

    await create_analysis_record(
        db,
        resolve_user(userEmail),
        ContentType.image,
        f"Image: {image.filename or 'upload'}",
        result,
    )
    return result


@router.post("/video", response_class=ORJSONResponse, tags=["Analysis"])
async def analyze_video(
    request: Request,
    video: Optional[UploadFile] = File(None),
    userEmail: Optional[str] = Form(None),
    db: Database = Depends(get_db),
    model_client: GeminiClient = Depends(get_model_client),
):
    """Look for deepfake signs in an uploaded video."""
    if video is None:
        raise HTTPException(status_code=400, detail="Video is required")

    data = await read_upload(request, video)
    result = await _analyze(
        ContentType.video,
        model_client,
        media=InlineMedia(video.content_type or "video/mp4", data),
    )
    await create_analysis_record(
        db,
        resolve_user(userEmail),
        ContentType.video,
        f"Video: {video.filename or 'upload'}",
        result,
    )
    return result


@router.post("/link", response_class=ORJSONResponse, tags=["Analysis"])
async def analyze_link(
    request: LinkAnalysisRequestIn,
    db: Database = Depends(get_db),
    model_client: GeminiClient = Depends(get_model_client),
):
    """Rate the credibility of a URL and flag likely fake news."""
    url = require(request.url, "URL is required")

    result = await _analyze(ContentType.link, model_client, prompt_payload={"url": url})
    await create_analysis_record(
        db, resolve_user(request.userEmail), ContentType.link, url, result
    )
    return result


@router.post("/profile", response_class=ORJSONResponse, tags=["Analysis"])
async def analyze_profile(
    request: ProfileAnalysisRequestIn,
    db: Database = Depends(get_db),
    model_client: GeminiClient = Depends(get_model_client),
):
    """Estimate whether a social media profile is a bot or an AI
    influencer."""
    url = require(request.resolved_url, "Profile URL is required")

    result = await _analyze(
        ContentType.profile,
        model_client,
        prompt_payload={"url": url, "platform": request.platform},
    )
    await create_analysis_record(
        db, resolve_user(request.userEmail), ContentType.profile, url, result
    )
    return result


async def _analyze(
    content_type: ContentType,
    model_client: GeminiClient,
    prompt_payload: Optional[Dict[str, Any]] = None,
    media: Optional[InlineMedia] = None,
    fallback_text: Optional[str] = None,
) -> Dict[str, Any]:
    prompt = build_prompt(content_type, **(prompt_payload or {}))

    try:
        raw = await model_client.generate_content(
            prompt.text, media=media, response_schema=prompt.response_schema
        )
        return normalize_result(content_type, raw)

    except ModelRequestError as e:
        if is_quota_error(e):
            logger.warning(
                f"Model quota exhausted, answering {content_type.value} analysis in demo mode"
            )
            return demo_result(content_type, fallback_text)
        logger.error(f"{content_type.value} analysis failed: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)

    except InvalidResponseError as e:
        raise HTTPException(status_code=500, detail=str(e))
