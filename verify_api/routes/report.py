"""Render a previous analysis result for display or download."""
from fastapi import APIRouter, HTTPException
from fastapi.responses import ORJSONResponse

from ..errors import InvalidResponseError
from ..models.enum.analysis import VERDICT_LABELS
from ..models.pydantic.report import Report, ReportRequestIn
from ..utils.normalize import dump_result, validate_result
from ..utils.presentation import build_report, highlight_segments, verdict_for

router = APIRouter()


@router.post(
    "/report",
    response_class=ORJSONResponse,
    response_model=Report,
    tags=["Report"],
)
async def render_report(request: ReportRequestIn):
    """Verdict banner, highlighted text and plain text report of a
    result."""
    try:
        result = dump_result(validate_result(request.type, request.result))
    except InvalidResponseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    verdict = verdict_for(result.get("aiProbability"))
    segments = highlight_segments(
        request.originalText or "", result.get("suspiciousSections")
    )

    return Report(
        verdict=verdict,
        label=VERDICT_LABELS[verdict],
        segments=segments,
        report=build_report(request.type, result),
    )
