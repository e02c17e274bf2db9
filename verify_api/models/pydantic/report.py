from typing import Any, Dict, List, Optional

from pydantic import Field

from ..enum.analysis import ContentType, Verdict
from .base import StrictBaseModel


class ReportRequestIn(StrictBaseModel):
    type: ContentType
    result: Dict[str, Any] = Field(..., description="Result of a previous analysis")
    originalText: Optional[str] = Field(
        None, description="Analyzed text, used to place suspicious sections"
    )


class HighlightSegment(StrictBaseModel):
    text: str
    highlighted: bool = False
    severity: Optional[str] = None
    reason: Optional[str] = None


class Report(StrictBaseModel):
    verdict: Verdict
    label: str
    segments: List[HighlightSegment]
    report: str
