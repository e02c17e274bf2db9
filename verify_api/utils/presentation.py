from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from ..models.enum.analysis import VERDICT_LABELS, ContentType, Verdict
from ..models.pydantic.report import HighlightSegment

LIKELY_AI_THRESHOLD = 70
SUSPICIOUS_THRESHOLD = 40
RULE = "─" * 40


def verdict_for(ai_probability: Optional[float]) -> Verdict:
    score = ai_probability or 0
    if score >= LIKELY_AI_THRESHOLD:
        return Verdict.likely_ai
    elif score >= SUSPICIOUS_THRESHOLD:
        return Verdict.suspicious
    return Verdict.likely_authentic


def highlight_segments(
    text: str, sections: Optional[Sequence[Dict[str, Any]]]
) -> List[HighlightSegment]:
    """Split `text` into plain and highlighted segments.

    Sections are placed longest first, on the first occurrence inside
    each plain segment. Text already highlighted is never split again, so
    a shorter fragment inside a longer one is dropped, and a fragment
    that occurs nowhere is ignored.
    """
    parts: List[Union[str, HighlightSegment]] = [text]

    if not isinstance(sections, (list, tuple)):
        sections = []
    candidates = [
        s
        for s in sections
        if isinstance(s, dict) and isinstance(s.get("text"), str) and s["text"]
    ]
    for section in sorted(candidates, key=lambda s: len(s["text"]), reverse=True):
        fragment: str = section["text"]
        new_parts: List[Union[str, HighlightSegment]] = []
        for part in parts:
            index = part.find(fragment) if isinstance(part, str) else -1
            if index == -1:
                new_parts.append(part)
                continue
            before, after = part[:index], part[index + len(fragment) :]
            if before:
                new_parts.append(before)
            new_parts.append(
                HighlightSegment(
                    text=fragment,
                    highlighted=True,
                    severity=_label(section.get("severity")),
                    reason=_label(section.get("reason")),
                )
            )
            if after:
                new_parts.append(after)
        parts = new_parts

    return [
        HighlightSegment(text=part) if isinstance(part, str) else part
        for part in parts
        if not isinstance(part, str) or part
    ]


def build_report(
    content_type: ContentType,
    result: Dict[str, Any],
    generated_at: Optional[datetime] = None,
) -> str:
    """Plain text authenticity report offered as a download."""
    generated_at = generated_at or datetime.now()
    ai_score = result.get("aiProbability") or 0
    human_score = result.get("humanProbability") or 0
    explanation = (result.get("explanation") or "").replace("**", "")

    return "\n".join(
        [
            "AUTHENTICITY REPORT",
            f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}",
            RULE,
            f"Type: {content_type.value.upper()}",
            f"Verdict: {VERDICT_LABELS[verdict_for(ai_score)]}",
            f"AI Probability: {ai_score}%",
            f"Authenticity: {human_score}%",
            f"Confidence: {result.get('confidence')}",
            RULE,
            "ANALYSIS:",
            explanation,
        ]
    )


def _label(value: Any) -> Optional[str]:
    return None if value is None else str(value)
