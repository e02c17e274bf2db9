import json
import re
from typing import Any, Dict, Optional

from fastapi.logger import logger
from pydantic import ValidationError

from ..errors import InvalidResponseError
from ..models.enum.analysis import ContentType
from ..models.pydantic.analysis import RESULT_MODELS, AnalysisResultBase

FENCE_OPEN = re.compile(r"```json\s*", re.IGNORECASE)
FENCE = re.compile(r"```\s*")
JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_model_json(text: Optional[str]) -> Dict[str, Any]:
    """Coerce raw model output into a JSON object.

    Tries a strict parse first, then the same text with markdown code
    fences removed, then the outermost `{...}` span. Anything that still
    does not parse to an object yields an empty dict.
    """
    text = text or ""

    parsed = _loads(text)
    if parsed is not None:
        return parsed

    stripped = FENCE.sub("", FENCE_OPEN.sub("", text)).strip()
    parsed = _loads(stripped)
    if parsed is not None:
        return parsed

    match = JSON_OBJECT.search(stripped)
    if match:
        parsed = _loads(match.group(0))
        if parsed is not None:
            return parsed

    logger.error(f"Could not recover a JSON object from model output: {text[:200]!r}")
    return dict()


def backfill_probabilities(result: AnalysisResultBase) -> AnalysisResultBase:
    """Derive the missing half of the ai/human probability pair."""
    if result.humanProbability is None and result.aiProbability is not None:
        result.humanProbability = 100 - result.aiProbability
    elif result.aiProbability is None and result.humanProbability is not None:
        result.aiProbability = 100 - result.humanProbability
    return result


def validate_result(content_type: ContentType, data: Dict[str, Any]) -> AnalysisResultBase:
    model = RESULT_MODELS[content_type]
    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Model returned a malformed {content_type.value} result: {e}")
        raise InvalidResponseError(
            f"Model returned a malformed {content_type.value} result: "
            + "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
        )


def normalize_result(content_type: ContentType, text: Optional[str]) -> Dict[str, Any]:
    """Parse, validate and complete a model answer for one content type."""
    result = validate_result(content_type, parse_model_json(text))
    backfill_probabilities(result)
    return dump_result(result)


def dump_result(result: AnalysisResultBase) -> Dict[str, Any]:
    return result.model_dump(exclude_none=True)


def _loads(text: str) -> Optional[Dict[str, Any]]:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None
