"""Past analyses of a user, newest first."""
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import ORJSONResponse

from ..application import Database, get_db
from ..crud.analysis_history import get_recent_analysis_records
from ..models.pydantic.history import AnalysisHistory, AnalysisRecord
from ..settings.globals import HISTORY_LIMIT, MAX_HISTORY_LIMIT
from . import resolve_user

router = APIRouter()


@router.get(
    "/history",
    response_class=ORJSONResponse,
    response_model=AnalysisHistory,
    tags=["History"],
)
async def get_history(
    *,
    email: Optional[str] = Query(None, description="User email, defaults to anonymous"),
    limit: int = Query(HISTORY_LIMIT, ge=1, le=MAX_HISTORY_LIMIT),
    db: Database = Depends(get_db),
):
    """Most recent analyses submitted with the given email."""
    rows = await get_recent_analysis_records(db, resolve_user(email), limit)
    return [AnalysisRecord.model_validate(row) for row in rows]
