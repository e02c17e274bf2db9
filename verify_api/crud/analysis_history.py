import json
from typing import Any, Dict, List

from fastapi.logger import logger
from sqlalchemy import select

from ..application import Database
from ..models.enum.analysis import ContentType
from ..models.orm.analysis_history import AnalysisHistory as ORMAnalysisHistory
from ..settings.globals import HISTORY_LIMIT


async def create_analysis_record(
    db: Database,
    user_email: str,
    content_type: ContentType,
    content: str,
    result: Dict[str, Any],
) -> ORMAnalysisHistory:
    """Append one analysis to the history.

    Rows are never updated or deleted afterwards.
    """
    row = ORMAnalysisHistory(
        user_email=user_email,
        type=content_type.value,
        content=content,
        result=json.dumps(result, ensure_ascii=False),
    )
    async with db.session() as session:
        session.add(row)
        await session.commit()
        await session.refresh(row)

    logger.debug(f"Stored {content_type.value} analysis {row.id} for {user_email}")
    return row


async def get_recent_analysis_records(
    db: Database, user_email: str, limit: int = HISTORY_LIMIT
) -> List[ORMAnalysisHistory]:
    sql = (
        select(ORMAnalysisHistory)
        .where(ORMAnalysisHistory.user_email == user_email)
        .order_by(ORMAnalysisHistory.created_at.desc(), ORMAnalysisHistory.id.desc())
        .limit(limit)
    )
    async with db.session() as session:
        rows = (await session.scalars(sql)).all()

    return list(rows)
