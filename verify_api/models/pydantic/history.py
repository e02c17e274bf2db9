from datetime import datetime
from typing import List, Optional

from .base import BaseORMRecord


class AnalysisRecord(BaseORMRecord):
    id: int
    user_email: str
    type: str
    content: Optional[str] = None
    result: Optional[str] = None
    created_at: datetime


AnalysisHistory = List[AnalysisRecord]
