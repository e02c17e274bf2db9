from sqlalchemy import Column, Index, Integer, String, Text

from .base import Base, CreatedOnMixin


class AnalysisHistory(CreatedOnMixin, Base):
    __tablename__ = "analysis_history"
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_email = Column(String, nullable=False)
    type = Column(String, nullable=False)
    content = Column(Text)
    result = Column(Text)

    __table_args__ = (
        Index("analysis_history_user_email_created_at_idx", "user_email", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<AnalysisHistory id={self.id} user_email={self.user_email!r} "
            f"type={self.type!r}>"
        )
