"""Daily reflection model."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey, UniqueConstraint

from devagenda.database import Base


class DailyReflection(Base):
    """Daily reflection - one journal entry per user per calendar day.

    commits_count and projects_worked are a snapshot taken when the row is
    created and are not refreshed by later syncs or updates.
    """

    __tablename__ = "daily_reflections"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    reflection_date = Column(Date, nullable=False, index=True)
    commits_count = Column(Integer, default=0)
    projects_worked = Column(Integer, default=0)
    content = Column(Text, default="")
    feeling = Column(String(50), default="")
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "reflection_date", name="uq_reflection_user_date"),
    )

    def __repr__(self) -> str:
        return f"<DailyReflection(id={self.id}, user_id='{self.user_id}', date={self.reflection_date})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "reflection_date": self.reflection_date.isoformat(),
            "commits_count": self.commits_count,
            "projects_worked": self.projects_worked,
            "content": self.content,
            "feeling": self.feeling,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
