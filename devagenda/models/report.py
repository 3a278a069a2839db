"""Report model."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, JSON, ForeignKey, Enum, Index
import enum

from devagenda.database import Base


class ReportType(str, enum.Enum):
    """Report period enum."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


class Report(Base):
    """Report model - weekly/monthly commit digests.

    Totals are duplicated from the content payload for querying. There is no
    uniqueness on the period: each generation is kept as history.
    """

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), index=True)
    report_type = Column(Enum(ReportType), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_commits = Column(Integer, default=0)
    total_additions = Column(Integer, default=0)
    total_deletions = Column(Integer, default=0)
    projects_count = Column(Integer, default=0)
    content = Column(JSON)  # period, statistics, generatedAt
    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    __table_args__ = (
        Index("idx_report_user_type", "user_id", "report_type"),
    )

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, type='{self.report_type}', start={self.start_date})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "project_id": self.project_id,
            "report_type": self.report_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "total_commits": self.total_commits,
            "total_additions": self.total_additions,
            "total_deletions": self.total_deletions,
            "projects_count": self.projects_count,
            "content": self.content,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
