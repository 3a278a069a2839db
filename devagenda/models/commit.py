"""Commit model - commits synced from GitHub."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from devagenda.database import Base


class Commit(Base):
    """Commit model, unique per (project, sha)."""

    __tablename__ = "commits"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    sha = Column(String(40), nullable=False)
    message = Column(Text)
    author_name = Column(String(255))
    author_email = Column(String(255))
    commit_date = Column(DateTime, nullable=False)  # naive UTC
    url = Column(String(512))
    additions = Column(Integer, default=0)
    deletions = Column(Integer, default=0)
    files_changed = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    project = relationship("Project", back_populates="commits")

    __table_args__ = (
        UniqueConstraint("project_id", "sha", name="uq_commit_project_sha"),
        Index("idx_commit_project_date", "project_id", "commit_date"),
    )

    def __repr__(self) -> str:
        return f"<Commit(id={self.id}, project_id={self.project_id}, sha='{self.sha[:7]}')>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "sha": self.sha,
            "message": self.message,
            "author_name": self.author_name,
            "author_email": self.author_email,
            "commit_date": self.commit_date.isoformat() if self.commit_date else None,
            "url": self.url,
            "additions": self.additions,
            "deletions": self.deletions,
            "files_changed": self.files_changed,
        }
