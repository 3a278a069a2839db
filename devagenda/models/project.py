"""Project model."""

from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
import enum

from devagenda.database import Base


class ProjectStatus(str, enum.Enum):
    """Project status enum."""

    TODO = "to-do"
    FUTURE = "future"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class Project(Base):
    """Project model - optionally linked to a GitHub repository."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(Enum(ProjectStatus), nullable=False, default=ProjectStatus.TODO, index=True)
    github_owner = Column(String(100))
    github_repo = Column(String(100))
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="projects")
    commits = relationship("Commit", back_populates="project", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_project_user_status", "user_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name='{self.name}', status='{self.status}')>"

    @property
    def has_repository(self) -> bool:
        return bool(self.github_owner and self.github_repo)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "description": self.description,
            "status": self.status.value if self.status else None,
            "github_owner": self.github_owner,
            "github_repo": self.github_repo,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
