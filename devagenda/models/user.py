"""User model."""

from datetime import datetime

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship

from devagenda.database import Base


class User(Base):
    """User model.

    The identifier is supplied by the caller (the frontend generates it), so
    it is an opaque string rather than an autoincrement key.
    """

    __tablename__ = "users"

    id = Column(String(255), primary_key=True, index=True)
    github_username = Column(String(100), index=True)
    github_token = Column(String(255))
    name = Column(String(255))
    email = Column(String(255))
    avatar_url = Column(String(512))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    projects = relationship("Project", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<User(id='{self.id}', github_username='{self.github_username}')>"

    @property
    def github_connected(self) -> bool:
        return bool(self.github_token)

    def to_dict(self) -> dict:
        """Public representation (the token is never exposed)."""
        return {
            "id": self.id,
            "github_username": self.github_username,
            "github_connected": self.github_connected,
            "name": self.name,
            "email": self.email,
            "avatar_url": self.avatar_url,
        }
