"""Daily reflection endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from devagenda.api.deps import get_current_user, success
from devagenda.core import reflections
from devagenda.database import get_db
from devagenda.models.user import User

router = APIRouter()


class ReflectionUpdate(BaseModel):
    """Reflection update schema."""

    date: Optional[str] = None
    content: Optional[str] = None
    feeling: Optional[str] = None


@router.get("/")
def get_daily_reflection(
    date: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Reflection for a day (default today) with that day's commits."""
    return success(reflections.get_reflection_with_commits(db, current_user.id, date))


@router.put("/")
def update_daily_reflection(
    payload: ReflectionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update content and/or feeling of an existing reflection."""
    reflection = reflections.update_reflection(
        db,
        current_user.id,
        payload.date,
        content=payload.content,
        feeling=payload.feeling,
    )
    return success(reflection.to_dict())
