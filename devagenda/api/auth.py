"""User initialization endpoint."""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from devagenda.api.deps import success
from devagenda.core.users import get_or_create_user
from devagenda.database import get_db

router = APIRouter()


class InitRequest(BaseModel):
    """User init schema."""

    userId: Optional[str] = None


@router.post("/init")
def init_user(payload: InitRequest, db: Session = Depends(get_db)):
    """Create the user if it does not exist and return its public profile."""
    user = get_or_create_user(db, payload.userId)
    return success(
        {
            "id": user.id,
            "github_username": user.github_username,
            "github_connected": user.github_connected,
        }
    )
