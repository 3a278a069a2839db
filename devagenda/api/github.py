"""GitHub account endpoints."""

from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from devagenda.api.deps import get_current_user, success
from devagenda.core.users import link_github_account, require_github_token
from devagenda.database import get_db
from devagenda.models.user import User
from devagenda.providers.github import GitHubProvider

router = APIRouter()


class ConnectRequest(BaseModel):
    """GitHub connect schema."""

    token: Optional[str] = None
    username: Optional[str] = None


@router.post("/connect")
def connect_github(
    payload: ConnectRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Link a GitHub account to the caller after verifying the token."""
    user = link_github_account(db, current_user, payload.token, payload.username)
    return success(
        {"github_username": user.github_username, "avatar_url": user.avatar_url},
        message="GitHub account connected successfully",
    )


@router.get("/repositories")
def list_repositories(current_user: User = Depends(get_current_user)):
    """Repositories visible to the linked account."""
    provider = GitHubProvider(require_github_token(current_user))
    return success([asdict(r) for r in provider.list_repositories()])


@router.get("/user")
def get_github_user(current_user: User = Depends(get_current_user)):
    """Profile of the linked account."""
    provider = GitHubProvider(require_github_token(current_user))
    return success(asdict(provider.get_profile()))
