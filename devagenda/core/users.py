"""User lookup and GitHub account linking."""

import logging
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from devagenda.core.errors import ValidationError
from devagenda.models.user import User
from devagenda.providers.base import SourceControlProvider
from devagenda.providers.github import GitHubProvider

logger = logging.getLogger(__name__)

ProviderFactory = Callable[[str], SourceControlProvider]


def get_or_create_user(db: Session, user_id: Optional[str]) -> User:
    """Return the user with this id, inserting it first if it does not exist."""
    if not user_id or not str(user_id).strip():
        raise ValidationError("User ID is required")
    user_id = str(user_id).strip()

    user = db.query(User).filter(User.id == user_id).first()
    if user:
        return user

    user = User(id=user_id)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Another request created it first
        db.rollback()
        return db.query(User).filter(User.id == user_id).one()
    db.refresh(user)
    logger.info(f"Created user {user_id}")
    return user


def link_github_account(
    db: Session,
    user: User,
    token: Optional[str],
    username: Optional[str] = None,
    provider_factory: ProviderFactory = GitHubProvider,
) -> User:
    """Verify a GitHub token against the profile endpoint and store it on the user."""
    if not token:
        raise ValidationError("GitHub token is required")

    profile = provider_factory(token).get_profile()

    user.github_token = token
    user.github_username = profile.login
    user.name = profile.name or username
    user.email = profile.email
    user.avatar_url = profile.avatar_url
    db.commit()
    db.refresh(user)
    logger.info(f"Linked GitHub account {profile.login} to user {user.id}")
    return user


def require_github_token(user: User) -> str:
    """The user's GitHub token, or ValidationError if none is linked."""
    if not user.github_token:
        raise ValidationError("GitHub token not configured")
    return user.github_token
