"""Shared API dependencies and the response envelope."""

from typing import Any, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from devagenda.core.errors import AuthenticationError
from devagenda.core.users import get_or_create_user
from devagenda.database import get_db
from devagenda.models.user import User


def success(data: Any = None, **extra) -> dict:
    """Wrap a payload in the success envelope."""
    body = {"success": True, "data": data}
    body.update(extra)
    return body


def get_user_id_from_request(
    request: Request,
    x_user_id: Optional[str] = Header(None),
) -> str:
    """Get the caller id from the X-User-Id header or the userId query parameter."""
    if x_user_id:
        return x_user_id
    user_id = request.query_params.get("userId")
    if user_id:
        return user_id
    raise AuthenticationError("Authentication required")


def get_current_user(
    user_id: str = Depends(get_user_id_from_request),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller, creating the user on first contact."""
    return get_or_create_user(db, user_id)
