"""
API-specific dependencies for v1 endpoints
"""
from typing import Optional
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from agency_crm.core.dependencies import get_db
from agency_crm.database.models import User
from agency_crm.utils.exceptions import AuthenticationError, PermissionDeniedError


def get_current_user(
    x_user_id: Optional[int] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolve the calling user from the X-User-Id header.
    Session handling happens upstream; this only maps the id to a user.
    """
    if x_user_id is None:
        raise AuthenticationError()
    user = db.get(User, x_user_id)
    if user is None:
        raise AuthenticationError("Unknown user")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Allow only admins through"""
    if user.role != "admin":
        raise PermissionDeniedError("Access denied: admin only")
    return user
