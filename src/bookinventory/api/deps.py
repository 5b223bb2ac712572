"""
FastAPI dependencies: the database session, the authenticated caller and
route-level role gates.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from bookinventory.core.errors import UnauthenticatedError
from bookinventory.core.permissions import ensure_role
from bookinventory.core.security import decode_access_token
from bookinventory.crud import get_user_by_id
from bookinventory.db.session import get_db
from bookinventory.models.enums import Role
from bookinventory.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolves the caller from the bearer credential.

    Raises:
        UnauthenticatedError: No credential, a bad signature, an expired
            credential or a user that no longer exists.
    """
    if credentials is None:
        raise UnauthenticatedError("Not authorized, no token")
    payload = decode_access_token(credentials.credentials)
    user = get_user_by_id(db, payload.sub)
    if user is None:
        raise UnauthenticatedError("User not found")
    return user


def require_roles(*roles: Role):
    """Route-level gate: the caller must hold one of `roles`."""
    def dependency(current_user: User = Depends(get_current_user)) -> User:
        ensure_role(current_user, *roles)
        return current_user
    return dependency
