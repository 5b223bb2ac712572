"""
CRUD operations for the User model.
Includes registration, credential checks for login, paginated listing and the
admin-only name/role update.
"""

import logging
from typing import List, NamedTuple, Optional

from sqlalchemy import desc, func, select
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, NotFoundError
from ..core.permissions import ensure_can_update_user
from ..core.security import get_password_hash, verify_password
from ..models.common import utcnow
from ..models.enums import Role
from ..models.user import User
from ..schemas.book import PageRequest
from ..schemas.user import UserCreate, UserUpdate
from .base import commit_or_raise

logger = logging.getLogger(__name__)

DUPLICATE_USERNAME_MESSAGE = "User already exists"


class UserListResult(NamedTuple):
    users: List[User]
    total: int
    page: int
    total_pages: int


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """
    Retrieves a user by username (exact, case-sensitive match).

    Args:
        db (Session): SQLAlchemy session.
        username (str): Username to look up.

    Returns:
        Optional[User]: The user if it exists, None otherwise.
    """
    return db.query(User).filter(User.username == username).first()

def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)

def create_user(db: Session, user: UserCreate, role: Role = Role.VIEWER) -> User:
    """
    Creates a new user with a hashed password.

    Args:
        db (Session): SQLAlchemy session.
        user (UserCreate): Registration data.
        role (Role): Role to grant; self-registration always gets VIEWER.

    Returns:
        User: The created user.

    Raises:
        ConflictError: The username is taken.
    """
    if get_user_by_username(db, user.username) is not None:
        raise ConflictError(DUPLICATE_USERNAME_MESSAGE)

    hashed_password: str = get_password_hash(user.password)
    now = utcnow()
    db_user: User = User(
        username=user.username,
        name=user.name,
        hashed_password=hashed_password,
        role=role,
        created_at=now,
        updated_at=now,
    )
    db.add(db_user)
    # the unique index still decides when two registrations race
    commit_or_raise(db, DUPLICATE_USERNAME_MESSAGE)
    db.refresh(db_user)
    logger.info(f"User {db_user.id} ({db_user.username}) registered with role {role.value}")
    return db_user

def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """
    Returns the user when the username exists and the password matches, None otherwise.
    """
    user = get_user_by_username(db, username)
    if user is None or not verify_password(password, user.hashed_password):
        logger.info(f"Failed login attempt for username '{username}'")
        return None
    return user

def get_users(db: Session, page: Optional[PageRequest] = None) -> UserListResult:
    """
    Returns a page of users, most recent first.

    Args:
        db (Session): SQLAlchemy session.
        page (Optional[PageRequest]): Page number and size.

    Returns:
        UserListResult: Users, total count, page number and total pages.
    """
    page = page or PageRequest()
    total = db.execute(select(func.count(User.id))).scalar_one()
    stmt = (
        select(User)
        .order_by(desc(User.created_at), desc(User.id))
        .offset(page.skip)
        .limit(page.limit)
    )
    users = list(db.execute(stmt).scalars().all())
    return UserListResult(users=users, total=total, page=page.page, total_pages=page.total_pages(total))

def update_user(db: Session, user_id: str, user_in: UserUpdate, actor: User) -> tuple[User, bool]:
    """
    Updates a user's name and/or role.

    Returns:
        tuple[User, bool]: The updated user and whether the role changed.

    Raises:
        NotFoundError: No user with that id.
        ForbiddenError: The actor is not an ADMIN, or is an ADMIN sending a role for themselves.
    """
    db_user = get_user_by_id(db, user_id)
    if db_user is None:
        raise NotFoundError("User not found")

    changes = user_in.changes()
    ensure_can_update_user(actor, db_user, changes)

    role_changed = "role" in changes and changes["role"] != db_user.role
    for field, value in changes.items():
        setattr(db_user, field, value)

    commit_or_raise(db, "User could not be updated")
    db.refresh(db_user)
    if role_changed:
        logger.info(f"User {db_user.id} role changed to {db_user.role.value} by admin {actor.id}")
    return db_user, role_changed
