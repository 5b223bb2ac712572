"""
Authorization rules for mutations.

These checks are the binding contract: they run on the server after the caller
has been identified and before anything is written. Any role may read.
"""

import logging

from bookinventory.core.errors import ForbiddenError
from bookinventory.models.book import Book
from bookinventory.models.enums import Role
from bookinventory.models.user import User

logger = logging.getLogger(__name__)

BOOK_WRITER_ROLES = frozenset({Role.ADMIN, Role.EDITOR})


def ensure_role(user: User, *roles: Role) -> None:
    """Raises ForbiddenError unless `user` has one of `roles`."""
    if user.role not in roles:
        logger.warning(f"User {user.id} with role {user.role.value} denied, requires one of {[r.value for r in roles]}")
        raise ForbiddenError(f"User role {user.role.value} is not authorized to access this route")


def ensure_can_create_book(user: User) -> None:
    ensure_role(user, *BOOK_WRITER_ROLES)


def ensure_can_modify_book(user: User, book: Book, action: str = "update") -> None:
    """
    Update and delete need a writer role, and an EDITOR may only touch the
    records they created. ADMIN may touch any record.
    """
    ensure_role(user, *BOOK_WRITER_ROLES)
    if user.role != Role.ADMIN and book.created_by_id != user.id:
        logger.warning(f"User {user.id} tried to {action} book {book.id} owned by {book.created_by_id}")
        raise ForbiddenError(f"Not authorized to {action} this book")


def ensure_can_manage_users(user: User) -> None:
    ensure_role(user, Role.ADMIN)


def ensure_can_update_user(actor: User, target: User, changes: dict) -> None:
    """
    Only an ADMIN manages users. An ADMIN can never touch their own role
    through this path, whatever role value is sent.
    """
    ensure_can_manage_users(actor)
    if actor.id == target.id and "role" in changes:
        logger.warning(f"Admin {actor.id} tried to change their own role")
        raise ForbiddenError("You cannot update your own role")
