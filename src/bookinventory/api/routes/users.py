"""
/users routes. Every route is restricted to ADMIN.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookinventory import crud
from bookinventory.api.deps import require_roles
from bookinventory.api.responses import envelope
from bookinventory.core.errors import NotFoundError
from bookinventory.db.session import get_db
from bookinventory.models.enums import Role
from bookinventory.models.user import User
from bookinventory.schemas.book import PageRequest
from bookinventory.schemas.user import UserPage, UserSchema, UserUpdate

admin_only = require_roles(Role.ADMIN)

router = APIRouter(prefix="/users", tags=["users"])


def serialize_user(user: User) -> dict:
    return UserSchema.model_validate(user).model_dump(by_alias=True, mode="json")


@router.get("")
def list_users(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    result = crud.get_users(db, PageRequest.coerce(page, limit))
    data = UserPage(
        users=[UserSchema.model_validate(user) for user in result.users],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )
    return envelope(data.model_dump(by_alias=True, mode="json"))


@router.get("/{user_id}")
def get_user(user_id: str, db: Session = Depends(get_db), current_user: User = Depends(admin_only)):
    user = crud.get_user_by_id(db, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return envelope(serialize_user(user))


@router.put("/{user_id}")
def update_user(
    user_id: str,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_only),
):
    user, role_changed = crud.update_user(db, user_id, payload, actor=current_user)
    return envelope(serialize_user(user), roleChanged=role_changed)
