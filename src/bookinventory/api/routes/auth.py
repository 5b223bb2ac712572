"""
/auth routes: registration, login and the current identity.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookinventory import crud
from bookinventory.api.deps import get_current_user
from bookinventory.api.responses import envelope
from bookinventory.core.errors import UnauthenticatedError
from bookinventory.core.security import create_access_token
from bookinventory.db.session import get_db
from bookinventory.models.user import User
from bookinventory.schemas.user import AuthResponse, UserCreate, UserLogin, UserSchema

router = APIRouter(prefix="/auth", tags=["auth"])


def auth_response(user: User) -> dict:
    issued = create_access_token(user.id, user.role.value)
    response = AuthResponse(token=issued.token, expires_at=issued.expires_at, user=UserSchema.model_validate(user))
    return response.model_dump(by_alias=True, mode="json", exclude={"user": {"created_at", "updated_at"}})


@router.post("/register", status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    user = crud.create_user(db, payload)
    return auth_response(user)


@router.post("/login")
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = crud.authenticate_user(db, payload.username, payload.password)
    if user is None:
        raise UnauthenticatedError("Invalid credentials")
    return auth_response(user)


@router.get("/me")
def me(current_user: User = Depends(get_current_user)):
    return envelope(UserSchema.model_validate(current_user).model_dump(by_alias=True, mode="json"))
