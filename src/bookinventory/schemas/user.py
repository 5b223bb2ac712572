"""
Pydantic schemas for the User entity of the API.
Defines the input and output models for registration, login, user management
and the authentication response.
"""

import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field

from bookinventory.models.enums import Role
from bookinventory.schemas.book import CamelModel

class UserCreate(CamelModel):
    """
    Schema for registering a user.

    Attributes:
        username (str): Unique login name, at least 3 characters.
        name (str): Display name.
        password (str): Plain text password (hashed before storage), at least 6 characters.
    """
    username: str = Field(..., min_length=3, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=6, max_length=72)

    # passwords are taken verbatim
    model_config = ConfigDict(str_strip_whitespace=False)

class UserLogin(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(str_strip_whitespace=False)

class UserUpdate(CamelModel):
    """Only the display name and the role can be changed."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[Role] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)

class UserSchema(CamelModel):
    """
    Output schema for a user (never includes the password hash).
    """
    id: str
    username: str
    name: str
    role: Role
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    model_config = ConfigDict(from_attributes=True)

class UserPage(CamelModel):
    users: List[UserSchema]
    total: int
    page: int
    total_pages: int

class AuthResponse(CamelModel):
    success: bool = True
    token: str
    expires_at: datetime.datetime
    user: UserSchema
