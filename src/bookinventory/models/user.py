"""
ORM model for the User entity (an authenticated member of staff).
Defines the identity fields, the role and the relationship to the books the
user created.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from bookinventory.db.session import Base
from bookinventory.models.common import new_id, utcnow, enum_column
from bookinventory.models.enums import Role

class User(Base):
    """
    Represents a registered user of the system.

    Attributes:
        id (str): Opaque identifier assigned on insert.
        username (str): Unique login name (case-sensitive).
        name (str): Display name.
        hashed_password (str): Salted password hash. Never returned by the API.
        role (Role): ADMIN, EDITOR or VIEWER.
        created_at (datetime): Creation date.
        updated_at (datetime): Date of the last update.
        books (List[Book]): Books created by this user.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = enum_column(Role, nullable=False, default=Role.VIEWER)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    books = relationship("Book", back_populates="creator")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}', role={self.role.value})>"
