"""
Script that creates the initial administrator of the book inventory.

Usage:
    python scripts/seed_admin.py

Note:
    - Does nothing if a user named 'admin' already exists.
    - Change the password right after the first login.
"""

import logging
import sys
from typing import Optional

from sqlalchemy.orm import Session

from bookinventory.core.errors import ConflictError
from bookinventory.crud.crud_user import create_user, get_user_by_username
from bookinventory.db.session import SessionLocal, init_db
from bookinventory.models.enums import Role
from bookinventory.models.user import User
from bookinventory.schemas.user import UserCreate

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

ADMIN_USERNAME: str = "admin"
ADMIN_NAME: str = "Admin User"
ADMIN_PASSWORD: str = "password"


def seed_admin(db: Session) -> Optional[User]:
    """
    Creates the administrator if missing.

    Returns:
        Optional[User]: The new administrator, or None if one already existed.
    """
    if get_user_by_username(db, ADMIN_USERNAME) is not None:
        logger.info("Admin user already exists")
        return None
    try:
        admin = create_user(
            db,
            UserCreate(username=ADMIN_USERNAME, name=ADMIN_NAME, password=ADMIN_PASSWORD),
            role=Role.ADMIN,
        )
    except ConflictError:
        logger.info("Admin user was created concurrently")
        return None
    logger.info(f"Admin user created successfully (id={admin.id})")
    return admin


if __name__ == "__main__":
    db_session: Optional[Session] = None
    try:
        init_db()
        db_session = SessionLocal()
        seed_admin(db_session)
    except Exception as main_exc:
        logger.exception(f"Error seeding admin user: {main_exc}")
        sys.exit(1)
    finally:
        if db_session:
            db_session.close()
