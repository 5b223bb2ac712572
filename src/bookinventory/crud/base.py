"""Commit helper shared by the CRUD modules."""

import logging

from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from bookinventory.core.errors import ConflictError, TransientStoreError

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, conflict_message: str) -> None:
    """
    Commits the pending unit of work. On failure the session is rolled back so
    nothing from this request reaches the store.

    Raises:
        ConflictError: The store rejected the write on a uniqueness constraint.
        TransientStoreError: The store timed out or the connection failed.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error on commit: {e.orig}")
        raise ConflictError(conflict_message) from e
    except (OperationalError, PoolTimeoutError) as e:
        db.rollback()
        logger.error(f"Store unavailable on commit: {e}")
        raise TransientStoreError() from e
