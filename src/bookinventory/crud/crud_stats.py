"""
Dashboard statistics computed over the whole, unfiltered inventory.
The snapshot is recomputed on every call; nothing is cached.
"""

from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..models.book import Book
from ..models.enums import BookStatus, BookType, Category
from ..schemas.book import BookStats


def _count_by(db: Session, column, enum_cls) -> Dict[str, int]:
    # every enum value is present so clients can render empty buckets
    counts = {member.value: 0 for member in enum_cls}
    rows = db.execute(select(column, func.count(Book.id)).group_by(column)).all()
    for value, count in rows:
        counts[enum_cls(value).value] = count
    return counts


def get_book_stats(db: Session) -> BookStats:
    """
    Computes total, new/old counts and per-category and per-status counts.

    Returns:
        BookStats: The snapshot. Categories and statuses with no books appear with 0.
    """
    total = db.execute(select(func.count(Book.id))).scalar_one()
    by_type = _count_by(db, Book.book_type, BookType)
    return BookStats(
        total=total,
        new_books=by_type[BookType.NEW.value],
        old_books=by_type[BookType.OLD.value],
        by_category=_count_by(db, Book.category, Category),
        by_status=_count_by(db, Book.status, BookStatus),
    )
