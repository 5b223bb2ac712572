"""
Script that fills an empty inventory with sample books.

A handful of well-known titles is inserted first, then Faker generates filler
records until NUM_BOOKS is reached. Every book is owned by the administrator
created by seed_admin.py.

Usage:
    python scripts/seed_books.py

Note:
    - Does nothing if the inventory already contains books.
    - Requires the admin user (run seed_admin.py first).
"""

import datetime
import logging
import random
import sys
from typing import Dict, List, Optional, Any

from faker import Faker
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from bookinventory.core.errors import ConflictError
from bookinventory.crud.crud_book import create_book
from bookinventory.crud.crud_user import get_user_by_username
from bookinventory.db.session import SessionLocal, init_db
from bookinventory.models.book import Book
from bookinventory.models.enums import BookStatus, BookType, Category, Condition
from bookinventory.schemas.book import BookCreate

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

NUM_BOOKS: int = 30
ADMIN_USERNAME: str = "admin"

SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "isbn": "9780061120084",
        "category": "Fiction",
        "publicationDate": "1960-07-11",
        "status": "Available",
        "bookType": "Old",
        "condition": "Good",
        "isFeatured": True,
        "purchasePrice": 10,
        "marketValue": 25,
        "description": "Classic novel set in the American South during the Great Depression.",
    },
    {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "9780743273565",
        "category": "Fiction",
        "publicationDate": "1925-04-10",
        "status": "Available",
        "bookType": "Old",
        "condition": "Fair",
        "isFeatured": False,
        "purchasePrice": 8,
        "marketValue": 15,
        "description": "A story of wealth, love and the American Dream in the Jazz Age.",
    },
    {
        "title": "Clean Code",
        "author": "Robert C. Martin",
        "isbn": "9780132350884",
        "category": "Programming",
        "publicationDate": "2008-08-01",
        "status": "Borrowed",
        "bookType": "New",
        "condition": "Excellent",
        "isFeatured": True,
        "purchasePrice": 40,
        "marketValue": 35,
        "description": "A handbook of agile software craftsmanship.",
    },
    {
        "title": "A Brief History of Time",
        "author": "Stephen Hawking",
        "isbn": "9780553380163",
        "category": "Science",
        "publicationDate": "1988-04-01",
        "status": "Available",
        "bookType": "Old",
        "condition": "Good",
        "isFeatured": False,
        "purchasePrice": 12,
        "marketValue": 18,
        "description": "From the Big Bang to black holes.",
    },
]

fake = Faker()


def fake_book() -> Dict[str, Any]:
    """Builds a random but valid book payload."""
    purchase_price = round(random.uniform(5, 80), 2)
    return {
        "title": fake.catch_phrase()[:100],
        "author": fake.name(),
        "isbn": fake.unique.isbn13(separator=""),
        "category": random.choice(list(Category)).value,
        "publicationDate": fake.date_between(start_date=datetime.date(1900, 1, 1)).isoformat(),
        "status": random.choice(list(BookStatus)).value,
        "bookType": random.choice(list(BookType)).value,
        "condition": random.choice(list(Condition)).value,
        "isFeatured": random.random() < 0.2,
        "purchasePrice": purchase_price,
        "marketValue": round(purchase_price * random.uniform(0.5, 2.5), 2),
        "description": fake.paragraph(nb_sentences=3)[:1000],
    }


def seed_books(db: Session, num_books: int = NUM_BOOKS) -> int:
    """
    Inserts sample books into an empty inventory.

    Returns:
        int: Number of books added.
    """
    existing = db.execute(select(func.count(Book.id))).scalar_one()
    if existing > 0:
        logger.info(f"{existing} books already exist in the database.")
        return 0

    admin = get_user_by_username(db, ADMIN_USERNAME)
    if admin is None:
        logger.error("Admin user not found. Please run seed_admin.py first.")
        return 0

    payloads = list(SAMPLE_BOOKS)
    while len(payloads) < num_books:
        payloads.append(fake_book())

    added = 0
    for payload in payloads[:num_books]:
        try:
            create_book(db, BookCreate(**payload), creator=admin)
            added += 1
        except ConflictError:
            logger.warning(f"Skipping duplicate ISBN {payload['isbn']}")
    logger.info(f"--- Seeding finished: {added} books added. ---")
    return added


if __name__ == "__main__":
    db_session: Optional[Session] = None
    try:
        init_db()
        db_session = SessionLocal()
        seed_books(db_session)
    except Exception as main_exc:
        logger.exception(f"Error seeding books: {main_exc}")
        sys.exit(1)
    finally:
        if db_session:
            db_session.close()
