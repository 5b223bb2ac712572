# tests/scripts/test_seed_scripts.py
import importlib.util
import os

import pytest

from bookinventory.core.security import verify_password
from bookinventory.models.book import Book
from bookinventory.models.enums import Role

SCRIPTS_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', 'scripts'))

def _load_script(name: str):
    module_spec = importlib.util.spec_from_file_location(name, os.path.join(SCRIPTS_DIR, f"{name}.py"))
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module

@pytest.fixture(scope="module")
def seed_admin_module():
    return _load_script("seed_admin")

@pytest.fixture(scope="module")
def seed_books_module():
    return _load_script("seed_books")

def test_seed_admin_creates_once(db_session, seed_admin_module):
    admin = seed_admin_module.seed_admin(db_session)

    assert admin.role == Role.ADMIN
    assert admin.username == "admin"
    assert verify_password("password", admin.hashed_password)
    assert seed_admin_module.seed_admin(db_session) is None

def test_seed_books_requires_admin(db_session, seed_books_module):
    assert seed_books_module.seed_books(db_session) == 0
    assert db_session.query(Book).count() == 0

def test_seed_books(db_session, seed_admin_module, seed_books_module):
    admin = seed_admin_module.seed_admin(db_session)

    added = seed_books_module.seed_books(db_session, num_books=8)

    assert added == 8
    books = db_session.query(Book).all()
    assert len(books) == 8
    assert all(book.created_by_id == admin.id for book in books)
    assert {"The Great Gatsby", "Clean Code"} <= {book.title for book in books}
    # only fills an empty inventory
    assert seed_books_module.seed_books(db_session) == 0

def test_fake_book_is_valid_payload(seed_books_module):
    from bookinventory.schemas.book import BookCreate

    book = BookCreate(**seed_books_module.fake_book())
    assert book.purchase_price >= 0
    assert len(book.isbn) == 13
