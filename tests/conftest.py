# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import os
import sys

# Add the src directory to the Python path to allow imports
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
src_path = os.path.join(project_root, 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from bookinventory.db.session import Base, get_db
# Import the models so they are registered with Base
from bookinventory.models import Book, User  # noqa: F401
from bookinventory.models.enums import Role
from bookinventory.core.security import create_access_token, pwd_context
from bookinventory.crud import create_user
from bookinventory.schemas.user import UserCreate
from bookinventory.api.main import app

# Cheapest bcrypt cost; hashing speed is irrelevant to what the tests check
pwd_context.update(bcrypt__rounds=4)

# --- Test Database Setup ---
# A fresh in-memory SQLite database per test. StaticPool keeps the single
# connection alive so the TestClient thread sees the same database.
TEST_DATABASE_URL = "sqlite://"

@pytest.fixture
def db_engine():
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture
def db_session_factory(db_engine):
    """Returns a SQLAlchemy session factory."""
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

@pytest.fixture
def db_session(db_session_factory):
    """Provides a session for direct CRUD/model tests."""
    session = db_session_factory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def client(db_session_factory):
    """TestClient whose requests each get their own session on the test database."""
    def override_get_db():
        db = db_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

# --- Users and credentials ---
@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make_user(role: Role = Role.VIEWER, username: str | None = None, password: str = "secret123") -> User:
        counter["n"] += 1
        username = username or f"{role.value.lower()}{counter['n']}"
        return create_user(
            db_session,
            UserCreate(username=username, name=f"{role.value.title()} {counter['n']}", password=password),
            role=role,
        )
    return _make_user

@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN)

@pytest.fixture
def editor(make_user):
    return make_user(Role.EDITOR)

@pytest.fixture
def viewer(make_user):
    return make_user(Role.VIEWER)

def auth_headers(user: User) -> dict:
    token = create_access_token(user.id, user.role.value).token
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def headers_for():
    return auth_headers

# --- Book payloads ---
def make_book_payload(**overrides) -> dict:
    payload = {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "isbn": "9780743273565",
        "category": "Fiction",
        "publicationDate": "1925-04-10",
        "status": "Available",
        "bookType": "Old",
        "condition": "Good",
        "isFeatured": False,
        "purchasePrice": 10,
        "marketValue": 25,
        "description": "A story of wealth and the American Dream.",
    }
    payload.update(overrides)
    return payload

@pytest.fixture
def book_payload():
    return make_book_payload
