# tests/models/test_user_model.py
import pytest
from sqlalchemy.exc import IntegrityError

from bookinventory.models.user import User
from bookinventory.models.enums import Role
from bookinventory.core.security import get_password_hash

def test_create_user(db_session):
    """Test creating a valid User instance."""
    hashed_password = get_password_hash("password123")

    user = User(username="jdoe", name="Jane Doe", hashed_password=hashed_password)
    db_session.add(user)
    db_session.commit()

    retrieved_user = db_session.query(User).filter(User.username == "jdoe").first()

    assert retrieved_user is not None
    assert retrieved_user.name == "Jane Doe"
    assert retrieved_user.role == Role.VIEWER # Check default value
    assert retrieved_user.hashed_password == hashed_password
    assert retrieved_user.id is not None
    assert retrieved_user.created_at is not None
    assert retrieved_user.updated_at is not None

def test_create_user_duplicate_username(db_session):
    """Test that creating a user with a duplicate username raises IntegrityError."""
    hashed_password = get_password_hash("password123")

    db_session.add(User(username="duplicate", name="One", hashed_password=hashed_password))
    db_session.commit()

    db_session.add(User(username="duplicate", name="Two", hashed_password=hashed_password))
    with pytest.raises(IntegrityError):
        db_session.commit()

def test_usernames_are_case_sensitive(db_session):
    db_session.add(User(username="Alice", name="A", hashed_password="x"))
    db_session.add(User(username="alice", name="a", hashed_password="x"))
    db_session.commit()

    assert db_session.query(User).count() == 2

def test_user_repr(db_session):
    """Test the __repr__ method of the User model."""
    user = User(username="repr_test", name="Repr", hashed_password="x", role=Role.EDITOR)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)

    expected_repr = f"<User(id={user.id}, username='repr_test', role=EDITOR)>"
    assert repr(user) == expected_repr
