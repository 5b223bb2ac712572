# tests/models/test_book_model.py
import pytest
from datetime import date
from sqlalchemy.exc import IntegrityError

from bookinventory.models.book import Book
from bookinventory.models.enums import BookStatus, BookType, Category, Condition

def _book(owner, **overrides) -> Book:
    fields = dict(
        title="The Hitchhiker's Guide to the Galaxy",
        author="Douglas Adams",
        isbn="9780345391803",
        category=Category.FICTION,
        publication_date=date(1979, 10, 12),
        book_type=BookType.OLD,
        condition=Condition.GOOD,
        purchase_price=10.0,
        market_value=12.5,
        created_by_id=owner.id,
    )
    fields.update(overrides)
    return Book(**fields)

def test_create_book(db_session, editor):
    """Test creating a valid Book instance and its defaults."""
    book = _book(editor)
    db_session.add(book)
    db_session.commit()

    retrieved_book = db_session.query(Book).filter(Book.isbn == "9780345391803").first()

    assert retrieved_book is not None
    assert retrieved_book.id is not None
    assert retrieved_book.title == "The Hitchhiker's Guide to the Galaxy"
    assert retrieved_book.status == BookStatus.AVAILABLE # Check default
    assert retrieved_book.is_featured is False
    assert retrieved_book.created_at is not None
    assert retrieved_book.updated_at is not None
    assert retrieved_book.creator.id == editor.id

def test_enum_values_are_stored_verbatim(db_session, editor):
    book = _book(editor, category=Category.NON_FICTION, isbn="111")
    db_session.add(book)
    db_session.commit()

    raw = db_session.connection().exec_driver_sql("SELECT category FROM books WHERE isbn = '111'").scalar()
    assert raw == "Non-Fiction"

def test_create_book_no_title(db_session, editor):
    """Test that creating a book without a title raises IntegrityError."""
    book = _book(editor, title=None)
    db_session.add(book)

    with pytest.raises(IntegrityError):
        db_session.commit()

def test_create_book_duplicate_isbn(db_session, editor):
    """The ISBN uniqueness constraint is enforced by the database itself."""
    db_session.add(_book(editor, title="First"))
    db_session.commit()

    db_session.add(_book(editor, title="Second"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

    assert db_session.query(Book).count() == 1

def test_negative_price_rejected_by_store(db_session, editor):
    db_session.add(_book(editor, purchase_price=-1.0))
    with pytest.raises(IntegrityError):
        db_session.commit()

def test_value_change_percentage_is_derived(db_session, editor):
    book = _book(editor, purchase_price=10.0, market_value=25.0)
    assert book.value_change_percentage == 150.0
    book.purchase_price = 0.0
    assert book.value_change_percentage == 0

def test_book_repr(db_session, editor):
    """Test the __repr__ method of the Book model."""
    title = "Representation Test Book Title That Is Quite Long"
    book = _book(editor, title=title, isbn="1122334455667")
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)

    expected_repr = f"<Book(id={book.id}, title='{title[:30]}...', isbn='1122334455667')>"
    assert repr(book) == expected_repr
