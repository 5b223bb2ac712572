"""
CRUD operations for the Book model.
Includes the listing query (filters, search, sort, pagination), lookups by id
or ISBN and the create/update/delete mutations, which check the caller's
permissions before touching the store.
"""

import logging
from typing import List, NamedTuple, Optional

from sqlalchemy import asc, case, desc, func, or_, select
from sqlalchemy.orm import Session, joinedload

from ..core.errors import NotFoundError, ValidationError
from ..core.permissions import ensure_can_create_book, ensure_can_modify_book
from ..core.valuation import OUT_OF_RANGE_MESSAGE, has_finite_value_change
from ..models.book import Book
from ..models.common import utcnow
from ..models.user import User
from ..schemas.book import BookCreate, BookFilters, BookUpdate, PageRequest, SortSpec
from .base import commit_or_raise

logger = logging.getLogger(__name__)

DUPLICATE_ISBN_MESSAGE = "A book with this ISBN already exists"

_value_change_expr = case(
    (Book.purchase_price == 0, 0.0),
    else_=(Book.market_value - Book.purchase_price) / Book.purchase_price * 100,
)

SORTABLE_COLUMNS = {
    "title": Book.title,
    "author": Book.author,
    "isbn": Book.isbn,
    "category": Book.category,
    "publicationDate": Book.publication_date,
    "status": Book.status,
    "bookType": Book.book_type,
    "condition": Book.condition,
    "isFeatured": Book.is_featured,
    "purchasePrice": Book.purchase_price,
    "marketValue": Book.market_value,
    "valueChangePercentage": _value_change_expr,
    "createdAt": Book.created_at,
    "updatedAt": Book.updated_at,
}


class BookListResult(NamedTuple):
    books: List[Book]
    total: int
    page: int
    total_pages: int


def build_filter_clauses(filters: BookFilters) -> list:
    """
    Translates a BookFilters into SQLAlchemy WHERE clauses (combined with AND).

    Exact-match filters apply only when given. The search term matches, case
    insensitively and as a plain substring, against title OR author OR isbn OR
    description; an empty term is ignored.
    """
    clauses = []
    if filters.book_type is not None:
        clauses.append(Book.book_type == filters.book_type)
    if filters.category is not None:
        clauses.append(Book.category == filters.category)
    if filters.status is not None:
        clauses.append(Book.status == filters.status)
    if filters.condition is not None:
        clauses.append(Book.condition == filters.condition)
    if filters.is_featured is not None:
        clauses.append(Book.is_featured == filters.is_featured)

    if filters.search:
        term = filters.search
        clauses.append(or_(
            Book.title.icontains(term, autoescape=True),
            Book.author.icontains(term, autoescape=True),
            Book.isbn.icontains(term, autoescape=True),
            Book.description.icontains(term, autoescape=True),
        ))
    return clauses


def build_order_by(sort: SortSpec) -> list:
    """
    Translates a SortSpec into ORDER BY clauses. Without a field the order is
    most recent first. Ties are always broken by id so paging is stable.

    Raises:
        ValidationError: If the field is not sortable.
    """
    if not sort.field:
        return [desc(Book.created_at), desc(Book.id)]

    column = SORTABLE_COLUMNS.get(sort.field)
    if column is None:
        # accept snake_case names too
        column = SORTABLE_COLUMNS.get(_snake_to_camel(sort.field))
    if column is None:
        raise ValidationError(
            "Invalid sort field",
            errors=[{"field": "sortField", "msg": f"Cannot sort by '{sort.field}'"}],
        )
    direction = desc if sort.direction == "desc" else asc
    return [direction(column), direction(Book.id)]


def _snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def list_books(
    db: Session,
    filters: Optional[BookFilters] = None,
    sort: Optional[SortSpec] = None,
    page: Optional[PageRequest] = None,
) -> BookListResult:
    """
    Returns one page of books matching the filters, in the requested order.

    Args:
        db (Session): SQLAlchemy session.
        filters (Optional[BookFilters]): Exact-match filters and search term.
        sort (Optional[SortSpec]): Field and direction; most recent first by default.
        page (Optional[PageRequest]): Page number and size; page 1 of 10 by default.

    Returns:
        BookListResult: The page of books, the total matching count (ignoring
        pagination), the page number and ceil(total / limit).
    """
    filters = filters or BookFilters()
    sort = sort or SortSpec()
    page = page or PageRequest()

    clauses = build_filter_clauses(filters)
    order_by = build_order_by(sort)

    total = db.execute(select(func.count(Book.id)).where(*clauses)).scalar_one()

    stmt = (
        select(Book)
        .options(joinedload(Book.creator))
        .where(*clauses)
        .order_by(*order_by)
        .offset(page.skip)
        .limit(page.limit)
    )
    books = list(db.execute(stmt).scalars().all())
    return BookListResult(books=books, total=total, page=page.page, total_pages=page.total_pages(total))


def get_book_by_id(db: Session, book_id: str) -> Optional[Book]:
    """
    Retrieves a book by its id.

    Returns:
        Optional[Book]: The book, or None if it does not exist.
    """
    stmt = select(Book).options(joinedload(Book.creator)).where(Book.id == book_id)
    return db.execute(stmt).scalars().first()


def get_book_by_isbn(db: Session, isbn: str) -> Optional[Book]:
    stmt = select(Book).where(Book.isbn == isbn)
    return db.execute(stmt).scalars().first()


def get_book_or_404(db: Session, book_id: str) -> Book:
    book = get_book_by_id(db, book_id)
    if book is None:
        raise NotFoundError("Book not found")
    return book


def create_book(db: Session, book_in: BookCreate, creator: User) -> Book:
    """
    Creates a book owned by `creator`.

    ISBN uniqueness is left to the database constraint, so of two concurrent
    creations with the same ISBN exactly one commits.

    Raises:
        ForbiddenError: The creator's role cannot create books.
        ConflictError: The ISBN is already taken.
    """
    ensure_can_create_book(creator)

    now = utcnow()
    db_book = Book(**book_in.model_dump(), created_by_id=creator.id, created_at=now, updated_at=now)
    db.add(db_book)
    commit_or_raise(db, DUPLICATE_ISBN_MESSAGE)
    db.refresh(db_book)
    logger.info(f"Book {db_book.id} (ISBN {db_book.isbn}) created by user {creator.id}")
    return db_book


def update_book(db: Session, book_id: str, book_in: BookUpdate, actor: User) -> Book:
    """
    Applies the fields sent in `book_in` to a book and bumps its updated_at.

    Raises:
        NotFoundError: No book with that id.
        ForbiddenError: The actor may not modify this book.
        ConflictError: The new ISBN belongs to another book.
        ValidationError: The merged prices have no finite value change.
    """
    db_book = get_book_or_404(db, book_id)
    ensure_can_modify_book(actor, db_book, action="update")

    changes = book_in.changes()
    purchase_price = changes.get("purchase_price", db_book.purchase_price)
    market_value = changes.get("market_value", db_book.market_value)
    if not has_finite_value_change(purchase_price, market_value):
        raise ValidationError(
            "Validation failed",
            errors=[{"field": "marketValue", "msg": OUT_OF_RANGE_MESSAGE}],
        )

    for field, value in changes.items():
        setattr(db_book, field, value)
    db_book.updated_at = utcnow()

    commit_or_raise(db, DUPLICATE_ISBN_MESSAGE)
    db.refresh(db_book)
    logger.info(f"Book {db_book.id} updated by user {actor.id}")
    return db_book


def delete_book(db: Session, book_id: str, actor: User) -> None:
    """
    Deletes a book.

    Raises:
        NotFoundError: No book with that id.
        ForbiddenError: The actor may not delete this book.
    """
    db_book = get_book_or_404(db, book_id)
    ensure_can_modify_book(actor, db_book, action="delete")

    db.delete(db_book)
    commit_or_raise(db, "Book could not be deleted")
    logger.info(f"Book {book_id} deleted by user {actor.id}")
