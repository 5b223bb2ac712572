"""
/books routes: listing, detail, statistics, mutations and the optional ISBN
autofill proxy. Any authenticated role can read; writes need ADMIN or EDITOR
and, for update/delete, ownership unless the caller is ADMIN.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bookinventory import crud
from bookinventory.api.deps import get_current_user, require_roles
from bookinventory.api.responses import envelope
from bookinventory.clients.isbn_lookup import fetch_book_details
from bookinventory.core.errors import ValidationError
from bookinventory.db.session import get_db
from bookinventory.models.enums import BookStatus, BookType, Category, Condition, Role
from bookinventory.models.user import User
from bookinventory.schemas.book import (
    BookCreate,
    BookFilters,
    BookPage,
    BookSchema,
    BookUpdate,
    IsbnLookupRequest,
    PageRequest,
    SortSpec,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])

book_writer = require_roles(Role.ADMIN, Role.EDITOR)


def serialize_book(book) -> dict:
    return BookSchema.model_validate(book).model_dump(by_alias=True, mode="json")


@router.get("/stats")
def book_stats(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    stats = crud.get_book_stats(db)
    return envelope(stats.model_dump(by_alias=True))


@router.get("")
def list_books(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    book_type: Optional[BookType] = Query(None, alias="bookType"),
    category: Optional[Category] = None,
    status: Optional[BookStatus] = None,
    condition: Optional[Condition] = None,
    is_featured: Optional[str] = Query(None, alias="isFeatured"),
    search: Optional[str] = None,
    sort_field: Optional[str] = Query(None, alias="sortField"),
    sort_direction: Optional[str] = Query(None, alias="sortDirection"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    filters = BookFilters(
        book_type=book_type,
        category=category,
        status=status,
        condition=condition,
        is_featured=(is_featured == "true") if is_featured else None,
        search=search or None,
    )
    sort = SortSpec(field=sort_field or None, direction="desc" if sort_direction == "desc" else "asc")
    result = crud.list_books(db, filters, sort, PageRequest.coerce(page, limit))
    data = BookPage(
        books=[BookSchema.model_validate(book) for book in result.books],
        total=result.total,
        page=result.page,
        total_pages=result.total_pages,
    )
    return envelope(data.model_dump(by_alias=True, mode="json"))


@router.post("/fetch-details")
def fetch_details(payload: IsbnLookupRequest, current_user: User = Depends(get_current_user)):
    if not payload.isbn:
        raise ValidationError("ISBN is required", errors=[{"field": "isbn", "msg": "ISBN is required"}])
    return envelope(fetch_book_details(payload.isbn))


@router.get("/{book_id}")
def get_book(book_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return envelope(serialize_book(crud.get_book_or_404(db, book_id)))


@router.post("", status_code=201)
def create_book(payload: BookCreate, db: Session = Depends(get_db), current_user: User = Depends(book_writer)):
    book = crud.create_book(db, payload, creator=current_user)
    return envelope(serialize_book(book))


@router.put("/{book_id}")
def update_book(
    book_id: str,
    payload: BookUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(book_writer),
):
    book = crud.update_book(db, book_id, payload, actor=current_user)
    return envelope(serialize_book(book))


@router.delete("/{book_id}")
def delete_book(book_id: str, db: Session = Depends(get_db), current_user: User = Depends(book_writer)):
    crud.delete_book(db, book_id, actor=current_user)
    return envelope({})
