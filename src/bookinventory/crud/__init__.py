from .crud_user import (
    get_user_by_username,
    get_user_by_id,
    create_user,
    authenticate_user,
    get_users,
    update_user,
)
from .crud_book import (
    list_books,
    get_book_by_id,
    get_book_by_isbn,
    get_book_or_404,
    create_book,
    update_book,
    delete_book,
)
from .crud_stats import get_book_stats

__all__ = [
    "get_user_by_username",
    "get_user_by_id",
    "create_user",
    "authenticate_user",
    "get_users",
    "update_user",
    "list_books",
    "get_book_by_id",
    "get_book_by_isbn",
    "get_book_or_404",
    "create_book",
    "update_book",
    "delete_book",
    "get_book_stats",
]
