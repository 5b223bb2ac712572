from .book import Book
from .user import User

__all__ = ["Book", "User"]
