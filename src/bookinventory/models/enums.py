"""
Enumerated values shared by the ORM models, the pydantic schemas and the
statistics report.
"""

import enum


class Category(str, enum.Enum):
    FICTION = "Fiction"
    NON_FICTION = "Non-Fiction"
    BIOGRAPHY = "Biography"
    SCIENCE = "Science"
    HISTORY = "History"
    PROGRAMMING = "Programming"
    SELF_HELP = "Self-Help"
    BUSINESS = "Business"
    OTHER = "Other"


class BookStatus(str, enum.Enum):
    AVAILABLE = "Available"
    BORROWED = "Borrowed"
    LOST = "Lost"
    DAMAGED = "Damaged"


class BookType(str, enum.Enum):
    NEW = "New"
    OLD = "Old"


class Condition(str, enum.Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"
