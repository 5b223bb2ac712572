"""
Pydantic schemas for the Book entity of the API.
Defines the input models (creation, partial update), the output model with the
derived value-change percentage, the list/filter/sort/page request models and
the statistics snapshot.

Books travel as camelCase JSON (`purchasePrice`, `bookType`, ...); snake_case
names are accepted on input too.
"""

import datetime
import math
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, computed_field, field_validator
from pydantic.alias_generators import to_camel

from bookinventory.core.valuation import OUT_OF_RANGE_MESSAGE, has_finite_value_change, value_change_percentage
from bookinventory.models.enums import Category, BookStatus, BookType, Condition


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class BookCreate(CamelModel):
    """
    Schema for creating a book. Server-managed fields (id, createdBy,
    timestamps) are ignored if sent.
    """
    title: str = Field(..., min_length=1, max_length=100)
    author: str = Field(..., min_length=1, max_length=100)
    isbn: str = Field(..., min_length=1, max_length=20)
    category: Category
    publication_date: datetime.date
    status: BookStatus = BookStatus.AVAILABLE
    book_type: BookType
    condition: Condition
    is_featured: bool = False
    purchase_price: float = Field(..., ge=0, allow_inf_nan=False)
    market_value: float = Field(..., ge=0, allow_inf_nan=False)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("market_value")
    @classmethod
    def finite_value_change(cls, value: float, info: ValidationInfo) -> float:
        purchase_price = info.data.get("purchase_price")
        if purchase_price is not None and not has_finite_value_change(purchase_price, value):
            raise ValueError(OUT_OF_RANGE_MESSAGE)
        return value


class BookUpdate(CamelModel):
    """
    Schema for a partial update: same rules as BookCreate, every field optional.
    A field that is sent must be valid; only `description` may be sent as null.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    author: Optional[str] = Field(None, min_length=1, max_length=100)
    isbn: Optional[str] = Field(None, min_length=1, max_length=20)
    category: Optional[Category] = None
    publication_date: Optional[datetime.date] = None
    status: Optional[BookStatus] = None
    book_type: Optional[BookType] = None
    condition: Optional[Condition] = None
    is_featured: Optional[bool] = None
    purchase_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    market_value: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator(
        "title", "author", "isbn", "category", "publication_date", "status",
        "book_type", "condition", "is_featured", "purchase_price", "market_value",
        mode="before",
    )
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    def changes(self) -> dict:
        """Fields explicitly sent by the caller, keyed by model attribute name."""
        return self.model_dump(exclude_unset=True)


class CreatorSchema(CamelModel):
    id: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class BookSchema(CamelModel):
    """
    Output schema for a book, always carrying the derived `valueChangePercentage`.
    """
    id: str
    title: str
    author: str
    isbn: str
    category: Category
    publication_date: datetime.date
    status: BookStatus
    book_type: BookType
    condition: Condition
    is_featured: bool
    purchase_price: float
    market_value: float
    description: Optional[str] = None
    created_by: Optional[CreatorSchema] = Field(None, validation_alias="creator", serialization_alias="createdBy")
    created_at: datetime.datetime
    updated_at: datetime.datetime

    model_config = ConfigDict(from_attributes=True)

    @computed_field(alias="valueChangePercentage")
    @property
    def value_change_percentage(self) -> float:
        return value_change_percentage(self.purchase_price, self.market_value)


class BookFilters(CamelModel):
    """Exact-match constraints (combined with AND) plus an optional search term."""
    book_type: Optional[BookType] = None
    category: Optional[Category] = None
    status: Optional[BookStatus] = None
    condition: Optional[Condition] = None
    is_featured: Optional[bool] = None
    search: Optional[str] = None


class SortSpec(CamelModel):
    """Sort order. Without a field the listing falls back to most recent first."""
    field: Optional[str] = None
    direction: Literal["asc", "desc"] = "asc"


# largest OFFSET / LIMIT a 64-bit SQL integer can hold
MAX_SQL_INTEGER = 2 ** 63 - 1


class PageRequest(BaseModel):
    """1-based page number and page size."""
    page: int = Field(1, ge=1, le=MAX_SQL_INTEGER)
    limit: int = Field(10, ge=1, le=MAX_SQL_INTEGER)

    @classmethod
    def coerce(cls, page=None, limit=None) -> "PageRequest":
        """
        Builds a PageRequest from raw values, replacing anything not a positive
        integer by the defaults. Values too large for the store are clamped so
        the page comes back empty.
        """
        limit = min(_positive_int(limit, 10), MAX_SQL_INTEGER)
        page = min(_positive_int(page, 1), MAX_SQL_INTEGER // limit + 1)
        return cls(page=page, limit=limit)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit)


def _positive_int(value, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


class BookPage(CamelModel):
    books: List[BookSchema]
    total: int
    page: int
    total_pages: int


class BookStats(CamelModel):
    """Counts over the whole inventory. Every category and status is present, zero included."""
    total: int
    new_books: int
    old_books: int
    by_category: Dict[str, int]
    by_status: Dict[str, int]


class IsbnLookupRequest(CamelModel):
    isbn: Optional[str] = None
