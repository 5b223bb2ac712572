"""
ORM model for the Book entity of the inventory.
Defines the stored fields of a book record and its link to the user who
created it. The value-change percentage is derived on read and never stored.
"""

from sqlalchemy import Column, String, Text, Float, Boolean, Date, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from bookinventory.db.session import Base
from bookinventory.models.common import new_id, utcnow, enum_column
from bookinventory.models.enums import Category, BookStatus, BookType, Condition
from bookinventory.core.valuation import value_change_percentage

class Book(Base):
    """
    Represents a book record in the inventory.

    Attributes:
        id (str): Opaque identifier assigned on insert.
        title (str): Book title.
        author (str): Author name.
        isbn (str): ISBN, unique across all records.
        category (Category): Category of the book.
        publication_date (date): Publication date.
        status (BookStatus): Availability status.
        book_type (BookType): New or Old.
        condition (Condition): Physical condition.
        is_featured (bool): Whether the book is highlighted.
        purchase_price (float): Price paid.
        market_value (float): Current market value.
        description (str): Optional description.
        created_by_id (str): User who created the record. Never changes.
        created_at (datetime): Creation timestamp.
        updated_at (datetime): Timestamp of the last mutation.
    """
    __tablename__ = "books"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(100), index=True, nullable=False)
    author = Column(String(100), index=True, nullable=False)
    isbn = Column(String(20), unique=True, index=True, nullable=False)
    category = enum_column(Category, nullable=False, index=True)
    publication_date = Column(Date, nullable=False)
    status = enum_column(BookStatus, nullable=False, default=BookStatus.AVAILABLE, index=True)
    book_type = enum_column(BookType, nullable=False, index=True)
    condition = enum_column(Condition, nullable=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    purchase_price = Column(Float, nullable=False)
    market_value = Column(Float, nullable=False)
    description = Column(Text, nullable=True)
    created_by_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    creator = relationship("User", back_populates="books")

    __table_args__ = (
        CheckConstraint('purchase_price >= 0', name='book_purchase_price_check'),
        CheckConstraint('market_value >= 0', name='book_market_value_check'),
    )

    @property
    def value_change_percentage(self) -> float:
        return value_change_percentage(self.purchase_price, self.market_value)

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title[:30]}...', isbn='{self.isbn}')>"
