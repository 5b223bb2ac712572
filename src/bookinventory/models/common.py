"""Column helpers shared by the ORM models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Enum


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def enum_column(enum_cls, **kwargs) -> Column:
    # store the human readable value ("Non-Fiction"), not the member name
    return Column(
        Enum(enum_cls, values_callable=lambda e: [m.value for m in e], native_enum=False, length=20),
        **kwargs,
    )
