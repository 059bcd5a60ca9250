"""Shared helpers for filtered, sorted, paginated listings."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Query

from src.models.enums import SortOrder
from src.services.errors import ValidationError

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


@dataclass
class Page(Generic[T]):
    """One page of a listing plus the total number of matches."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10


def coerce_choice(enum_cls: type[E], value: Any, label: str) -> E:
    """Convert a listing option to its enum, raising ValidationError when unknown."""
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Invalid {label} '{value}', expected one of: {choices}") from None


def ordered(column: Any, sort_order: SortOrder) -> Any:
    """Apply a sort direction to a column expression."""
    direction = coerce_choice(SortOrder, sort_order, "sort order")
    return column.asc() if direction == SortOrder.ASC else column.desc()


def paginate(query: Query, page: int, page_size: int) -> tuple[list[Any], int]:
    """Return the rows for a 1-indexed page and the total match count."""
    page = max(page, 1)
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * page_size).limit(page_size).all()
    return rows, total
