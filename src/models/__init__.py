"""SQLAlchemy models."""

from src.models.rating import Rating
from src.models.store import Store
from src.models.user import User

__all__ = [
    "User",
    "Store",
    "Rating",
]
