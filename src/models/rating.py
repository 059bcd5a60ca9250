"""Rating model."""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin

MIN_RATING = 1
MAX_RATING = 5


class Rating(Base, TimestampMixin):
    """A user's rating of a store. At most one row per (user, store)."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "store_id", name="uq_rating_user_store"),
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}", name="ck_rating_range"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)

    # Relationships
    user = relationship("User", backref="ratings")
    store = relationship("Store", back_populates="ratings")
