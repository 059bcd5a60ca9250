"""Store model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class Store(Base, TimestampMixin):
    """A rateable store. Created by an admin and assigned to an owner."""

    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False)
    address = Column(String(400), nullable=False, default="")
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", backref="stores")
    ratings = relationship("Rating", back_populates="store", order_by="Rating.id")
