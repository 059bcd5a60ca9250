"""User model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.enums import Role
from src.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication, ratings and store ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    address = Column(String(400), nullable=False, default="")
    role = Column(String(20), nullable=False, default=Role.NORMAL_USER.value, index=True)
    password_hash = Column(String(255), nullable=False)
