"""Admin user management schemas."""

from pydantic import BaseModel, EmailStr, Field

from src.models.enums import Role
from src.schemas.auth import Password, UserResponse


class AdminUserCreate(BaseModel):
    """Create a user with any role."""

    name: str = Field(..., min_length=20, max_length=60)
    email: EmailStr = Field(..., max_length=255)
    address: str = Field("", max_length=400)
    password: Password
    role: Role


class UserListResponse(BaseModel):
    """One page of users."""

    items: list[UserResponse]
    total: int
    page: int
    page_size: int


class UserDetailResponse(UserResponse):
    """User details. ``owner_rating`` is set for store owners with stores."""

    owner_rating: float | None = None


class DashboardStatsResponse(BaseModel):
    """Platform totals."""

    total_users: int
    total_stores: int
    total_ratings: int
