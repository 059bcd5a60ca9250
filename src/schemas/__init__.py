"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, PasswordUpdate, UserLogin, UserResponse, UserSignup
from src.schemas.rating import RatingResponse, RatingSubmit, RatingWithUserResponse
from src.schemas.store import (
    AdminStoreListResponse,
    AdminStoreResponse,
    OwnerStoreResponse,
    StoreCreate,
    StoreListResponse,
    StoreResponse,
)
from src.schemas.user import (
    AdminUserCreate,
    DashboardStatsResponse,
    UserDetailResponse,
    UserListResponse,
)

__all__ = [
    "UserSignup",
    "UserLogin",
    "PasswordUpdate",
    "UserResponse",
    "AuthResponse",
    "AdminUserCreate",
    "UserListResponse",
    "UserDetailResponse",
    "DashboardStatsResponse",
    "StoreCreate",
    "StoreResponse",
    "StoreListResponse",
    "AdminStoreResponse",
    "AdminStoreListResponse",
    "OwnerStoreResponse",
    "RatingSubmit",
    "RatingResponse",
    "RatingWithUserResponse",
]
