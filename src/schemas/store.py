"""Store schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.schemas.auth import UserResponse
from src.schemas.rating import RatingWithUserResponse


class StoreCreate(BaseModel):
    """Create a store (admin only)."""

    name: str = Field(..., min_length=20, max_length=60)
    address: str = Field("", max_length=400)
    owner_id: int


class StoreResponse(BaseModel):
    """Store as seen by normal users. No owner details."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    created_at: datetime
    average_rating: float = 0.0
    user_rating: int | None = None


class StoreListResponse(BaseModel):
    """One page of stores for normal users."""

    items: list[StoreResponse]
    total: int
    page: int
    page_size: int


class AdminStoreResponse(BaseModel):
    """Store as seen by admins, with owner and rating totals."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    owner_id: int
    owner: UserResponse | None = None
    created_at: datetime
    average_rating: float = 0.0
    total_ratings: int = 0


class AdminStoreListResponse(BaseModel):
    """One page of stores for admins."""

    items: list[AdminStoreResponse]
    total: int
    page: int
    page_size: int


class OwnerStoreResponse(BaseModel):
    """A store on its owner's dashboard."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: str
    created_at: datetime
    average_rating: float = 0.0
    total_ratings: int = 0
    ratings: list[RatingWithUserResponse] = []
