"""Rating schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RatingSubmit(BaseModel):
    """Submit or change a rating. Resubmitting overwrites the previous value."""

    rating: int = Field(..., ge=1, le=5, strict=True)


class RatingResponse(BaseModel):
    """Rating response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    store_id: int
    rating: int
    created_at: datetime
    updated_at: datetime


class RatingUser(BaseModel):
    """The user who submitted a rating, as shown to store owners."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class RatingWithUserResponse(RatingResponse):
    """Rating with its submitter."""

    user: RatingUser
