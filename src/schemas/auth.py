"""Authentication schemas."""

import re
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field

from src.models.enums import Role

SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'


def check_password_strength(value: str) -> str:
    """Require at least one uppercase letter and one special character."""
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least 1 uppercase letter")
    if not any(char in SPECIAL_CHARACTERS for char in value):
        raise ValueError("Password must contain at least 1 special character")
    return value


Password = Annotated[
    str, Field(min_length=8, max_length=16), AfterValidator(check_password_strength)
]


class UserSignup(BaseModel):
    """Self-service signup request. Always creates a normal user."""

    name: str = Field(..., min_length=20, max_length=60)
    email: EmailStr = Field(..., max_length=255)
    address: str = Field("", max_length=400)
    password: Password


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class PasswordUpdate(BaseModel):
    """Change the current user's password."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: Password


class UserResponse(BaseModel):
    """User information response. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    address: str
    role: Role
    created_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with token and user info."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserResponse
