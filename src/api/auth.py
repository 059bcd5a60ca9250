"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from src.api.dependencies import require
from src.database import get_db
from src.models.enums import Role
from src.models.user import User
from src.schemas.auth import AuthResponse, PasswordUpdate, UserLogin, UserResponse, UserSignup
from src.services.auth import authenticate_user, change_password, create_access_token, create_user
from src.services.errors import Unauthorized
from src.services.permissions import Operation

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserSignup,
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new normal user."""
    user = create_user(
        db,
        name=user_data.name,
        email=user_data.email,
        address=user_data.address,
        password=user_data.password,
        role=Role.NORMAL_USER,
    )
    access_token = create_access_token(user.id, user.role)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)
    if not user:
        raise Unauthorized("Incorrect email or password")

    access_token = create_access_token(user.id, user.role)

    return AuthResponse(
        access_token=access_token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(require(Operation.VIEW_SELF))],
):
    """Get current user information."""
    return current_user


@router.put("/password", status_code=status.HTTP_204_NO_CONTENT)
def update_password(
    password_data: PasswordUpdate,
    current_user: Annotated[User, Depends(require(Operation.CHANGE_OWN_PASSWORD))],
    db: Annotated[Session, Depends(get_db)],
):
    """Change the current user's password."""
    change_password(db, current_user, password_data.current_password, password_data.new_password)
