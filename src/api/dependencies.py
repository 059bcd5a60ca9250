"""FastAPI dependencies for authentication, authorization and services."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.models.user import User
from src.services.auth import decode_access_token
from src.services.directory import DirectoryService
from src.services.errors import Unauthorized
from src.services.ledger import RatingLedger
from src.services.permissions import Identity, Operation, authorize

security = HTTPBearer(auto_error=False)


def get_identity(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> Identity:
    """Get the identity claim from the bearer token."""
    if credentials is None:
        raise Unauthorized("Not authenticated")
    return Identity.from_claims(decode_access_token(credentials.credentials))


def get_current_user(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user."""
    user = db.get(User, identity.user_id)
    if user is None:
        raise Unauthorized("User not found")
    return user


def require(operation: Operation) -> Callable[..., User]:
    """Dependency factory: the current user, if their role allows the operation."""

    def dependency(
        identity: Annotated[Identity, Depends(get_identity)],
        user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        authorize(identity, operation)
        return user

    return dependency


def get_ledger(
    db: Annotated[Session, Depends(get_db)],
) -> RatingLedger:
    """Get rating ledger bound to the request session."""
    return RatingLedger(db)


def get_directory_service(
    db: Annotated[Session, Depends(get_db)],
) -> DirectoryService:
    """Get directory service with dependencies."""
    return DirectoryService(db)
