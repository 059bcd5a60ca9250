"""Authentication service for JWT, password handling and account creation."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.enums import Role
from src.models.user import User
from src.services.errors import Conflict, Unauthorized

logger = logging.getLogger(__name__)

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, role: Role | str) -> str:
    """Create a JWT access token carrying the user id and role."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "role": Role(role).value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def create_user(
    db: Session,
    name: str,
    email: str,
    address: str,
    password: str,
    role: Role = Role.NORMAL_USER,
) -> User:
    """Create a new user.

    Raises Conflict if the email is taken. The unique index on ``users.email``
    catches registrations that race past the lookup.
    """
    if get_user_by_email(db, email):
        raise Conflict("Email already registered")

    user = User(
        name=name,
        email=email,
        address=address,
        role=Role(role).value,
        password_hash=get_password_hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("Email already registered") from None
    db.refresh(user)
    logger.info(f"Created {user.role} account {user.id}")
    return user


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    """Replace a user's password after checking the current one."""
    if not verify_password(current_password, user.password_hash):
        raise Unauthorized("Current password is incorrect")
    user.password_hash = get_password_hash(new_password)
    db.commit()
    logger.info(f"Password changed for user {user.id}")
