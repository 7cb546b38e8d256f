"""Account registration, authentication and lookup."""
import logging
import re
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stockkeeper.core.config import settings
from stockkeeper.core.exceptions import Conflict, InvalidCredentials, NotFound, ValidationFailed
from stockkeeper.core.security import create_access_token, get_password_hash, verify_password
from stockkeeper.models.user import User

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def _issue_token(user: User) -> str:
    return create_access_token(user_id=user.id, username=user.username)


def register(db: Session, username: str, email: str, password: str) -> Tuple[User, str]:
    """Create an account and return it with a freshly issued token."""
    if not username or not email or not password:
        raise ValidationFailed("Username, email, and password are required")
    if not EMAIL_RE.fullmatch(email):
        raise ValidationFailed("Invalid email format")
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationFailed(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
        )

    user = User(username=username, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Username and email collisions share one message on purpose
        db.rollback()
        raise Conflict("Username or email already exists")
    db.refresh(user)

    logger.info(f"Registered account id={user.id}")
    return user, _issue_token(user)


def authenticate(db: Session, username: str, password: str) -> Tuple[User, str]:
    """Check credentials; unknown user and wrong password fail the same way."""
    if not username or not password:
        raise ValidationFailed("Username and password are required")

    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentials("Invalid credentials")

    return user, _issue_token(user)


def get_account(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found")
    return user
