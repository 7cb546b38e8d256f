"""
Password hashing and bearer token issuance/verification.

Tokens are stateless HS256 JWTs; expiry is the only invalidation mechanism.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from stockkeeper.core.config import settings
from stockkeeper.core.exceptions import InvalidToken


@dataclass(frozen=True)
class TokenIdentity:
    """Caller identity resolved from a verified token."""

    user_id: int
    username: str


# ---------------------------------------------------------------------------
# PASSWORD HASHING
# ---------------------------------------------------------------------------


BCRYPT_MAX_PASSWORD_BYTES = 72


def _password_bytes(password: str) -> bytes:
    """UTF-8 bytes of a password cut to the 72 bytes bcrypt actually uses."""
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


def get_password_hash(password: str) -> str:
    """Hash a password for storing in the database (bcrypt, salted)."""
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if the plain password matches the stored digest."""
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        # Malformed stored digest
        return False


# ---------------------------------------------------------------------------
# JWT TOKENS
# ---------------------------------------------------------------------------


def create_access_token(
    user_id: int,
    username: str,
    issued_at: Optional[datetime] = None,
) -> str:
    """
    Create a signed token for an account.

    Claims: ``sub`` (account id as string), ``username``, ``iat`` and
    ``exp`` = ``iat`` + ACCESS_TOKEN_EXPIRE_HOURS.
    """
    issued_at = issued_at or datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenIdentity:
    """
    Verify a token and return the embedded identity.

    Raises InvalidToken on bad signature, malformed structure, missing
    claims or expiry.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise InvalidToken("Invalid or expired token") from e

    sub = payload.get("sub")
    username = payload.get("username")
    if sub is None or username is None or "exp" not in payload:
        raise InvalidToken("Invalid or expired token")

    try:
        return TokenIdentity(user_id=int(sub), username=username)
    except (TypeError, ValueError) as e:
        raise InvalidToken("Invalid or expired token") from e
