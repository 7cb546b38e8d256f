"""FastAPI dependencies: DB session and caller identity from the bearer token.

The token is the only source of identity; handlers never read an owner id
from the request body.
"""
from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from stockkeeper.db.session import SessionLocal
from stockkeeper.core.exceptions import BusinessError, InvalidToken
from stockkeeper.core.security import TokenIdentity, decode_access_token

security = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Check out a session for one request and return its connection afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> TokenIdentity:
    """
    Resolve the caller from ``Authorization: Bearer <token>``.

    No token presented -> 401. Anything presented that is not a valid,
    unexpired bearer token (including other schemes) -> 403.
    """
    _, _, presented = request.headers.get("Authorization", "").strip().partition(" ")
    if not presented.strip():
        raise BusinessError.unauthorized("Access token required", reason="no token presented")
    if not credentials:
        raise BusinessError.forbidden("Invalid or expired token", reason="not a bearer token")

    try:
        return decode_access_token(credentials.credentials)
    except InvalidToken as e:
        raise BusinessError.forbidden("Invalid or expired token", reason=str(e.__cause__ or e))
