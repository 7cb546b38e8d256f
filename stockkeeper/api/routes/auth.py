"""Auth: register, login and the caller's own profile.

- Password hashing with bcrypt
- Same 401 for unknown username and wrong password
- Tokens expire after 24 hours, no refresh
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stockkeeper.api.deps import get_db, get_current_identity
from stockkeeper.core.exceptions import (
    BusinessError,
    Conflict,
    InvalidCredentials,
    NotFound,
    ValidationFailed,
)
from stockkeeper.core.security import TokenIdentity
from stockkeeper.schemas.user import AuthResponse, ProfileResponse, UserCreate, UserLogin, UserResponse
from stockkeeper.services import accounts

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: UserCreate, db: Session = Depends(get_db)):
    """Create an account and return it with a token."""
    try:
        user, token = accounts.register(db, data.username, data.email, data.password)
    except ValidationFailed as e:
        raise BusinessError.bad_request(e.message)
    except Conflict as e:
        raise BusinessError.conflict(e.message)
    except Exception as e:
        raise BusinessError.server_error(e)

    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(data: UserLogin, db: Session = Depends(get_db)):
    """Exchange username and password for a token."""
    try:
        user, token = accounts.authenticate(db, data.username, data.password)
    except ValidationFailed as e:
        raise BusinessError.bad_request(e.message)
    except InvalidCredentials as e:
        # Generic error: don't specify which field is wrong
        raise BusinessError.unauthorized(e.message, reason=f"failed login for {data.username!r}")
    except Exception as e:
        raise BusinessError.server_error(e)

    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse.model_validate(user),
    )


@router.get("/profile")
def profile(
    db: Session = Depends(get_db),
    identity: TokenIdentity = Depends(get_current_identity),
):
    try:
        user = accounts.get_account(db, identity.user_id)
    except NotFound as e:
        raise BusinessError.not_found(e.message, reason=f"token for missing account {identity.user_id}")
    except Exception as e:
        raise BusinessError.server_error(e)

    return {"user": ProfileResponse.model_validate(user)}
