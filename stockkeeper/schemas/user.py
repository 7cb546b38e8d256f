from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class UserCreate(BaseModel):
    # Presence and shape are checked by the account service so that the
    # caller gets one of its specific messages rather than a schema error.
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    username: str
    email: str

    class Config:
        from_attributes = True


class ProfileResponse(UserResponse):
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse
