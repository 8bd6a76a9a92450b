from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common import APIModel


class RegisterIn(APIModel):
    username: str = Field(min_length=3, max_length=64)
    password: str = Field(min_length=8)
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None


class LoginIn(APIModel):
    username: str
    password: str


class UserUpdate(APIModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = Field(default=None, min_length=8)


class UserOut(APIModel):
    id: str
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    role: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class TokenOut(APIModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
