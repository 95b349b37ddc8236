import re
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import ConfigDict, EmailStr, Field, field_validator

from stockroom.schemas.common import CamelModel


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserInDB(CamelModel):
    id: str
    first_name: str
    last_name: str
    name: str
    email: str
    password: str  # bcrypt hash
    role: UserRole = UserRole.USER
    created_at: datetime
    updated_at: datetime


# User as returned to clients, without the password hash
class UserPublic(CamelModel):
    id: str
    first_name: str
    last_name: str
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: UserInDB) -> "UserPublic":
        return cls(**user.model_dump(exclude={"password"}))


class SignupRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=8)

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, v: str) -> str:
        if not re.search(r"[a-z]", v) or not re.search(r"[A-Z]", v) or not re.search(r"\d", v):
            raise ValueError(
                "Password must contain at least one uppercase letter, one lowercase letter, and one number"
            )
        return v


class LoginRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr
    password: str = Field(min_length=6)


class UserUpdate(CamelModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
