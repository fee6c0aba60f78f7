"""
Pydantic schemas for authentication requests and responses
"""
import re
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.base import CamelModel

USERNAME_PATTERN = r"^[a-zA-Z0-9_-]+$"

# bcrypt only accepts up to 72 bytes of input
MAX_PASSWORD_BYTES = 72


def validate_password_strength(password: str) -> str:
    """Raise ValueError unless the password meets the complexity rules"""
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    if not re.search(r"[A-Z]", password):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        raise ValueError("Password must contain at least one number")
    if not re.search(r"[^A-Za-z0-9]", password):
        raise ValueError("Password must contain at least one special character")
    return password


class RegisterRequest(CamelModel):
    """Schema for account registration"""
    email: EmailStr
    password: str
    username: str = Field(..., min_length=3, max_length=20, pattern=USERNAME_PATTERN)

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return validate_password_strength(value)


class LoginRequest(CamelModel):
    """Schema for login"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., min_length=1)
    password: str

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return validate_password_strength(value)


class UserResponse(CamelModel):
    """Public view of a user (never includes the password hash)"""
    id: int
    email: str
    username: str
    is_verified: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AuthResponse(CamelModel):
    """Response after register or login"""
    user: UserResponse
    token: str


class MessageResponse(CamelModel):
    message: str
