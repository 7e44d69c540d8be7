import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, field_validator


class SignupRequest(BaseModel):
    email: EmailStr
    password: str
    full_name: str
    role: Literal["consumer", "provider"]
    phone: str | None = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < 8:
            raise ValueError("Password must be at least 8 characters")
        if len(value.encode("utf-8")) > 72:
            raise ValueError("Password is too long")
        if not re.search(r"[A-Za-z]", value) or not re.search(r"\d", value):
            raise ValueError("Password must include a letter and a number")
        return value

    @field_validator("full_name")
    @classmethod
    def validate_full_name(cls, value: str) -> str:
        trimmed = (value or "").strip()
        if not trimmed:
            raise ValueError("Full name is required")
        return trimmed

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        trimmed = (value or "").strip()
        return trimmed or None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LogoutResponse(BaseModel):
    signed_out: bool = True


class AccountResponse(BaseModel):
    id: str
    email: str
    role: Literal["consumer", "provider"]
    full_name: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class MeResponse(BaseModel):
    """Current account plus the view the client should render for it."""
    account: AccountResponse
    view: Literal["consumer", "provider"]
