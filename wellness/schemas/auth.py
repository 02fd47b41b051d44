from typing import Optional
from pydantic import BaseModel, field_validator


def _normalize_email(value: str) -> str:
    return (value or "").strip().lower()


class LoginRequest(BaseModel):
    email: str
    password: str
    mode: Optional[str] = None  # "client" enables self sign-up for unknown emails
    name: Optional[str] = None
    client_id: Optional[int] = None
    company_id: Optional[int] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = _normalize_email(v)
        if not v:
            raise ValueError("email is required")
        return v

    @field_validator("password")
    @classmethod
    def password_required(cls, v: str) -> str:
        if not v:
            raise ValueError("password is required")
        return v


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str
    role: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = _normalize_email(v)
        if not v:
            raise ValueError("email is required")
        return v

    @field_validator("name", "password")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v


class UserPublic(BaseModel):
    id: int
    name: str
    role: str
    email: str

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    token: str
    user: UserPublic


class Principal(BaseModel):
    """Decoded bearer credential, injected into every authenticated request."""

    id: int
    role: str
    name: str
    email: str
