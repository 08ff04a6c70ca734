"""Schemas Pydantic pour les utilisateurs et l'authentification."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    """Inscription publique : le role admin ne peut pas etre choisi."""

    name: str = Field(..., min_length=1, max_length=80)
    email: str = Field(..., pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=6)
    role: Literal["user", "publisher"] = "user"


class LoginRequest(BaseModel):
    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=1)


class UserCreate(BaseModel):
    """Creation d'un utilisateur par un administrateur."""

    name: str = Field(..., min_length=1, max_length=80)
    email: str = Field(..., pattern=_EMAIL_PATTERN)
    password: str = Field(..., min_length=6)
    role: Literal["user", "publisher", "admin"] = "user"


class UserUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=80)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN)
    role: Literal["user", "publisher", "admin"] | None = None


class UpdateDetailsRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=80)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN)


class UpdatePasswordRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=6)


class UserSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    created_at: datetime | None = None
