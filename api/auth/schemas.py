"""
Auth API schemas (request/response models).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

# bcrypt only looks at the first 72 bytes and newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_BYTES)
    role: str = Field(..., min_length=1, max_length=100)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes.")
        return value


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=128)


class RegisterResponse(BaseModel):
    message: str = "User registered successfully"
    id: int


class TokenResponse(BaseModel):
    token: str


class VerifyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    display_name: str | None = Field(default=None, alias="displayName")
    role: str | None = None
    avatar: str | None = None
    token: str
