"""
HTTP error taxonomy.

Each error is an `HTTPException` with a fixed status code so services can
raise them directly. `main.py` renders every one as `{"message": ...}`.
"""

from __future__ import annotations

import asyncpg
from fastapi import HTTPException, status

# Failures of the relational store or the filesystem that escape a service.
STORE_ERRORS: tuple[type[Exception], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
)


class AppError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(status_code=self.status_code, detail=message or self.default_message)


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid token"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class PayloadTooLarge(AppError):
    status_code = 413
    default_message = "File too large"


class InternalError(AppError):
    pass
