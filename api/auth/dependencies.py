"""
Auth dependencies for protected FastAPI routes.
"""

from __future__ import annotations

from fastapi import Depends, Header

from core.errors import Forbidden

from . import service


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise Forbidden("Token is required")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise Forbidden("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise Forbidden("Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_token_claims(token: str = Depends(get_bearer_token)) -> dict:
    return service.verify_token(token)
