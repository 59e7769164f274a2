"""
Auth security helpers: password hashing and session token signing.

Session tokens are HS256 JWTs carrying {id, role, avatar}. Nothing about a
token is stored server-side; rotating JWT_SECRET invalidates every token.

With TOKEN_EXPIRE_MIN=0 (the default) no time-based claims are added, so the
same claims and secret always produce the same token bytes. A positive value
adds `iat`/`exp` and tokens are rejected once expired.
"""

from __future__ import annotations

import os
import time
from typing import Any

import bcrypt
import jwt

DEFAULT_BCRYPT_ROUNDS = 10


class AuthSecurityError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def jwt_secret() -> str:
    secret = os.environ.get("JWT_SECRET", "").strip()
    if not secret:
        raise RuntimeError("JWT_SECRET is not set.")
    return secret


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def token_expire_minutes() -> int:
    return max(_env_int("TOKEN_EXPIRE_MIN", 0), 0)


def bcrypt_rounds() -> int:
    rounds = _env_int("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS)
    # bcrypt accepts 4..31
    return min(max(rounds, 4), 31)


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    try:
        hashed = bcrypt.hashpw(password, bcrypt.gensalt(rounds=bcrypt_rounds()))
    except ValueError as exc:
        raise AuthSecurityError("Password cannot be longer than 72 bytes.") from exc
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def build_session_token(*, staff_id: int, role: str | None, avatar: str | None) -> str:
    payload: dict[str, Any] = {
        "id": staff_id,
        "role": role,
        "avatar": avatar,
    }

    expire_min = token_expire_minutes()
    if expire_min > 0:
        issued_at = now_epoch_s()
        payload["iat"] = issued_at
        payload["exp"] = issued_at + (expire_min * 60)

    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_session_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Token is required")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid token") from exc

    staff_id = payload.get("id")
    if not isinstance(staff_id, int) or isinstance(staff_id, bool):
        raise AuthSecurityError("Invalid token")

    return payload
