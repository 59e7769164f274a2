"""
Auth business logic: register, login, token verification and re-issue.
"""

from __future__ import annotations

import logging

from core.errors import STORE_ERRORS, BadRequest, Forbidden, InternalError, NotFound, Unauthorized

from . import repository, schemas, security

logger = logging.getLogger(__name__)


async def register(payload: schemas.RegisterRequest) -> schemas.RegisterResponse:
    # Uniqueness of `username` is enforced by the store only.
    try:
        password_hash = security.hash_password(payload.password)
    except security.AuthSecurityError as exc:
        raise BadRequest(str(exc)) from exc

    try:
        row = await repository.create_staff(
            name=payload.name,
            username=payload.username,
            password_hash=password_hash,
            role=payload.role,
        )
    except STORE_ERRORS as exc:
        logger.exception("register_failed username=%s", payload.username)
        raise InternalError() from exc

    logger.info("staff_registered staff_id=%s role=%s", row["id"], row["jabatan"])
    return schemas.RegisterResponse(id=int(row["id"]))


async def login(payload: schemas.LoginRequest) -> schemas.TokenResponse:
    staff = await repository.get_staff_by_username(payload.username)
    if staff is None:
        raise Unauthorized("Invalid username or password")

    if not security.verify_password(payload.password, str(staff.get("password") or "")):
        logger.info("login_rejected staff_id=%s", staff["id"])
        raise Unauthorized("Invalid username or password")

    staff_id = int(staff["id"])
    try:
        await repository.touch_last_login(staff_id)
    except STORE_ERRORS as exc:
        logger.exception("last_login_update_failed staff_id=%s", staff_id)
        raise InternalError() from exc

    token = security.build_session_token(
        staff_id=staff_id,
        role=staff.get("jabatan"),
        avatar=staff.get("image"),
    )
    logger.info("login_succeeded staff_id=%s", staff_id)
    return schemas.TokenResponse(token=token)


def verify_token(token: str) -> dict:
    """
    Validate a session token and return its claims.
    """
    try:
        return security.decode_session_token(token)
    except security.AuthSecurityError as exc:
        raise Forbidden(str(exc)) from exc


async def authenticate(claims: dict) -> schemas.VerifyResponse:
    """
    Refresh the caller's profile from the store and issue a new token.
    """
    staff_id = int(claims["id"])
    role = claims.get("role")

    profile = await repository.get_staff_profile(staff_id)
    if profile is None:
        raise NotFound("User not found")

    avatar = profile.get("image")
    token = security.build_session_token(staff_id=staff_id, role=role, avatar=avatar)
    return schemas.VerifyResponse(
        display_name=profile.get("nama_staff"),
        role=role,
        avatar=avatar,
        token=token,
    )
