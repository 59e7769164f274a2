"""
Staff credential persistence.
"""

from __future__ import annotations

from core import db


def normalize_username(username: str) -> str:
    return (username or "").strip()


async def create_staff(*, name: str, username: str, password_hash: str, role: str) -> dict:
    row = await db.fetch_one(
        """
        INSERT INTO staff (nama_staff, username, password, jabatan)
        VALUES ($1, $2, $3, $4)
        RETURNING id, nama_staff, username, jabatan, image, last_login
        """,
        name,
        normalize_username(username),
        password_hash,
        role,
    )
    if row is None:
        raise RuntimeError("Failed to create staff.")
    return row


async def get_staff_by_username(username: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT id, nama_staff, jabatan, image, password, last_login
        FROM staff
        WHERE username = $1
        """,
        normalize_username(username),
    )


async def get_staff_profile(staff_id: int) -> dict | None:
    return await db.fetch_one(
        """
        SELECT nama_staff, image
        FROM staff
        WHERE id = $1
        """,
        staff_id,
    )


async def touch_last_login(staff_id: int) -> None:
    await db.execute(
        """
        UPDATE staff
        SET last_login = now()
        WHERE id = $1
        """,
        staff_id,
    )
