"""
Job position persistence (raw SQL).

`positions` keeps camelCase column names (`"totalWorker"`, `"contractPeriod"`,
`"dateUpload"`), so `p.*` rows already carry the keys clients expect.

Child tables are keyed by `position_id` and carry no ORDER BY; callers must
not rely on row order.
"""

from __future__ import annotations

from typing import Any

from core import db


async def list_positions() -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT
          p.id,
          p.name AS position,
          s.name AS sector,
          dc.country AS location,
          p."totalWorker" AS worker,
          p."contractPeriod",
          p.salary,
          p."dateUpload",
          p.image
        FROM positions p
        JOIN destination_countries dc ON p.country_id = dc.id
        JOIN sectors s ON p.sector_id = s.id
        """
    )


async def get_position(position_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT p.*, dc.country, s.name AS sector
        FROM positions p
        JOIN destination_countries dc ON p.country_id = dc.id
        JOIN sectors s ON p.sector_id = s.id
        WHERE p.id = $1
        """,
        position_id,
    )


async def list_tasks(position_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        "SELECT task FROM tasks WHERE position_id = $1",
        position_id,
    )


async def list_document_requirements(position_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        "SELECT document FROM document_requirements WHERE position_id = $1",
        position_id,
    )


async def list_requirements(position_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        "SELECT * FROM requirements WHERE position_id = $1",
        position_id,
    )


async def list_working_conditions(position_id: int) -> list[dict[str, Any]]:
    return await db.fetch_all(
        "SELECT * FROM working_conditions WHERE position_id = $1",
        position_id,
    )
