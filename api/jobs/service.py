"""
Job position business logic.

`position_detail` builds one denormalized view of a position: the joined
primary row plus four child-table lookups issued concurrently and merged
only when all of them succeed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from core.errors import STORE_ERRORS, InternalError, NotFound

from . import repository

logger = logging.getLogger(__name__)


def _first_or_none(rows: list[dict[str, Any]]) -> dict[str, Any] | None:
    return rows[0] if rows else None


def merge_position_detail(
    position: dict[str, Any],
    *,
    tasks: list[dict[str, Any]],
    document_requirements: list[dict[str, Any]],
    requirements: list[dict[str, Any]],
    working_conditions: list[dict[str, Any]],
) -> dict[str, Any]:
    """
    Combine the primary row with its child rows.

    `requirements` and `workingConditions` are 1:1 in practice; only the first
    row is kept and the key is left out when there is none.
    """
    detail: dict[str, Any] = dict(position)
    detail["tasks"] = list(tasks)
    detail["documentRequirements"] = list(document_requirements)

    first_requirements = _first_or_none(requirements)
    if first_requirements is not None:
        detail["requirements"] = first_requirements

    first_working_conditions = _first_or_none(working_conditions)
    if first_working_conditions is not None:
        detail["workingConditions"] = first_working_conditions

    return detail


async def list_positions() -> list[dict[str, Any]]:
    return await repository.list_positions()


async def position_detail(position_id: int) -> dict[str, Any]:
    position = await repository.get_position(position_id)
    if position is None:
        raise NotFound("Job Not Found")

    # All four lookups run at once; any failure fails the whole view.
    # In-flight siblings are not cancelled.
    try:
        tasks, documents, requirements, working_conditions = await asyncio.gather(
            repository.list_tasks(position_id),
            repository.list_document_requirements(position_id),
            repository.list_requirements(position_id),
            repository.list_working_conditions(position_id),
        )
    except STORE_ERRORS as exc:
        logger.exception("position_detail_failed position_id=%s", position_id)
        raise InternalError() from exc

    return merge_position_detail(
        position,
        tasks=tasks,
        document_requirements=documents,
        requirements=requirements,
        working_conditions=working_conditions,
    )
