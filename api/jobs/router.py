"""
Job listing API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter

from . import service

router = APIRouter(prefix="/api/jobs")


@router.get("")
async def list_jobs() -> list[dict]:
    return await service.list_positions()


@router.get("/{job_id}")
async def get_job(job_id: int) -> dict:
    return await service.position_detail(job_id)
