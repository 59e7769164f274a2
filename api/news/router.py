"""
News API endpoints.

Paths follow the existing frontend: `/berita` for reads, `/add-news`,
`/edit-news/{id}` and `/delete-news/{id}` for writes, `/uploads/{name}` for
stored images.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, BackgroundTasks, File, Form, UploadFile, status
from fastapi.responses import FileResponse

from core import storage

from . import service

router = APIRouter()


def _present(upload: UploadFile | None) -> UploadFile | None:
    # Browsers send an empty part when no file was picked.
    if upload is None or not upload.filename:
        return None
    return upload


@router.get("/berita")
async def list_news() -> list[dict]:
    return await service.list_news()


@router.get("/berita/{news_id}")
async def get_news(news_id: int) -> dict:
    return await service.get_news(news_id)


@router.post("/add-news", status_code=status.HTTP_201_CREATED)
async def add_news(
    title: str = Form(..., min_length=1),
    category: str | None = Form(default=None),
    news_date: date | None = Form(default=None, alias="date"),
    author_name: str | None = Form(default=None),
    author_role: str | None = Form(default=None),
    author_image_url: str | None = Form(default=None),
    content: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
) -> dict:
    return await service.create_news(
        title=title,
        category=category,
        news_date=news_date,
        author_name=author_name,
        author_role=author_role,
        author_image_url=author_image_url,
        content=content,
        image=_present(image),
    )


@router.put("/edit-news/{news_id}")
async def edit_news(
    news_id: int,
    background_tasks: BackgroundTasks,
    title: str = Form(..., min_length=1),
    category: str | None = Form(default=None),
    content: str | None = Form(default=None),
    image: UploadFile | None = File(default=None),
) -> dict:
    stale_image = await service.edit_news(
        news_id,
        title=title,
        category=category,
        content=content,
        image=_present(image),
    )
    # Old file cleanup happens after the response and never fails the request.
    if stale_image:
        background_tasks.add_task(storage.remove_image, stale_image)
    return {"message": "News edited successfully"}


@router.delete("/delete-news/{news_id}")
async def delete_news(news_id: int, background_tasks: BackgroundTasks) -> dict:
    stale_image = await service.delete_news(news_id)
    if stale_image:
        background_tasks.add_task(storage.remove_image, stale_image)
    return {"message": "News deleted successfully"}


@router.get("/uploads/{image_name}")
async def get_upload(image_name: str) -> FileResponse:
    return FileResponse(storage.image_path(image_name))
