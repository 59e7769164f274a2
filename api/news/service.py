"""
News business logic.

Image files and rows are not changed atomically: a new file is written
before the row update, and the previous file is removed afterwards by a
background task. A crash in between leaves an orphaned file at worst.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from fastapi import UploadFile

from core import storage
from core.errors import NotFound

from . import repository

logger = logging.getLogger(__name__)


async def list_news() -> list[dict[str, Any]]:
    return await repository.list_news()


async def get_news(news_id: int) -> dict[str, Any]:
    row = await repository.get_news(news_id)
    if row is None:
        raise NotFound("News not found")
    return row


async def create_news(
    *,
    title: str,
    category: str | None = None,
    news_date: date | None = None,
    author_name: str | None = None,
    author_role: str | None = None,
    author_image_url: str | None = None,
    content: str | None = None,
    image: UploadFile | None = None,
) -> dict[str, Any]:
    image_name = await storage.save_image(image) if image is not None else None

    try:
        row = await repository.insert_news(
            title=title,
            category=category,
            image=image_name,
            news_date=news_date,
            author_name=author_name,
            author_role=author_role,
            author_image_url=author_image_url,
            content=content,
        )
    except Exception:
        storage.remove_image(image_name)
        raise

    logger.info("news_created news_id=%s image=%s", row["id"], image_name)
    return row


async def edit_news(
    news_id: int,
    *,
    title: str,
    category: str | None = None,
    content: str | None = None,
    image: UploadFile | None = None,
) -> str | None:
    """
    Update a news row. Returns the stored image that is no longer referenced.
    """
    existing = await repository.get_news(news_id)
    if existing is None:
        raise NotFound("News not found")

    new_image = await storage.save_image(image) if image is not None else None

    try:
        updated = await repository.update_news(
            news_id,
            title=title,
            category=category,
            content=content,
            image=new_image,
        )
    except Exception:
        storage.remove_image(new_image)
        raise

    if not updated:
        # Deleted between the lookup and the update.
        storage.remove_image(new_image)
        raise NotFound("News not found")

    stale = existing.get("image") if new_image else None
    logger.info("news_edited news_id=%s new_image=%s", news_id, new_image)
    return stale


async def delete_news(news_id: int) -> str | None:
    existing = await repository.get_news(news_id)
    if existing is None:
        raise NotFound("News not found")

    if not await repository.delete_news(news_id):
        raise NotFound("News not found")

    logger.info("news_deleted news_id=%s", news_id)
    return existing.get("image")
