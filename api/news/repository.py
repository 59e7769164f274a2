"""
News persistence (raw SQL).
"""

from __future__ import annotations

from datetime import date
from typing import Any

from core import db

NEWS_COLUMNS = (
    "id, title, category, image, date, author_name, author_role, author_image_url, content"
)


async def list_news() -> list[dict[str, Any]]:
    return await db.fetch_all(f"SELECT {NEWS_COLUMNS} FROM news")


async def get_news(news_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"SELECT {NEWS_COLUMNS} FROM news WHERE id = $1",
        news_id,
    )


async def insert_news(
    *,
    title: str,
    category: str | None,
    image: str | None,
    news_date: date | None,
    author_name: str | None,
    author_role: str | None,
    author_image_url: str | None,
    content: str | None,
) -> dict[str, Any]:
    row = await db.fetch_one(
        f"""
        INSERT INTO news (title, category, image, date, author_name, author_role, author_image_url, content)
        VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        RETURNING {NEWS_COLUMNS}
        """,
        title,
        category,
        image,
        news_date,
        author_name,
        author_role,
        author_image_url,
        content,
    )
    if row is None:
        raise RuntimeError("Failed to insert news.")
    return row


async def update_news(
    news_id: int,
    *,
    title: str,
    category: str | None,
    content: str | None,
    image: str | None = None,
) -> bool:
    """
    Update a news row. The image column is only touched when `image` is given.
    Returns False when no row matched.
    """
    if image:
        row = await db.fetch_one(
            """
            UPDATE news
            SET title = $1, category = $2, content = $3, image = $4
            WHERE id = $5
            RETURNING id
            """,
            title,
            category,
            content,
            image,
            news_id,
        )
    else:
        row = await db.fetch_one(
            """
            UPDATE news
            SET title = $1, category = $2, content = $3
            WHERE id = $4
            RETURNING id
            """,
            title,
            category,
            content,
            news_id,
        )
    return row is not None


async def delete_news(news_id: int) -> bool:
    row = await db.fetch_one(
        "DELETE FROM news WHERE id = $1 RETURNING id",
        news_id,
    )
    return row is not None
