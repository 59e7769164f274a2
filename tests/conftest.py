"""
Shared test fixtures.

The app runs against an in-memory `FakeStore` instead of Postgres: the
repository functions of every feature package are monkeypatched onto it,
and the app lifespan is replaced so no DB pool is created. Uploaded images
go to a per-test temporary `UPLOAD_DIR`.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

# Must be set before any auth import reads them.
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import asyncpg
import pytest
from fastapi.testclient import TestClient

from auth import repository as auth_repository
from jobs import repository as jobs_repository
from main import app
from news import repository as news_repository


def store_failure() -> Exception:
    return asyncpg.InterfaceError("connection is closed")


class FakeStore:
    """
    Dict-backed stand-in for the tables the repositories query.

    `failing` holds names of repository functions that should raise a store
    error when called.
    """

    def __init__(self) -> None:
        self.staff: dict[int, dict[str, Any]] = {}
        self.news: dict[int, dict[str, Any]] = {}
        self.positions: dict[int, dict[str, Any]] = {}
        self.countries: dict[int, str] = {}
        self.sectors: dict[int, str] = {}
        self.tasks: list[dict[str, Any]] = []
        self.document_requirements: list[dict[str, Any]] = []
        self.requirements: list[dict[str, Any]] = []
        self.working_conditions: list[dict[str, Any]] = []
        self.failing: set[str] = set()
        self._next_id = 1

    def _new_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def _check(self, name: str) -> None:
        if name in self.failing:
            raise store_failure()

    # staff

    async def create_staff(self, *, name: str, username: str, password_hash: str, role: str) -> dict:
        self._check("create_staff")
        if any(row["username"] == username for row in self.staff.values()):
            raise store_failure()
        staff_id = self._new_id()
        self.staff[staff_id] = {
            "id": staff_id,
            "nama_staff": name,
            "username": username,
            "password": password_hash,
            "jabatan": role,
            "image": None,
            "last_login": None,
        }
        return {k: v for k, v in self.staff[staff_id].items() if k != "password"}

    async def get_staff_by_username(self, username: str) -> dict | None:
        self._check("get_staff_by_username")
        for row in self.staff.values():
            if row["username"] == username:
                return dict(row)
        return None

    async def get_staff_profile(self, staff_id: int) -> dict | None:
        self._check("get_staff_profile")
        row = self.staff.get(staff_id)
        if row is None:
            return None
        return {"nama_staff": row["nama_staff"], "image": row["image"]}

    async def touch_last_login(self, staff_id: int) -> None:
        self._check("touch_last_login")
        if staff_id in self.staff:
            self.staff[staff_id]["last_login"] = datetime.now(timezone.utc)

    # news

    async def list_news(self) -> list[dict]:
        self._check("list_news")
        return [dict(row) for row in self.news.values()]

    async def get_news(self, news_id: int) -> dict | None:
        self._check("get_news")
        row = self.news.get(news_id)
        return dict(row) if row is not None else None

    async def insert_news(self, **fields: Any) -> dict:
        self._check("insert_news")
        news_id = self._new_id()
        row = {
            "id": news_id,
            "title": fields["title"],
            "category": fields["category"],
            "image": fields["image"],
            "date": fields["news_date"],
            "author_name": fields["author_name"],
            "author_role": fields["author_role"],
            "author_image_url": fields["author_image_url"],
            "content": fields["content"],
        }
        self.news[news_id] = row
        return dict(row)

    async def update_news(
        self,
        news_id: int,
        *,
        title: str,
        category: str | None,
        content: str | None,
        image: str | None = None,
    ) -> bool:
        self._check("update_news")
        row = self.news.get(news_id)
        if row is None:
            return False
        row.update(title=title, category=category, content=content)
        if image:
            row["image"] = image
        return True

    async def delete_news(self, news_id: int) -> bool:
        self._check("delete_news")
        return self.news.pop(news_id, None) is not None

    # jobs

    def add_position(self, position_id: int, *, name: str, country: str, sector: str, **extra: Any) -> None:
        # Keys mirror the `positions` columns, camelCase included.
        country_id = len(self.countries) + 1
        sector_id = len(self.sectors) + 1
        self.countries[country_id] = country
        self.sectors[sector_id] = sector
        self.positions[position_id] = {
            "id": position_id,
            "name": name,
            "country_id": country_id,
            "sector_id": sector_id,
            "totalWorker": extra.get("totalWorker", 10),
            "contractPeriod": extra.get("contractPeriod", "2 years"),
            "salary": extra.get("salary", "1000"),
            "dateUpload": extra.get("dateUpload"),
            "image": extra.get("image"),
        }

    async def list_positions(self) -> list[dict]:
        self._check("list_positions")
        return [
            {
                "id": p["id"],
                "position": p["name"],
                "sector": self.sectors[p["sector_id"]],
                "location": self.countries[p["country_id"]],
                "worker": p["totalWorker"],
                "contractPeriod": p["contractPeriod"],
                "salary": p["salary"],
                "dateUpload": p["dateUpload"],
                "image": p["image"],
            }
            for p in self.positions.values()
        ]

    async def get_position(self, position_id: int) -> dict | None:
        self._check("get_position")
        p = self.positions.get(position_id)
        if p is None:
            return None
        return {
            **p,
            "country": self.countries[p["country_id"]],
            "sector": self.sectors[p["sector_id"]],
        }

    def _children(self, rows: list[dict[str, Any]], position_id: int, columns: tuple[str, ...] | None) -> list[dict]:
        matched = [row for row in rows if row["position_id"] == position_id]
        if columns is None:
            return [dict(row) for row in matched]
        return [{c: row[c] for c in columns} for row in matched]

    async def list_tasks(self, position_id: int) -> list[dict]:
        self._check("list_tasks")
        return self._children(self.tasks, position_id, ("task",))

    async def list_document_requirements(self, position_id: int) -> list[dict]:
        self._check("list_document_requirements")
        return self._children(self.document_requirements, position_id, ("document",))

    async def list_requirements(self, position_id: int) -> list[dict]:
        self._check("list_requirements")
        return self._children(self.requirements, position_id, None)

    async def list_working_conditions(self, position_id: int) -> list[dict]:
        self._check("list_working_conditions")
        return self._children(self.working_conditions, position_id, None)


_PATCHED = {
    auth_repository: (
        "create_staff",
        "get_staff_by_username",
        "get_staff_profile",
        "touch_last_login",
    ),
    news_repository: (
        "list_news",
        "get_news",
        "insert_news",
        "update_news",
        "delete_news",
    ),
    jobs_repository: (
        "list_positions",
        "get_position",
        "list_tasks",
        "list_document_requirements",
        "list_requirements",
        "list_working_conditions",
    ),
}


@pytest.fixture
def fake_store(monkeypatch: pytest.MonkeyPatch, tmp_path) -> FakeStore:
    store = FakeStore()
    for module, names in _PATCHED.items():
        for name in names:
            monkeypatch.setattr(module, name, getattr(store, name))
    monkeypatch.setenv("UPLOAD_DIR", str(tmp_path / "uploads"))
    return store


@asynccontextmanager
async def _test_lifespan(_app):
    yield


@pytest.fixture
def client(fake_store: FakeStore) -> Generator[TestClient, None, None]:
    app.router.lifespan_context = _test_lifespan
    with TestClient(app) as test_client:
        yield test_client
