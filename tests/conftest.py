"""Test fixtures for clubhub."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from databases import Database
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine

import clubhub.models  # noqa: F401  registers the tables on Base.metadata
from clubhub.auth import create_access_token
from clubhub.database import Base, get_database
from clubhub.main import app
from clubhub.repositories import ClubRepository
from clubhub.services import ClubService


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def auth_headers(user_id: int) -> dict[str, str]:
    """Bearer header for the given user id."""
    token = create_access_token({"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """A fresh SQLite file database with the schema created from the models.

    A file (not :memory:) is used because `databases` opens one SQLite
    connection per task.
    """
    url = f"sqlite:///{tmp_path / 'clubhub-test.db'}"
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    engine.dispose()

    db = Database(url)
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
def club_repository(database: Database) -> ClubRepository:
    return ClubRepository(database)


@pytest.fixture
def club_service(club_repository: ClubRepository) -> ClubService:
    return ClubService(club_repository)


@pytest.fixture
def make_user(database: Database) -> Callable[..., Awaitable[int]]:
    """Factory inserting a user and returning its id."""
    counter = {"n": 0}

    async def _make_user(name: Optional[str] = None) -> int:
        counter["n"] += 1
        name = name or f"user{counter['n']}"
        email = f"{name}@example.com"
        await database.execute(
            "INSERT INTO users (email, name) VALUES (:email, :name)",
            {"email": email, "name": name},
        )
        return await database.fetch_val(
            "SELECT id FROM users WHERE email = :email", {"email": email}
        )

    return _make_user


@pytest.fixture
def make_event(database: Database) -> Callable[..., Awaitable[int]]:
    """Factory inserting an event starting `starts_in` from now."""
    counter = {"n": 0}

    async def _make_event(
        club_id: int,
        host_id: int,
        starts_in: timedelta,
        participants: tuple[int, ...] = (),
    ) -> int:
        counter["n"] += 1
        title = f"event-{counter['n']}"
        await database.execute(
            """
            INSERT INTO events (club_id, host_id, title, start_time, is_archived)
            VALUES (:club_id, :host_id, :title, :start_time, :is_archived)
            """,
            {
                "club_id": club_id,
                "host_id": host_id,
                "title": title,
                "start_time": utc_now() + starts_in,
                "is_archived": False,
            },
        )
        event_id = await database.fetch_val(
            "SELECT id FROM events WHERE title = :title", {"title": title}
        )
        for user_id in (host_id, *participants):
            await database.execute(
                "INSERT INTO event_joins (event_id, user_id) VALUES (:event_id, :user_id)",
                {"event_id": event_id, "user_id": user_id},
            )
        return event_id

    return _make_event


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Test client whose requests use the test database."""

    async def override_get_database() -> Database:
        return database

    app.dependency_overrides[get_database] = override_get_database

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
