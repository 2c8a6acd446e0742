import asyncio
import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from slowapi.errors import RateLimitExceeded
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db import Base, get_session
from app.exceptions import DomainException, StoreError
from app.limiter import limiter, rate_limit_handler
from app.main import domain_exception_handler
from app.models import Game
from app.routers import games
from app.services.games import load_recent_games, save_game


def _build_app() -> FastAPI:
    app = FastAPI()
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.include_router(games.router, prefix="/api/v0")
    return app


def _engine():
    return create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture()
def games_client():
    engine = _engine()
    async_session_maker = sessionmaker(
        engine, expire_on_commit=False, class_=AsyncSession
    )

    async def init_schema() -> None:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, tables=[Game.__table__])

    asyncio.run(init_schema())

    async def override_get_session() -> Iterable[AsyncSession]:
        async with async_session_maker() as session:
            yield session

    app = _build_app()
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client, async_session_maker

    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


@pytest.fixture()
def broken_games_client():
    engine = _engine()
    async_session_maker = sessionmaker(
        engine, expire_on_commit=False, class_=AsyncSession
    )

    async def override_get_session() -> Iterable[AsyncSession]:
        async with async_session_maker() as session:
            yield session

    app = _build_app()
    app.dependency_overrides[get_session] = override_get_session

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


def test_create_game_returns_stored_record(games_client):
    client, _ = games_client
    resp = client.post(
        "/api/v0/games",
        json={
            "players": ["Ann", "Bo", "Cy", "Di", "Ed", "Flo"],
            "scores": {"Ann": 400, "Bo": 0, "Cy": 0, "Di": 0, "Ed": 0, "Flo": 0},
            "mode": "1v5",
        },
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["id"]
    assert data["mode"] == "1v5"
    assert data["scores"]["Ann"] == 400
    assert data["playedAt"] is not None


def test_create_game_rejects_unknown_mode(games_client):
    client, _ = games_client
    resp = client.post(
        "/api/v0/games",
        json={"players": ["Ann"], "scores": {"Ann": 1}, "mode": "Solo"},
    )
    assert resp.status_code == 422


def test_recent_games_newest_first_and_limited(games_client):
    client, async_session_maker = games_client
    base = datetime(2024, 10, 28, 20, 0, tzinfo=timezone.utc)

    async def seed() -> None:
        async with async_session_maker() as session:
            session.add_all(
                [
                    Game(
                        id=f"g{idx:02d}",
                        players=["Ann", "Bo"],
                        scores={"Ann": idx, "Bo": 0},
                        mode="Normal",
                        played_at=base + timedelta(minutes=idx),
                    )
                    for idx in range(12)
                ]
            )
            await session.commit()

    asyncio.run(seed())

    resp = client.get("/api/v0/games")
    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 10
    assert [g["id"] for g in data[:3]] == ["g11", "g10", "g09"]

    resp = client.get("/api/v0/games", params={"limit": 2})
    assert [g["id"] for g in resp.json()] == ["g11", "g10"]


def test_recent_games_empty(games_client):
    client, _ = games_client
    resp = client.get("/api/v0/games")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.parametrize("limit", [0, 101])
def test_recent_games_limit_bounds(games_client, limit):
    client, _ = games_client
    assert client.get("/api/v0/games", params={"limit": limit}).status_code == 422


def test_read_failure_is_surfaced(broken_games_client, caplog):
    client = broken_games_client
    with caplog.at_level(logging.ERROR):
        resp = client.get("/api/v0/games")
    assert resp.status_code == 503
    body = resp.json()
    assert body["code"] == "store_unavailable"
    assert "no such table" in body["detail"]
    assert any(r.message.startswith("Error loading games") for r in caplog.records)


def test_write_failure_is_surfaced(broken_games_client):
    client = broken_games_client
    resp = client.post(
        "/api/v0/games",
        json={"players": ["Ann"], "scores": {"Ann": 1}, "mode": "Normal"},
    )
    assert resp.status_code == 503
    assert resp.json()["code"] == "store_unavailable"


def test_service_round_trip():
    engine = _engine()
    async_session_maker = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async def run():
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, tables=[Game.__table__])
        async with async_session_maker() as session:
            first = await save_game(session, ["Ann", "Bo"], {"Ann": 67.5, "Bo": 0}, "Normal")
            second = await save_game(session, ["Ann", "Bo"], {"Ann": 0, "Bo": 30}, "Normal")
            recent = await load_recent_games(session, limit=10)
            return first, second, recent

    try:
        first, second, recent = asyncio.run(run())
    finally:
        asyncio.run(engine.dispose())

    assert first.id != second.id
    assert [g.id for g in recent] == [second.id, first.id]
    assert recent[1].scores == {"Ann": 67.5, "Bo": 0}


def test_store_error_keeps_cause_message():
    engine = _engine()
    async_session_maker = sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    async def run():
        async with async_session_maker() as session:
            await save_game(session, ["Ann"], {"Ann": 1}, "Normal")

    try:
        with pytest.raises(StoreError) as exc:
            asyncio.run(run())
    finally:
        asyncio.run(engine.dispose())

    assert exc.value.status_code == 503
    assert "no such table: game" in exc.value.detail
    assert exc.value.__cause__ is not None
