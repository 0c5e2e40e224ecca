"""
Shared fixtures: a throw-away SQLite database behind the app's session
dependency, and bearer tokens signed with the configured secret.
"""
from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from main import app
from scripts.create_tables import create_all
from services.auth import create_token
from services.db import get_session

USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_ID = "22222222-2222-2222-2222-222222222222"


@pytest.fixture
def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'app.db'}", poolclass=NullPool)
    asyncio.run(create_all(eng))
    return eng


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def client(session_factory):
    async def _session():
        async with session_factory() as s:
            yield s

    app.dependency_overrides[get_session] = _session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {create_token(USER_ID)}"}


@pytest.fixture
def other_auth():
    return {"Authorization": f"Bearer {create_token(OTHER_ID)}"}


def add_rows(session_factory, *rows) -> None:
    """Insert ORM rows directly, bypassing the API."""
    async def _go():
        async with session_factory() as s:
            s.add_all(rows)
            await s.commit()

    asyncio.run(_go())
