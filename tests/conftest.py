"""Pytest configuration: an isolated in-memory SQLite store per test."""

import os
from decimal import Decimal

# Config is read at import time; point it at SQLite before anything imports it.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from merchnexus.db import Base
from tests.factories import add_product, add_user

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def _enable_foreign_keys(dbapi_connection, _connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def engine():
    """Fresh schema for every test so rows never leak between tests."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    event.listen(eng.sync_engine, "connect", _enable_foreign_keys)

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng

    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False, class_=AsyncSession)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def user(db):
    return await add_user(db, email="owner@example.com", full_name="Owner")


@pytest_asyncio.fixture
async def other_user(db):
    return await add_user(db, email="intruder@example.com")


@pytest_asyncio.fixture
async def catalog(db):
    """The A/B/C catalog: A is the oldest, C the newest."""
    a = await add_product(
        db, "iPhone Case Premium", "Electronics", "29.99", offset=0,
        brand="Apple", keywords=["phone", "case", "premium"], competition_level="medium",
    )
    b = await add_product(
        db, "Wireless Headphones", "Electronics", "199.99", offset=1,
        brand="Sony", rating=Decimal("4.8"), keywords=["wireless", "headphones"], competition_level="high",
    )
    c = await add_product(
        db, "Gaming Mouse", "Computers", "79.99", offset=2,
        brand="Logitech", rating=Decimal("4.2"), keywords=["gaming", "mouse"], competition_level="low",
    )
    return {"A": a, "B": b, "C": c}


@pytest.fixture
def product(catalog):
    return catalog["B"]
