"""
services/db.py
────────────────────────────────────────────────────────────────────────
* Async SQLAlchemy v2 setup against the hosted Postgres (Supabase)
* Models that map to the four app tables
* Session dependency + small DAO helpers used by routers / scripts
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import AsyncGenerator

from sqlalchemy import (
    JSON,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    select,
)
from sqlalchemy.ext.asyncio import (
    AsyncAttrs,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

from config import settings

# ───────── connection helper ────────────────────────────────────────
_ENGINE: AsyncEngine | None = None


def _create_engine(url: str | None = None) -> AsyncEngine:
    url = url or settings.database_url
    if not url:
        raise RuntimeError("Set DATABASE_URL (Supabase Postgres connection string)")
    # Supabase hands out postgres:// URLs; we need the asyncpg driver
    if url.startswith("postgres://"):
        url = "postgresql+asyncpg://" + url[len("postgres://"):]
    elif url.startswith("postgresql://"):
        url = "postgresql+asyncpg://" + url[len("postgresql://"):]
    return create_async_engine(url, pool_pre_ping=True)


def engine() -> AsyncEngine:
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = _create_engine()
    return _ENGINE


def _new_id() -> str:
    return str(uuid.uuid4())


# ───────── declarative base ──────────────────────────────────────────
Base = declarative_base(cls=AsyncAttrs)

# ───────── models reflect the hosted table layout ───────────────────


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # auth user id
    name: Mapped[str] = mapped_column(String)
    age: Mapped[int] = mapped_column(Integer)
    gender: Mapped[str] = mapped_column(String)
    medical_conditions: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


class MealEntryRow(Base):
    __tablename__ = "meal_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "meal_date", "meal_type", name="uq_meal_entries_slot"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    meal_date: Mapped[date] = mapped_column(Date, index=True)
    meal_type: Mapped[str] = mapped_column(String)
    meal_description: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now()
    )


class WeeklyReportRow(Base):
    __tablename__ = "weekly_reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    week_start: Mapped[date] = mapped_column(Date)
    week_end: Mapped[date] = mapped_column(Date)
    iron_percentage: Mapped[float] = mapped_column(Float)
    calcium_percentage: Mapped[float] = mapped_column(Float)
    potassium_percentage: Mapped[float] = mapped_column(Float)
    magnesium_percentage: Mapped[float] = mapped_column(Float)
    recommendations: Mapped[list] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class MedicalReport(Base):
    __tablename__ = "reports"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(36), index=True)
    file_path: Mapped[str] = mapped_column(String)
    file_name: Mapped[str] = mapped_column(String)
    analysis: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


# ───────── session helper ────────────────────────────────────────────

async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(engine(), expire_on_commit=False)
    async with async_session() as session:
        yield session


# ───────── DAO helpers ───────────────────────────────────────────────

async def fetch_meals(
    db: AsyncSession, user_id: str, start: date, end: date
) -> list[MealEntryRow]:
    """All of a user's meal rows with start <= meal_date <= end, oldest first."""
    res = await db.execute(
        select(MealEntryRow)
        .where(
            MealEntryRow.user_id == user_id,
            MealEntryRow.meal_date >= start,
            MealEntryRow.meal_date <= end,
        )
        .order_by(MealEntryRow.meal_date)
    )
    return list(res.scalars().all())
