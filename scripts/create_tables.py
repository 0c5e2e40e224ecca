"""
scripts/create_tables.py
────────────────────────────────────────────────────────────────────────
Create the app tables on `DATABASE_URL` for local development
(the hosted project manages its own schema):

    python -m scripts.create_tables
    python -m scripts.create_tables --drop      # start from scratch
"""
from __future__ import annotations

import asyncio
from argparse import ArgumentParser

from dotenv import load_dotenv
load_dotenv()

from sqlalchemy.ext.asyncio import AsyncEngine

from services.db import Base, _create_engine


async def create_all(eng: AsyncEngine, drop: bool = False) -> list[str]:
    async with eng.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    return sorted(Base.metadata.tables)


async def _async_main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--url", help="override DATABASE_URL")
    ap.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = ap.parse_args()

    eng = _create_engine(args.url)
    try:
        for name in await create_all(eng, drop=args.drop):
            print(f"✓ {name}")
    finally:
        await eng.dispose()


if __name__ == "__main__":  # pragma: no cover
    asyncio.run(_async_main())
