"""Seed the system user (and optionally a sample cooperation type) into Postgres.

Public submissions are attributed to the system user; without it every
application upload fails with SYSTEM_USER_NOT_FOUND.

Usage:
    uv run python -m scripts.seed_system_user [--with-sample-type]

Requires: DATABASE_URL (Postgres) and an upgraded schema (alembic upgrade head).
Idempotent: existing rows are left untouched.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sikap.core.config import get_settings
from sikap.infrastructure.persistence import database
from sikap.infrastructure.persistence.models import CooperationType, User

SAMPLE_COOPERATION_TYPE = {
    "name": "Memorandum of Understanding",
    "required_documents": [
        {"key": "proposal", "name": "Proposal Kerjasama", "required": True},
        {"key": "institution_profile", "name": "Profil Institusi", "required": True},
        {"key": "deed", "name": "SK/Akta Pendirian", "required": True},
    ],
}


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


async def _ensure_system_user(session: AsyncSession, username: str) -> tuple[str, bool]:
    result = await session.execute(select(User).where(User.username == username))
    user = result.scalar_one_or_none()
    if user is not None:
        return user.id, False
    user = User(username=username, email=None, is_active=True)
    session.add(user)
    await session.flush()
    return user.id, True


async def _ensure_sample_type(session: AsyncSession) -> tuple[str, bool]:
    name = SAMPLE_COOPERATION_TYPE["name"]
    result = await session.execute(
        select(CooperationType).where(CooperationType.name == name)
    )
    existing = result.scalar_one_or_none()
    if existing is not None:
        return existing.id, False
    cooperation_type = CooperationType(
        name=name,
        required_documents=SAMPLE_COOPERATION_TYPE["required_documents"],
    )
    session.add(cooperation_type)
    await session.flush()
    return cooperation_type.id, True


async def _run(with_sample_type: bool) -> int:
    _load_env()
    get_settings.cache_clear()
    settings = get_settings()
    if not settings.database_url:
        print("DATABASE_URL is not set", file=sys.stderr)
        return 1

    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("Database session factory not available", file=sys.stderr)
        return 1

    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                user_id, created = await _ensure_system_user(
                    session, settings.system_username
                )
                state = "created" if created else "exists"
                print(f"System user {settings.system_username!r}: {state} ({user_id})")
                if with_sample_type:
                    type_id, created = await _ensure_sample_type(session)
                    state = "created" if created else "exists"
                    print(f"Cooperation type: {state} ({type_id})")
    finally:
        await database.dispose_engine()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--with-sample-type",
        action="store_true",
        help="Also create a sample cooperation type with required documents",
    )
    args = parser.parse_args()
    sys.exit(asyncio.run(_run(args.with_sample_type)))


if __name__ == "__main__":
    main()
