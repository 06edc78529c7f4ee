"""Seed demo users into the users table.

Generates deterministic names, emails and phone numbers so repeated runs
are idempotent: users whose email already exists are skipped.

Usage:
    python -m scripts.seed_users [count]

Default count: 250 (five listing pages). Requires DATABASE_URL and an
upgraded schema (alembic upgrade head).
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError
from sqlalchemy import select

from app.core.config import get_settings
from app.infrastructure.persistence.database import _ensure_engine, dispose_engine
from app.infrastructure.persistence.models.user import User

DEFAULT_COUNT = 250

_FIRST_NAMES = (
    "Alice", "Bob", "Carol", "David", "Erin", "Frank", "Grace", "Heidi",
    "Ivan", "Judy", "Mallory", "Niaj", "Olivia", "Peggy", "Rupert", "Sybil",
)
_LAST_NAMES = (
    "Anderson", "Brown", "Clark", "Davis", "Evans", "Garcia", "Harris",
    "Johnson", "King", "Lopez", "Martin", "Nguyen", "Okafor", "Patel",
)


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)
    get_settings.cache_clear()


def demo_user(n: int) -> dict[str, str]:
    """Field values for the n-th demo user (n >= 0)."""
    first = _FIRST_NAMES[n % len(_FIRST_NAMES)]
    last = _LAST_NAMES[(n // len(_FIRST_NAMES)) % len(_LAST_NAMES)]
    return {
        "name": f"{first} {last}",
        "email": f"{first.lower()}.{last.lower()}.{n}@example.com",
        "phone": f"+1-555-{n // 10000:03d}-{n % 10000:04d}",
    }


async def run(count: int) -> None:
    _load_env()
    try:
        session_factory = _ensure_engine()
    except ValidationError as e:
        print(f"Invalid settings (is DATABASE_URL set?): {e}", file=sys.stderr)
        sys.exit(1)

    wanted = [demo_user(n) for n in range(count)]
    async with session_factory() as session:
        async with session.begin():
            existing = set(
                (
                    await session.execute(
                        select(User.email).where(
                            User.email.in_([u["email"] for u in wanted])
                        )
                    )
                ).scalars()
            )
            new_users = [User(**u) for u in wanted if u["email"] not in existing]
            session.add_all(new_users)
        print(f"  Users: {len(new_users)} created, {len(existing)} already present")

    await dispose_engine()
    print("Seed completed.")


def main() -> None:
    count = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_COUNT
    if count < 0:
        print("count must be >= 0", file=sys.stderr)
        sys.exit(1)
    asyncio.run(run(count))


if __name__ == "__main__":
    main()
