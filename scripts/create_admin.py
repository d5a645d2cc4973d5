#!/usr/bin/env python3
"""
Create an admin account for the Blog Hub moderation panel.

Reads credentials from .env:
    ADMIN_EMAIL     : admin account email (required)
    ADMIN_PASSWORD  : admin account password (required)
    ADMIN_NAME      : display name (optional, defaults to "Admin")

Usage:
    python -m scripts.create_admin
"""
from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

# Add backend root to path so imports resolve
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "services" / "blog"))
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "shared"))

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from sqlalchemy.ext.asyncio import async_sessionmaker

from app.auth.constants import UserRole
from app.auth.models import User
from app.auth.service import get_user_by_email
from app.auth.utils import hash_password
from shared.database.postgres import get_async_engine


async def main() -> None:
    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        print("Error: ADMIN_EMAIL and ADMIN_PASSWORD must be set in .env")
        sys.exit(1)
    name = os.getenv("ADMIN_NAME", "Admin")
    db_url = os.environ["BLOG_DATABASE_URL"]

    engine = get_async_engine(db_url)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async with session_factory() as session:
        existing = await get_user_by_email(session, email)

        if existing is not None:
            print(f"User {email} already exists (id={existing.id}).")
            if existing.role != UserRole.ADMIN:
                existing.role = UserRole.ADMIN
                await session.commit()
                print("  -> Upgraded to admin.")
            else:
                print("  -> Already an admin. Nothing to do.")
        else:
            user = User(
                name=name,
                email=email.lower(),
                password_hash=hash_password(password),
                role=UserRole.ADMIN,
            )
            session.add(user)
            await session.commit()
            print(f"Admin created: {email} (id={user.id})")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
