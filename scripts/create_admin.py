#!/usr/bin/env python3
"""Create or promote an admin user with a properly hashed password."""

import asyncio

from sqlalchemy import select

from app.core.permissions import UserRole
from app.core.security import get_password_hash
from app.database import AsyncSessionLocal
from app.models.user import User


async def create_admin(
    email: str = "admin@slotbook.io",
    password: str = "Admin@123",
    name: str = "Slotbook Admin",
) -> None:
    """Create an admin user, or promote the existing account with that email."""
    email = email.lower().strip()
    async with AsyncSessionLocal() as session:

        # Check if the account already exists
        result = await session.execute(select(User).where(User.email == email))
        existing = result.scalar_one_or_none()

        if existing:
            existing.password_hash = get_password_hash(password)
            existing.role = UserRole.ADMIN.value
            existing.is_active = True
            existing.name = name
            await session.commit()
            print(f"Promoted existing user to admin: {email}")
        else:
            admin = User(
                email=email,
                name=name,
                password_hash=get_password_hash(password),
                role=UserRole.ADMIN.value,
                is_active=True,
            )
            session.add(admin)
            await session.commit()
            print(f"Created admin user: {email}")

        print(f"Email: {email}")
        print("Role: ADMIN")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", default="admin@slotbook.io", help="Admin email")
    parser.add_argument("--password", default="Admin@123", help="Admin password")
    parser.add_argument("--name", default="Slotbook Admin", help="Display name")

    args = parser.parse_args()

    asyncio.run(
        create_admin(
            email=args.email,
            password=args.password,
            name=args.name,
        )
    )
