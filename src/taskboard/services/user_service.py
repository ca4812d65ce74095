"""User record access — the storage collaborator for the auth core.

Learn: The auth service only needs three things from storage: look a
user up by email, insert a new user, and fetch one by id. Every call
is a real query; nothing is cached between requests.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db.models import User
from taskboard.errors import ConflictError, collaborator_errors


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserService:
    """Business logic for user records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Optional[User]:
        with collaborator_errors("user lookup"):
            result = await self.db.execute(
                select(User).where(User.email == normalize_email(email))
            )
            return result.scalars().first()

    async def get_user(self, user_id: str) -> Optional[User]:
        try:
            key = uuid.UUID(str(user_id))
        except ValueError:
            return None
        with collaborator_errors("user lookup"):
            return await self.db.get(User, key)

    async def insert_user(self, full_name: str, email: str, password_hash: str) -> User:
        """Insert a new user. A concurrent duplicate email surfaces as ConflictError."""
        user = User(
            full_name=full_name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
        )
        with collaborator_errors("user insert"):
            self.db.add(user)
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                raise ConflictError("Email already registered")
            await self.db.refresh(user)
        return user

    async def update_profile(
        self,
        user: User,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
    ) -> User:
        """Apply a partial profile update. Caller has already checked ownership."""
        if full_name is not None:
            user.full_name = full_name.strip()
        if email is not None:
            user.email = normalize_email(email)
        with collaborator_errors("user update"):
            try:
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                raise ConflictError("Email already registered")
            await self.db.refresh(user)
        return user
