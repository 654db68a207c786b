"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidnest.domain.model import User
from vidnest.domain.repository import UserRepository
from vidnest.domain.value import UserId
from vidnest.persistence.errors import translate_storage_errors
from vidnest.persistence.mappers import row_to_user, user_to_dict
from vidnest.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        async with translate_storage_errors("user.find_by_id", "user"):
            result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user(row._asdict()) if row else None

    async def save(self, user: User) -> User:
        """Insert a user."""
        stmt = insert(users_table).values(**user_to_dict(user))
        async with translate_storage_errors("user.save", "user"):
            await self.session.execute(stmt)
        return user
