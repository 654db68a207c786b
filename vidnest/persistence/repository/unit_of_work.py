"""PostgreSQL unit of work."""

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from vidnest.domain.repository import UnitOfWork
from vidnest.persistence.errors import translate_storage_errors


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Commits the request session shared by the Postgres repositories."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        """Commit the request session."""
        async with translate_storage_errors("session.commit", "transaction"):
            await self.session.commit()
        logfire.info("Session committed")
