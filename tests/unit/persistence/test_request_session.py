"""Unit tests for the request-scoped session and its unit of work.

The production persistence provider runs over a fake session so the
commit/rollback decisions can be checked without a database.
"""

import pytest
import pytest_asyncio
from dishka import Provider, Scope, make_async_container, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from vidnest.config import Settings
from vidnest.domain.error import OperationTimeoutError
from vidnest.domain.repository import UnitOfWork
from vidnest.util.di.infrastructure.persistence import ProdPersistenceProvider


class FakeSession:
    """Stands in for AsyncSession, recording transaction calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.open_transaction = True

    async def __aenter__(self) -> "FakeSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.calls.append("close")

    def in_transaction(self) -> bool:
        return self.open_transaction

    async def commit(self) -> None:
        self.calls.append("commit")
        self.open_transaction = False

    async def rollback(self) -> None:
        self.calls.append("rollback")
        self.open_transaction = False


class FakeSessionProvider(Provider):
    """Replaces the session factory with one handing out a FakeSession."""

    def __init__(self, session: FakeSession) -> None:
        super().__init__()
        self.session = session

    @provide(scope=Scope.APP)
    def get_settings(self) -> Settings:
        return Settings()

    @provide(scope=Scope.APP)
    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: self.session  # type: ignore[return-value]


@pytest.fixture
def session():
    return FakeSession()


@pytest_asyncio.fixture
async def container(session):
    container = make_async_container(
        ProdPersistenceProvider(), FakeSessionProvider(session)
    )
    yield container
    await container.close()


class TestRequestSession:
    """Tests for the request session lifecycle."""

    @pytest.mark.asyncio
    async def test_failed_request_rolls_back(self, container, session):
        """A request that ends with an exception never commits."""
        with pytest.raises(OperationTimeoutError):
            async with container() as request:
                await request.get(AsyncSession)
                raise OperationTimeoutError("like", timeout=5.0)

        assert session.calls == ["rollback", "close"]

    @pytest.mark.asyncio
    async def test_uncommitted_work_rolls_back(self, container, session):
        """A request that ends normally without committing is rolled back.

        This is the path of a domain error already turned into a response.
        """
        async with container() as request:
            await request.get(AsyncSession)

        assert session.calls == ["rollback", "close"]

    @pytest.mark.asyncio
    async def test_committed_work_is_kept(self, container, session):
        """Work committed through the unit of work is not rolled back."""
        async with container() as request:
            unit_of_work = await request.get(UnitOfWork)
            await unit_of_work.commit()

        assert session.calls == ["commit", "close"]
