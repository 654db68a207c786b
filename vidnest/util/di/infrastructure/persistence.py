"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from vidnest.config import Settings
from vidnest.domain.repository import (
    CommentRepository,
    LikeRepository,
    TweetRepository,
    UnitOfWork,
    UserRepository,
    VideoRepository,
)
from vidnest.persistence.database import create_engine, create_session_factory
from vidnest.persistence.reconcile import (
    IndexReconciler,
    LikesCatalog,
    PostgresLikesCatalog,
)
from vidnest.persistence.repository import (
    PostgresCommentRepository,
    PostgresLikeRepository,
    PostgresTweetRepository,
    PostgresUserRepository,
    PostgresVideoRepository,
    SqlAlchemyUnitOfWork,
)
from vidnest.util.di.base import ProviderBase
from vidnest.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"

    @provide(scope=Scope.APP)
    def get_index_reconciler(self, catalog: LikesCatalog) -> IndexReconciler:
        """Provide the likes index reconciler."""
        return IndexReconciler(catalog)


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_likes_catalog(self, engine: AsyncEngine) -> LikesCatalog:
        """Provide the likes catalog (index DDL runs outside request sessions)."""
        return PostgresLikesCatalog(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Use cases commit through the UnitOfWork once their work is complete.
        Whatever is still uncommitted when the request ends is rolled back,
        whether the request failed with an exception or ended with a
        handled domain error.
        """
        async with session_factory() as session:
            exc = yield session
            if exc is not None:
                logfire.warn("Session rollback", error=str(exc))
            if session.in_transaction():
                await session.rollback()

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide the request's unit of work."""
        return SqlAlchemyUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_video_repository(self, session: AsyncSession) -> VideoRepository:
        """Provide Video repository."""
        return PostgresVideoRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_tweet_repository(self, session: AsyncSession) -> TweetRepository:
        """Provide Tweet repository."""
        return PostgresTweetRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_like_repository(self, session: AsyncSession) -> LikeRepository:
        """Provide Like repository."""
        return PostgresLikeRepository(session)
