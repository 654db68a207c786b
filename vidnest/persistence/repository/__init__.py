"""PostgreSQL repository implementations."""

from vidnest.persistence.repository.comment import PostgresCommentRepository
from vidnest.persistence.repository.like import PostgresLikeRepository
from vidnest.persistence.repository.tweet import PostgresTweetRepository
from vidnest.persistence.repository.unit_of_work import SqlAlchemyUnitOfWork
from vidnest.persistence.repository.user import PostgresUserRepository
from vidnest.persistence.repository.video import PostgresVideoRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresVideoRepository",
    "PostgresTweetRepository",
    "PostgresCommentRepository",
    "PostgresLikeRepository",
    "SqlAlchemyUnitOfWork",
]
