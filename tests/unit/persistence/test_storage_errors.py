"""Unit tests for storage error translation."""

import pytest
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from vidnest.domain.error import (
    ConflictError,
    InternalError,
    NotFoundError,
    OperationTimeoutError,
    ValidationError,
)
from vidnest.persistence.errors import (
    constraint_of,
    sqlstate_of,
    translate_storage_errors,
)


class FakeDriverError(Exception):
    """Stands in for the DBAPI exception SQLAlchemy wraps."""

    def __init__(self, pgcode, constraint_name=None):
        super().__init__(f"driver error {pgcode}")
        self.pgcode = pgcode
        self.constraint_name = constraint_name


def _wrapped(pgcode, constraint_name=None) -> DBAPIError:
    return DBAPIError("INSERT INTO likes ...", {}, FakeDriverError(pgcode, constraint_name))


class TestSqlstate:
    """Tests for SQLSTATE and constraint extraction."""

    def test_reads_pgcode_from_orig(self):
        error = _wrapped("23505", "uq_likes_video_liked_by")

        assert sqlstate_of(error) == "23505"
        assert constraint_of(error) == "uq_likes_video_liked_by"

    def test_reads_sqlstate_from_cause(self):
        cause = Exception("asyncpg")
        cause.sqlstate = "57014"
        orig = Exception("adapter")
        orig.__cause__ = cause

        assert sqlstate_of(DBAPIError("SELECT 1", {}, orig)) == "57014"

    def test_unknown(self):
        assert sqlstate_of(ValueError("nope")) is None


class TestTranslateStorageErrors:
    """Tests for translate_storage_errors."""

    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(self):
        with pytest.raises(ConflictError, match="uq_likes_tweet_liked_by"):
            async with translate_storage_errors("like.create", "like"):
                raise _wrapped("23505", "uq_likes_tweet_liked_by")

    @pytest.mark.asyncio
    async def test_check_violation_is_validation(self):
        with pytest.raises(ValidationError, match="ck_likes_exactly_one_target"):
            async with translate_storage_errors("like.create", "like"):
                raise _wrapped("23514", "ck_likes_exactly_one_target")

    @pytest.mark.asyncio
    async def test_foreign_key_violation_is_not_found(self):
        with pytest.raises(NotFoundError):
            async with translate_storage_errors("comment.save", "comment"):
                raise _wrapped("23503")

    @pytest.mark.asyncio
    async def test_statement_timeout_is_retryable(self):
        with pytest.raises(OperationTimeoutError):
            async with translate_storage_errors("like.count"):
                raise _wrapped("57014")

    @pytest.mark.asyncio
    async def test_pool_timeout_is_retryable(self):
        with pytest.raises(OperationTimeoutError):
            async with translate_storage_errors("like.count"):
                raise PoolTimeoutError("QueuePool limit reached")

    @pytest.mark.asyncio
    async def test_anything_else_is_internal(self):
        with pytest.raises(InternalError) as exc_info:
            async with translate_storage_errors("like.count"):
                raise OperationalError("SELECT 1", {}, FakeDriverError("08006"))
        assert str(exc_info.value) == "like.count failed"

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self):
        with pytest.raises(ValidationError, match="bad input"):
            async with translate_storage_errors("like.count"):
                raise ValidationError("bad input")
