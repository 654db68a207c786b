"""Translation of storage-driver failures into domain errors.

Repositories wrap every statement in `translate_storage_errors` so that no
SQLAlchemy or asyncpg exception crosses the repository boundary.
"""

import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import logfire
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from vidnest.domain.error import (
    ConflictError,
    InternalError,
    NotFoundError,
    OperationTimeoutError,
    ValidationError,
)

UNIQUE_VIOLATION = "23505"
CHECK_VIOLATION = "23514"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
QUERY_CANCELED = "57014"
LOCK_NOT_AVAILABLE = "55P03"


def sqlstate_of(error: BaseException) -> Optional[str]:
    """Extract the SQLSTATE code from a wrapped driver error.

    SQLAlchemy's asyncpg adapter exposes it as `pgcode` on the DBAPI error
    and the underlying asyncpg exception carries it as `sqlstate`.
    """
    candidates = [error, getattr(error, "orig", None)]
    orig = getattr(error, "orig", None)
    if orig is not None:
        candidates.append(orig.__cause__)
    for candidate in candidates:
        if candidate is None:
            continue
        code = getattr(candidate, "pgcode", None) or getattr(candidate, "sqlstate", None)
        if code:
            return str(code)
    return None


def constraint_of(error: BaseException) -> Optional[str]:
    """Name of the violated constraint, when the driver reports it."""
    orig = getattr(error, "orig", None)
    for candidate in (orig, getattr(orig, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return str(name)
    return None


@asynccontextmanager
async def translate_storage_errors(
    operation: str, resource: str = "record"
) -> AsyncIterator[None]:
    """Map storage failures raised inside the block to domain errors.

    Args:
        operation: Repository operation, for logs and messages
        resource: Resource name used in conflict/not-found errors

    Raises:
        ConflictError: Unique violation (23505)
        ValidationError: Check or not-null violation (23514, 23502)
        NotFoundError: Foreign key violation (23503)
        OperationTimeoutError: Statement cancelled, lock or pool timeout
        InternalError: Anything else
    """
    try:
        yield
    except PoolTimeoutError as e:
        logfire.warn("Connection pool exhausted", operation=operation)
        raise OperationTimeoutError(operation) from e
    except DBAPIError as e:
        code = sqlstate_of(e)
        constraint = constraint_of(e)
        if code == UNIQUE_VIOLATION:
            raise ConflictError(resource, constraint or operation) from e
        if code in (CHECK_VIOLATION, NOT_NULL_VIOLATION):
            raise ValidationError(
                f"{resource} violates {constraint or 'a table constraint'}"
            ) from e
        if code == FOREIGN_KEY_VIOLATION:
            raise NotFoundError("referenced record", constraint or operation) from e
        if code in (QUERY_CANCELED, LOCK_NOT_AVAILABLE):
            logfire.warn("Statement timed out", operation=operation, sqlstate=code)
            raise OperationTimeoutError(operation) from e
        logfire.error(
            "Storage failure",
            operation=operation,
            sqlstate=code,
            error=str(e),
            _exc_info=sys.exc_info(),
        )
        raise InternalError(f"{operation} failed") from e
    except SQLAlchemyError as e:
        logfire.error(
            "Storage failure",
            operation=operation,
            error=str(e),
            _exc_info=sys.exc_info(),
        )
        raise InternalError(f"{operation} failed") from e
