"""Base service class for domain services."""

import asyncio
from typing import Awaitable, Optional, TypeVar

from vidnest.domain.error import OperationTimeoutError

T = TypeVar("T")


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.

    Every public operation runs under a deadline: the caller's, or the
    service default when the caller gives none.
    """

    default_timeout: Optional[float] = None

    async def _within_deadline(
        self, operation: str, awaitable: Awaitable[T], timeout: Optional[float]
    ) -> T:
        """Await an operation, failing with OperationTimeoutError past the deadline.

        Args:
            operation: Name used in the error message
            awaitable: The operation to run
            timeout: Seconds allowed (None falls back to default_timeout)

        Raises:
            OperationTimeoutError: If the deadline expires first
        """
        limit = timeout if timeout is not None else self.default_timeout
        if limit is None:
            return await awaitable
        try:
            return await asyncio.wait_for(awaitable, timeout=limit)
        except asyncio.TimeoutError as e:
            raise OperationTimeoutError(operation, limit) from e
