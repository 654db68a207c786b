"""Unit of work interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Transaction boundary of one request.

    A use case that writes commits once every step has succeeded. Work
    that was never committed is rolled back when the request ends, so a
    failed or timed-out operation leaves nothing half-written.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Make the request's writes durable.

        Raises:
            ConflictError: If a deferred constraint fails at commit
            OperationTimeoutError: If the store did not answer in time
            InternalError: If the commit failed for any other reason
        """
        pass
