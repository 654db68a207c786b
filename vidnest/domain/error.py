"""Domain layer errors.

Every failure that crosses the service boundary is one of these. The
interface layer maps each to an HTTP status; nothing below it should let a
raw storage-driver error escape.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed or out-of-range input. Never retried."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class TargetNotFoundError(NotFoundError):
    """Raised when a like points at a video, comment or tweet that does not exist."""


class ParentNotFoundError(NotFoundError):
    """Raised when a comment's parent (video, tweet or parent comment) does not exist."""


class ForbiddenError(DomainError):
    """Raised when a user acts on a resource they do not own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )


class ParentUnpublishedError(BusinessRuleViolationError):
    """Raised when commenting on a video that is not published."""

    def __init__(self, video_id: str):
        self.video_id = video_id
        super().__init__(f"Cannot comment on unpublished video {video_id}")


class ConflictError(DomainError):
    """Raised when a create would violate a uniqueness constraint.

    Signals "already exists", not a system failure.
    """

    def __init__(self, resource: str, detail: str):
        self.resource = resource
        super().__init__(f"{resource} already exists: {detail}")


class OperationTimeoutError(DomainError):
    """Raised when an operation misses its deadline. Safe to retry."""

    def __init__(self, operation: str, timeout: float | None = None):
        self.operation = operation
        self.timeout = timeout
        suffix = f" after {timeout}s" if timeout is not None else ""
        super().__init__(f"{operation} timed out{suffix}")


class InternalError(DomainError):
    """Unexpected storage failure. Logged in full, surfaced as an opaque 500."""

    pass
