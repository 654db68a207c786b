"""Exception handlers mapping errors to HTTP responses.

Routes let domain errors propagate; the handlers here pick the status code
and render the failure envelope.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vidnest.domain.error import (
    BusinessRuleViolationError,
    ConflictError,
    DomainError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    OperationTimeoutError,
    ParentUnpublishedError,
    ValidationError,
)
from vidnest.interface.api.envelope import ErrorEnvelope
from vidnest.interface.error import AuthenticationRequiredError

GENERIC_ERROR = "Internal server error"
RETRY_AFTER_SECONDS = "1"

# Most specific class wins (handlers are looked up along the MRO)
STATUS_BY_ERROR: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    BusinessRuleViolationError: status.HTTP_400_BAD_REQUEST,
    AuthenticationRequiredError: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    ParentUnpublishedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    OperationTimeoutError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Render the failure envelope."""
    body = ErrorEnvelope(status_code=status_code, error=message)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True),
        headers=headers,
    )


async def handle_known_error(request: Request, exc: Exception) -> JSONResponse:
    """Handle an error with a fixed status code and a caller-safe message."""
    status_code = next(
        (
            STATUS_BY_ERROR[cls]
            for cls in type(exc).__mro__
            if cls in STATUS_BY_ERROR
        ),
        status.HTTP_400_BAD_REQUEST,
    )

    if isinstance(exc, OperationTimeoutError):
        logfire.warn(
            "Request timed out",
            path=request.url.path,
            operation=exc.operation,
            timeout=exc.timeout,
        )
        return error_response(
            status_code, str(exc), headers={"Retry-After": RETRY_AFTER_SECONDS}
        )

    return error_response(status_code, str(exc))


async def handle_internal_error(request: Request, exc: Exception) -> JSONResponse:
    """Log the full failure, answer with an opaque 500."""
    logfire.error(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
        _exc_info=(type(exc), exc, exc.__traceback__),
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR)


async def handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report the first malformed field of the request as a 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"{location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render framework HTTP errors (unknown route, wrong method) in the envelope."""
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on the application.

    Args:
        app: FastAPI application
    """
    for error_type in STATUS_BY_ERROR:
        app.add_exception_handler(error_type, handle_known_error)
    app.add_exception_handler(InternalError, handle_internal_error)
    # Any other domain error is unexpected
    app.add_exception_handler(DomainError, handle_internal_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_internal_error)

