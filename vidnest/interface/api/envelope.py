"""Response envelopes.

Success: {"statusCode": 200, "data": {...}, "message": "..."}
Failure: {"statusCode": 404, "error": "..."}
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Success envelope wrapping a use case response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    data: T
    message: str


class ErrorEnvelope(BaseModel):
    """Failure envelope."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status_code: int
    error: str


def ok(data: T, message: str, status_code: int = 200) -> Envelope[T]:
    """Wrap a use case response in the success envelope."""
    return Envelope(status_code=status_code, data=data, message=message)
