"""Base for use case responses."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ResponseModel(BaseModel):
    """Response model serialized with camelCase keys.

    Fields are still populated and read by their snake_case names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
