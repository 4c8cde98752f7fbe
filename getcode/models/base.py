"""
Shared pydantic base class.
"""
from pydantic import BaseModel, ConfigDict


class ModelBase(BaseModel):
    """
    Base class for request/response bodies and the service clients.

    Field docstrings become schema descriptions. Wire names such as
    ``simpleMode`` or ``exitCode`` are aliases; code may still pass the
    snake_case field name. Unknown fields are rejected, so a misspelled
    request key is a 400 rather than a silently ignored value.
    """
    model_config = ConfigDict(
        use_attribute_docstrings=True,
        validate_by_name=True,
        extra='forbid',
    )
