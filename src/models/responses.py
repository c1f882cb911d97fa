from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CommandReadDto(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int = Field(..., description="Identifier assigned by the store")
    how_to: str
    platform: str
    command_line: str


class ErrorResponse(BaseModel):
    """Body returned with 4xx/5xx outcomes"""

    detail: str = Field(..., description="Human readable error message")


class ValidationErrorResponse(ErrorResponse):
    """Body returned when a command payload fails validation"""

    errors: List[Dict[str, Any]] = Field(
        default_factory=list, description="Field level validation errors"
    )
