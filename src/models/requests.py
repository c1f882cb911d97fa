from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CommandWriteDto(BaseModel):
    """Content fields shared by the create and update payloads"""

    # Whitespace-only values count as missing
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    how_to: str = Field(
        ..., min_length=1, description="What the command is for (e.g. 'Run unit tests')"
    )
    platform: str = Field(
        ..., min_length=1, description="Platform or tool the command targets"
    )
    command_line: str = Field(
        ..., min_length=1, description="The literal command line to run"
    )


class CommandCreateDto(CommandWriteDto):
    """Payload for creating a command. The store assigns the id."""

    pass


class CommandUpdateDto(CommandWriteDto):
    """Payload for replacing a command. The id is taken from the path."""

    pass
