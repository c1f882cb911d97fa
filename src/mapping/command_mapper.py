"""
Translation between the Command entity and its wire DTOs.

The mapper is a read-only table of rules keyed by (source type, destination
type). It is built once at startup with ``build_command_mapper()`` and then
passed to whoever needs it; nothing in here validates input.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Tuple, Type, TypeVar

from src.core.errors import MappingError
from src.models.entities import Command
from src.models.requests import CommandCreateDto, CommandUpdateDto, CommandWriteDto
from src.models.responses import CommandReadDto

T = TypeVar("T")

MappingRule = Callable[[Any], Any]
RuleKey = Tuple[type, type]


def _command_to_read_dto(cmd: Command) -> CommandReadDto:
    return CommandReadDto(
        id=cmd.id,
        how_to=cmd.how_to,
        platform=cmd.platform,
        command_line=cmd.command_line,
    )


def _write_dto_to_command(dto: CommandWriteDto) -> Command:
    # id stays at its default; the repository assigns it on create
    return Command(
        how_to=dto.how_to,
        platform=dto.platform,
        command_line=dto.command_line,
    )


@dataclass(frozen=True)
class CommandMapper:
    """Immutable set of mapping rules between Command and its DTOs"""

    rules: Mapping[RuleKey, MappingRule] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def map(self, source: Any, destination_type: Type[T]) -> T:
        """
        Map ``source`` to a new instance of ``destination_type``.

        Args:
            source: Entity or DTO instance to translate
            destination_type: Type to produce

        Returns:
            New instance of destination_type

        Raises:
            MappingError: If no rule is registered for the pair
        """
        rule = self.rules.get((type(source), destination_type))
        if rule is None:
            raise MappingError(
                f"No mapping from {type(source).__name__} to {destination_type.__name__}"
            )
        return rule(source)

    def map_many(self, sources: Any, destination_type: Type[T]) -> list[T]:
        """Map every item of an iterable, keeping order"""
        return [self.map(source, destination_type) for source in sources]

    def map_onto(self, dto: CommandWriteDto, cmd: Command) -> Command:
        """
        Copy the content fields of ``dto`` onto an existing entity.

        The entity keeps its id. Returns the same entity for chaining.
        """
        cmd.how_to = dto.how_to
        cmd.platform = dto.platform
        cmd.command_line = dto.command_line
        return cmd

    def has_rule(self, source_type: type, destination_type: type) -> bool:
        return (source_type, destination_type) in self.rules


def build_command_mapper() -> CommandMapper:
    """Declare the Command mapping rules"""
    rules: Dict[RuleKey, MappingRule] = {
        (Command, CommandReadDto): _command_to_read_dto,
        (CommandCreateDto, Command): _write_dto_to_command,
        (CommandUpdateDto, Command): _write_dto_to_command,
    }
    return CommandMapper(rules=MappingProxyType(rules))
