import logging
from typing import Any, Dict, List, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from src.core.errors import (
    CommandNotFoundError,
    CommandValidationError,
    PersistenceFailureError,
)
from src.data.interface import CommandRepository
from src.mapping.command_mapper import CommandMapper
from src.models.entities import Command
from src.models.requests import CommandCreateDto, CommandUpdateDto, CommandWriteDto
from src.models.responses import CommandReadDto


logger = logging.getLogger(__name__)

WriteDtoT = TypeVar("WriteDtoT", bound=CommandWriteDto)
Payload = Union[BaseModel, Mapping[str, Any], None]


def _summarize_errors(error: ValidationError) -> List[Dict[str, Any]]:
    """Keep the JSON-safe parts of pydantic's error list"""
    return [
        {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
        for e in error.errors()
    ]


class CommandsController:
    """
    Request handling for the Command resource.

    Every operation runs as one unit: validate the input, read or stage
    changes through the repository, commit, then map the entity to its DTO.
    Validation and not-found errors are raised before the repository is
    asked to change anything. Persistence errors are not caught here.

    The HTTP layer turns the returned DTOs and raised errors into responses
    (see src/routers/commands.py and the handlers in src/app.py).
    """

    def __init__(self, repository: CommandRepository, mapper: CommandMapper):
        """
        Args:
            repository: Unit of work for this request
            mapper: Shared, read-only mapping rules
        """
        self._repository = repository
        self._mapper = mapper

    async def get_all_commands(self) -> List[CommandReadDto]:
        commands = await self._repository.get_all_commands()
        return self._mapper.map_many(commands, CommandReadDto)

    async def get_command_by_id(self, command_id: int) -> CommandReadDto:
        """
        Raises:
            CommandNotFoundError: If no command has this id
        """
        cmd = await self._get_existing(command_id)
        return self._mapper.map(cmd, CommandReadDto)

    async def create_command(self, payload: Payload) -> CommandReadDto:
        """
        Validate and store a new command

        Args:
            payload: Create DTO, or a camelCase mapping to validate as one

        Returns:
            Read DTO carrying the id assigned by the store

        Raises:
            CommandValidationError: If a content field is missing or empty
            PersistenceFailureError: If the commit is rejected
        """
        dto = self._validate(payload, CommandCreateDto)
        cmd = self._mapper.map(dto, Command)

        await self._repository.create_command(cmd)
        await self._commit("create")

        logger.info(f"Created command {cmd.id} for platform '{cmd.platform}'")
        return self._mapper.map(cmd, CommandReadDto)

    async def update_command(self, command_id: int, payload: Payload) -> None:
        """
        Replace the content fields of an existing command

        Raises:
            CommandValidationError: If the payload is invalid
            CommandNotFoundError: If no command has this id
            PersistenceFailureError: If the commit is rejected
        """
        dto = self._validate(payload, CommandUpdateDto)
        cmd = await self._get_existing(command_id)

        self._mapper.map_onto(dto, cmd)
        await self._repository.update_command(cmd)
        await self._commit("update")

        logger.info(f"Updated command {command_id}")

    async def delete_command(self, command_id: int) -> None:
        """
        Raises:
            CommandNotFoundError: If no command has this id
            PersistenceFailureError: If the commit is rejected
        """
        cmd = await self._get_existing(command_id)

        await self._repository.delete_command(cmd)
        await self._commit("delete")

        logger.info(f"Deleted command {command_id}")

    async def _get_existing(self, command_id: int) -> Command:
        cmd = await self._repository.get_command_by_id(command_id)
        if cmd is None:
            logger.debug(f"Command {command_id} not found")
            raise CommandNotFoundError(command_id)
        return cmd

    async def _commit(self, operation: str) -> None:
        if not await self._repository.save_changes():
            logger.error(f"Repository rejected changes for '{operation}'")
            raise PersistenceFailureError(operation)

    @staticmethod
    def _validate(payload: Payload, dto_type: Type[WriteDtoT]) -> WriteDtoT:
        if payload is None:
            raise CommandValidationError(
                [{"loc": ["body"], "msg": "Payload is required", "type": "missing"}]
            )
        if isinstance(payload, BaseModel):
            # Re-check instances that may have skipped validation (model_construct)
            payload = payload.model_dump(by_alias=True)
        try:
            return dto_type.model_validate(payload)
        except ValidationError as e:
            raise CommandValidationError(_summarize_errors(e)) from e
