from typing import Optional
from unittest.mock import AsyncMock

import pytest

from src.controllers.commands_controller import CommandsController
from src.core.errors import (
    CommandNotFoundError,
    CommandValidationError,
    PersistenceError,
    PersistenceFailureError,
)
from src.data.interface import CommandRepository
from src.data.memory_repository import InMemoryCommandStore
from src.mapping.command_mapper import CommandMapper
from src.models.entities import Command
from src.models.requests import CommandCreateDto
from src.models.responses import CommandReadDto
from tests.helpers import MIGRATION_COMMAND, MOCK_COMMAND_PAYLOAD, make_commands


def _mock_repository(existing: Optional[Command] = None) -> AsyncMock:
    """Mocked persistence port that knows at most one command"""
    repo = AsyncMock(spec=CommandRepository)
    repo.get_all_commands.return_value = [existing] if existing else []

    async def get_command_by_id(command_id: int) -> Optional[Command]:
        if existing is not None and existing.id == command_id:
            return existing
        return None

    async def create_command(cmd: Command) -> None:
        cmd.id = 1

    repo.get_command_by_id.side_effect = get_command_by_id
    repo.create_command.side_effect = create_command
    repo.save_changes.return_value = True
    return repo


class TestListCommands:
    @pytest.mark.asyncio
    async def test_returns_zero_items_when_store_is_empty(
        self, mapper: CommandMapper
    ) -> None:
        controller = CommandsController(_mock_repository(), mapper)

        result = await controller.get_all_commands()

        assert result == []

    @pytest.mark.asyncio
    async def test_returns_one_item_when_store_has_one_resource(
        self, mapper: CommandMapper, migration_command: Command
    ) -> None:
        controller = CommandsController(_mock_repository(migration_command), mapper)

        result = await controller.get_all_commands()

        assert len(result) == 1
        assert isinstance(result[0], CommandReadDto)
        assert result[0].model_dump(by_alias=True) == MIGRATION_COMMAND

    @pytest.mark.asyncio
    @pytest.mark.parametrize("num", [0, 1, 3, 10])
    async def test_maps_every_stored_command(self, mapper: CommandMapper, num: int) -> None:
        commands = make_commands(num)
        controller = CommandsController(
            InMemoryCommandStore(commands).open_repository(), mapper
        )

        result = await controller.get_all_commands()

        assert len(result) == num
        for dto, cmd in zip(result, commands):
            assert (dto.id, dto.how_to, dto.platform, dto.command_line) == (
                cmd.id,
                cmd.how_to,
                cmd.platform,
                cmd.command_line,
            )


class TestGetCommandById:
    @pytest.mark.asyncio
    async def test_raises_not_found_for_unknown_id(
        self, mapper: CommandMapper, migration_command: Command
    ) -> None:
        controller = CommandsController(_mock_repository(migration_command), mapper)

        with pytest.raises(CommandNotFoundError) as exc_info:
            await controller.get_command_by_id(2)

        assert exc_info.value.command_id == 2

    @pytest.mark.asyncio
    async def test_returns_read_dto_for_known_id(
        self, mapper: CommandMapper, migration_command: Command
    ) -> None:
        controller = CommandsController(_mock_repository(migration_command), mapper)

        result = await controller.get_command_by_id(1)

        assert isinstance(result, CommandReadDto)
        assert result.id == 1


class TestCreateCommand:
    @pytest.mark.asyncio
    async def test_returns_read_dto_with_assigned_id(self, mapper: CommandMapper) -> None:
        repo = _mock_repository()
        controller = CommandsController(repo, mapper)

        result = await controller.create_command(MOCK_COMMAND_PAYLOAD)

        assert isinstance(result, CommandReadDto)
        assert result.id == 1
        assert result.how_to == "mock"
        repo.create_command.assert_awaited_once()
        repo.save_changes.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_accepts_dto_instance(self, mapper: CommandMapper) -> None:
        controller = CommandsController(_mock_repository(), mapper)
        dto = CommandCreateDto(how_to="mock", platform="Mock", command_line="Mock")

        result = await controller.create_command(dto)

        assert result.platform == "Mock"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["howTo", "platform", "commandLine"])
    async def test_missing_field_fails_before_repository_is_called(
        self, mapper: CommandMapper, missing: str
    ) -> None:
        repo = _mock_repository()
        controller = CommandsController(repo, mapper)
        payload = {k: v for k, v in MOCK_COMMAND_PAYLOAD.items() if k != missing}

        with pytest.raises(CommandValidationError) as exc_info:
            await controller.create_command(payload)

        assert [missing] in [error["loc"] for error in exc_info.value.errors]
        repo.create_command.assert_not_awaited()
        repo.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_field_is_rejected(self, mapper: CommandMapper) -> None:
        repo = _mock_repository()
        controller = CommandsController(repo, mapper)

        with pytest.raises(CommandValidationError):
            await controller.create_command({**MOCK_COMMAND_PAYLOAD, "howTo": ""})

        repo.create_command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_payload_is_rejected(self, mapper: CommandMapper) -> None:
        controller = CommandsController(_mock_repository(), mapper)

        with pytest.raises(CommandValidationError):
            await controller.create_command(None)

    @pytest.mark.asyncio
    async def test_rejected_commit_raises(self, mapper: CommandMapper) -> None:
        repo = _mock_repository()
        repo.save_changes.return_value = False
        controller = CommandsController(repo, mapper)

        with pytest.raises(PersistenceFailureError):
            await controller.create_command(MOCK_COMMAND_PAYLOAD)

    @pytest.mark.asyncio
    async def test_store_errors_propagate(self, mapper: CommandMapper) -> None:
        repo = _mock_repository()
        repo.save_changes.side_effect = PersistenceError("disk full")
        controller = CommandsController(repo, mapper)

        with pytest.raises(PersistenceError, match="disk full"):
            await controller.create_command(MOCK_COMMAND_PAYLOAD)


class TestUpdateCommand:
    @pytest.mark.asyncio
    async def test_replaces_fields_and_commits(
        self, mapper: CommandMapper, migration_command: Command
    ) -> None:
        repo = _mock_repository(migration_command)
        controller = CommandsController(repo, mapper)
        payload = {"howTo": "Run tests", "platform": "pytest", "commandLine": "pytest -q"}

        result = await controller.update_command(1, payload)

        assert result is None
        updated = repo.update_command.await_args.args[0]
        assert updated == Command(
            id=1, how_to="Run tests", platform="pytest", command_line="pytest -q"
        )
        repo.save_changes.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_id_raises_without_mutation(
        self, mapper: CommandMapper, migration_command: Command
    ) -> None:
        repo = _mock_repository(migration_command)
        controller = CommandsController(repo, mapper)

        with pytest.raises(CommandNotFoundError):
            await controller.update_command(99, MOCK_COMMAND_PAYLOAD)

        repo.update_command.assert_not_awaited()
        repo.save_changes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_payload_raises_without_mutation(
        self, mapper: CommandMapper, migration_command: Command
    ) -> None:
        repo = _mock_repository(migration_command)
        controller = CommandsController(repo, mapper)

        with pytest.raises(CommandValidationError):
            await controller.update_command(1, {"howTo": "only one field"})

        repo.update_command.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_is_persisted(
        self, mapper: CommandMapper, seeded_store: InMemoryCommandStore
    ) -> None:
        controller = CommandsController(seeded_store.open_repository(), mapper)

        await controller.update_command(1, MOCK_COMMAND_PAYLOAD)

        stored = seeded_store.find(1)
        assert stored == Command(id=1, how_to="mock", platform="Mock", command_line="Mock")
        assert await seeded_store.count() == 1


class TestDeleteCommand:
    @pytest.mark.asyncio
    async def test_deletes_existing_command(
        self, mapper: CommandMapper, migration_command: Command
    ) -> None:
        repo = _mock_repository(migration_command)
        controller = CommandsController(repo, mapper)

        await controller.delete_command(1)

        repo.delete_command.assert_awaited_once_with(migration_command)
        repo.save_changes.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_id_raises_without_mutation(
        self, mapper: CommandMapper, seeded_store: InMemoryCommandStore
    ) -> None:
        controller = CommandsController(seeded_store.open_repository(), mapper)

        with pytest.raises(CommandNotFoundError):
            await controller.delete_command(2)

        assert await seeded_store.count() == 1

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(
        self, mapper: CommandMapper, seeded_store: InMemoryCommandStore
    ) -> None:
        await CommandsController(seeded_store.open_repository(), mapper).delete_command(1)

        controller = CommandsController(seeded_store.open_repository(), mapper)
        with pytest.raises(CommandNotFoundError):
            await controller.get_command_by_id(1)
        assert await seeded_store.count() == 0
