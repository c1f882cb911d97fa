"""
Command persistence on top of the object storage layer.

Each command is stored as one JSON document at ``{prefix}{id}.json``. The
last assigned id is kept in ``{prefix}_sequence.json`` so ids are never
reused, even after deletes. Id allocation and commits are serialized with an
asyncio lock, which covers concurrent requests in one process; several
processes writing to the same bucket are not coordinated.
"""

import asyncio
import logging
from typing import List, Optional

from src.config.constants import DEFAULT_COMMANDS_PREFIX
from src.core.errors import InvalidArgumentError, PersistenceError
from src.core.storage.interface import StorageInterface
from src.data.interface import (
    ChangeKind,
    ChangeSet,
    CommandRepository,
    CommandStore,
    PendingChange,
)
from src.models.entities import Command
from src.models.types import CommandDocument, CommandSequenceDocument


logger = logging.getLogger(__name__)

SEQUENCE_FILENAME = "_sequence.json"


def command_to_document(cmd: Command) -> CommandDocument:
    return {
        "id": cmd.id,
        "howTo": cmd.how_to,
        "platform": cmd.platform,
        "commandLine": cmd.command_line,
    }


def command_from_document(document: CommandDocument) -> Command:
    return Command(
        id=int(document["id"]),
        how_to=document["howTo"],
        platform=document["platform"],
        command_line=document["commandLine"],
    )


class StorageCommandStore(CommandStore):
    """CommandStore persisting JSON documents through a StorageInterface"""

    def __init__(
        self, storage: StorageInterface, prefix: str = DEFAULT_COMMANDS_PREFIX
    ):
        """
        Initialize the store

        Args:
            storage: Object storage backend (memory or S3-compatible)
            prefix: Key prefix for command documents, e.g. "commands/"
        """
        if not prefix.endswith("/"):
            prefix = f"{prefix}/"
        self._storage = storage
        self._prefix = prefix
        self._lock = asyncio.Lock()

    @property
    def storage(self) -> StorageInterface:
        return self._storage

    @property
    def prefix(self) -> str:
        return self._prefix

    def open_repository(self) -> "StorageCommandRepository":
        return StorageCommandRepository(self)

    def command_path(self, command_id: int) -> str:
        return f"{self._prefix}{command_id}.json"

    def _sequence_path(self) -> str:
        return f"{self._prefix}{SEQUENCE_FILENAME}"

    def _id_from_path(self, path: str) -> Optional[int]:
        filename = path[len(self._prefix):] if path.startswith(self._prefix) else path
        if not filename.endswith(".json"):
            return None
        stem = filename[: -len(".json")]
        return int(stem) if stem.isdigit() else None

    async def _list_ids(self) -> List[int]:
        try:
            paths = await self._storage.list_files(self._prefix)
        except Exception as e:
            raise PersistenceError(f"Failed to list commands: {e}", e) from e
        ids = [self._id_from_path(path) for path in paths]
        return sorted(command_id for command_id in ids if command_id is not None)

    async def count(self) -> int:
        return len(await self._list_ids())

    async def list_commands(self) -> List[Command]:
        commands = []
        for command_id in await self._list_ids():
            cmd = await self.find(command_id)
            # Deleted between listing and reading
            if cmd is not None:
                commands.append(cmd)
        return commands

    async def find(self, command_id: int) -> Optional[Command]:
        try:
            document = await self._storage.get_json(self.command_path(command_id))
        except FileNotFoundError:
            return None
        except Exception as e:
            raise PersistenceError(f"Failed to read command {command_id}: {e}", e) from e
        return command_from_document(document)  # type: ignore[arg-type]

    async def next_id(self) -> int:
        async with self._lock:
            try:
                sequence = await self._storage.get_json(self._sequence_path())
                last_id = int(sequence["lastId"])
            except FileNotFoundError:
                # First allocation, or documents written by another tool
                existing = await self._list_ids()
                last_id = existing[-1] if existing else 0
            except Exception as e:
                raise PersistenceError(f"Failed to read id sequence: {e}", e) from e

            next_id = last_id + 1
            document: CommandSequenceDocument = {"lastId": next_id}
            try:
                await self._storage.save_json(dict(document), self._sequence_path())
            except Exception as e:
                raise PersistenceError(f"Failed to write id sequence: {e}", e) from e
            return next_id

    async def apply(self, changes: List[PendingChange]) -> int:
        """
        Write staged changes to storage

        Returns:
            Number of documents written or removed
        """
        affected = 0
        async with self._lock:
            for change in changes:
                cmd = change.command
                path = self.command_path(cmd.id)
                try:
                    if change.kind == ChangeKind.ADD:
                        await self._storage.save_json(dict(command_to_document(cmd)), path)
                        affected += 1
                    elif change.kind == ChangeKind.UPDATE:
                        if await self.find(cmd.id) is not None:
                            await self._storage.save_json(
                                dict(command_to_document(cmd)), path
                            )
                            affected += 1
                    elif change.kind == ChangeKind.DELETE:
                        if await self._storage.delete(path):
                            affected += 1
                except PersistenceError:
                    raise
                except Exception as e:
                    logger.error(f"Failed to apply {change.kind.value} for command {cmd.id}: {e}")
                    raise PersistenceError(
                        f"Failed to {change.kind.value} command {cmd.id}: {e}", e
                    ) from e
        return affected


class StorageCommandRepository(CommandRepository):
    """Unit of work over a StorageCommandStore"""

    def __init__(self, store: StorageCommandStore):
        self._store = store
        self._changes = ChangeSet()

    async def get_all_commands(self) -> List[Command]:
        return await self._store.list_commands()

    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        return await self._store.find(command_id)

    async def create_command(self, cmd: Command) -> None:
        if cmd is None:
            raise InvalidArgumentError("cmd")
        cmd.id = await self._store.next_id()
        self._changes.stage(ChangeKind.ADD, cmd)

    async def update_command(self, cmd: Command) -> None:
        if cmd is None:
            raise InvalidArgumentError("cmd")
        self._changes.stage(ChangeKind.UPDATE, cmd)

    async def delete_command(self, cmd: Command) -> None:
        if cmd is None:
            raise InvalidArgumentError("cmd")
        self._changes.stage(ChangeKind.DELETE, cmd)

    async def save_changes(self) -> bool:
        pending = self._changes.drain()
        affected = await self._store.apply(pending)
        logger.debug(
            f"Wrote {affected} of {len(pending)} staged command changes under {self._store.prefix}"
        )
        return affected >= 0
