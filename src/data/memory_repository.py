import logging
import threading
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from src.core.errors import InvalidArgumentError
from src.data.interface import (
    ChangeKind,
    ChangeSet,
    CommandRepository,
    CommandStore,
    PendingChange,
)
from src.models.entities import Command


logger = logging.getLogger(__name__)


class InMemoryCommandStore(CommandStore):
    """
    Thread-safe in-process store for Command entities.

    Used as the default development store and as the test double for the
    persistence port. All access to the backing dict goes through one lock,
    and entities are copied on the way in and out.
    """

    def __init__(self, commands: Optional[Iterable[Command]] = None):
        """
        Initialize the store

        Args:
            commands: Optional seed data. Entities with id 0 get a new id.
        """
        self._lock = threading.Lock()
        self._commands: Dict[int, Command] = {}
        self._last_id = 0

        for cmd in commands or []:
            if not cmd.id:
                cmd.id = self.next_id()
            with self._lock:
                self._commands[cmd.id] = replace(cmd)
                self._last_id = max(self._last_id, cmd.id)

    def open_repository(self) -> "InMemoryCommandRepository":
        return InMemoryCommandRepository(self)

    async def count(self) -> int:
        with self._lock:
            return len(self._commands)

    def snapshot(self) -> List[Command]:
        with self._lock:
            return [replace(self._commands[key]) for key in sorted(self._commands)]

    def find(self, command_id: int) -> Optional[Command]:
        with self._lock:
            cmd = self._commands.get(command_id)
            return replace(cmd) if cmd is not None else None

    def next_id(self) -> int:
        with self._lock:
            self._last_id += 1
            return self._last_id

    def apply(self, changes: List[PendingChange]) -> int:
        """
        Apply staged changes atomically

        Returns:
            Number of records affected. Updates and deletes of ids that no
            longer exist affect nothing.
        """
        affected = 0
        with self._lock:
            for change in changes:
                cmd = change.command
                if change.kind == ChangeKind.ADD:
                    self._commands[cmd.id] = replace(cmd)
                    affected += 1
                elif change.kind == ChangeKind.UPDATE:
                    if cmd.id in self._commands:
                        self._commands[cmd.id] = replace(cmd)
                        affected += 1
                elif change.kind == ChangeKind.DELETE:
                    if self._commands.pop(cmd.id, None) is not None:
                        affected += 1
        return affected


class InMemoryCommandRepository(CommandRepository):
    """Unit of work over an InMemoryCommandStore"""

    def __init__(self, store: InMemoryCommandStore):
        self._store = store
        self._changes = ChangeSet()

    async def get_all_commands(self) -> List[Command]:
        return self._store.snapshot()

    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        return self._store.find(command_id)

    async def create_command(self, cmd: Command) -> None:
        if cmd is None:
            raise InvalidArgumentError("cmd")
        cmd.id = self._store.next_id()
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
        affected = self._store.apply(pending)
        logger.debug(f"Applied {affected} of {len(pending)} staged command changes")
        return affected >= 0
