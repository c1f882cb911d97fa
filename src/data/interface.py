from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from src.models.entities import Command


class CommandRepository(ABC):
    """
    Persistence port for Command entities.

    A repository is a unit of work: mutations are staged by
    create/update/delete and only reach the backing store when
    ``save_changes()`` is called. Open one repository per request from a
    ``CommandStore`` so staged changes never mix between requests.
    """

    @abstractmethod
    async def get_all_commands(self) -> List[Command]:
        """
        Get every stored command

        Returns:
            All commands currently in the store, ordered by id (empty if none)
        """
        pass

    @abstractmethod
    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        """
        Get a single command

        Args:
            command_id: Identifier of the command

        Returns:
            The matching command, or None if no command has that id
        """
        pass

    @abstractmethod
    async def create_command(self, cmd: Command) -> None:
        """
        Stage a new command and assign its id

        Args:
            cmd: Command to insert. ``cmd.id`` is set by this call.

        Raises:
            InvalidArgumentError: If cmd is None
        """
        pass

    @abstractmethod
    async def update_command(self, cmd: Command) -> None:
        """
        Stage a full replace of the command addressed by ``cmd.id``

        Raises:
            InvalidArgumentError: If cmd is None
        """
        pass

    @abstractmethod
    async def delete_command(self, cmd: Command) -> None:
        """
        Stage removal of a command

        Raises:
            InvalidArgumentError: If cmd is None
        """
        pass

    @abstractmethod
    async def save_changes(self) -> bool:
        """
        Apply all staged changes to the backing store

        Returns:
            True if the store accepted the changes (affected count >= 0)

        Raises:
            PersistenceError: If the backing store fails
        """
        pass


class CommandStore(ABC):
    """Process-wide backing store that hands out per-request repositories"""

    @abstractmethod
    def open_repository(self) -> CommandRepository:
        """Open a new unit of work against this store"""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Number of commands currently stored"""
        pass


class ChangeKind(str, Enum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class PendingChange:
    kind: ChangeKind
    command: Command


@dataclass
class ChangeSet:
    """Ordered list of staged changes owned by one repository"""

    changes: List[PendingChange] = field(default_factory=list)

    def stage(self, kind: ChangeKind, cmd: Command) -> None:
        # Snapshot the entity so later edits by the caller are not committed
        self.changes.append(PendingChange(kind=kind, command=replace(cmd)))

    def drain(self) -> List[PendingChange]:
        pending, self.changes = self.changes, []
        return pending

    def __len__(self) -> int:
        return len(self.changes)
