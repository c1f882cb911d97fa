"""
Persistence layer for Command entities.

``CommandStore`` implementations are created once per process and hand out
``CommandRepository`` units of work, one per request.
"""

from .interface import CommandRepository, CommandStore
from .memory_repository import InMemoryCommandStore
from .storage_repository import StorageCommandStore

__all__ = [
    "CommandRepository",
    "CommandStore",
    "InMemoryCommandStore",
    "StorageCommandStore",
]
