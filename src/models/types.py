"""
TypedDict definitions for Command API data structures.

These describe the dictionary shapes that cross the storage boundary, so the
repository code can be checked without converting to and from models at
every step.
"""

from typing import List
from typing_extensions import TypedDict


class CommandDocument(TypedDict):
    """
    JSON document written to object storage for one Command.

    Keys use the same camelCase names as the wire format.
    """

    id: int
    howTo: str
    platform: str
    commandLine: str


class CommandSequenceDocument(TypedDict):
    """Id sequence state persisted next to the command documents"""

    lastId: int


class CommandListPayload(TypedDict):
    """Shape of a seed file consumed by scripts/seed_commands.py"""

    commands: List[CommandDocument]
