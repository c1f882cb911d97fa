from dataclasses import dataclass


@dataclass
class Command:
    """
    A stored Command record: how to run a command line on a given platform.

    ``id`` stays 0 until a repository assigns the real identity on create.
    """

    how_to: str
    platform: str
    command_line: str
    id: int = 0
