"""Shared test data for the Command API tests."""

from typing import List

from src.models.entities import Command


MIGRATION_COMMAND = {
    "id": 1,
    "howTo": "How to generate a migration",
    "platform": ".Net Core EF",
    "commandLine": "dotnet ef migrations add <Name>",
}

MOCK_COMMAND_PAYLOAD = {
    "howTo": "mock",
    "platform": "Mock",
    "commandLine": "Mock",
}


def make_commands(num: int) -> List[Command]:
    """Build ``num`` distinct commands with ids 1..num"""
    return [
        Command(
            id=i,
            how_to=f"How to do thing {i}",
            platform=f"Platform {i}",
            command_line=f"run --step {i}",
        )
        for i in range(1, num + 1)
    ]
