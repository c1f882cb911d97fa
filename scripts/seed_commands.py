#!/usr/bin/env python3
"""
Seed a command store with commands from a JSON file.

The file must look like ``{"commands": [{"howTo": ..., "platform": ...,
"commandLine": ...}, ...]}``. Each entry goes through the same validation as
``POST /api/commands``. Only useful with ``COMMAND_STORE_TYPE=storage``;
the in-memory store does not outlive this process.

Usage:
    COMMAND_STORE_TYPE=storage STORAGE_TYPE=minio python -m scripts.seed_commands seed.json
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

from src.config.settings import Settings
from src.controllers.commands_controller import CommandsController
from src.data.factory import get_command_store
from src.data.interface import CommandStore
from src.mapping.command_mapper import build_command_mapper
from src.models.responses import CommandReadDto
from src.models.types import CommandListPayload

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def load_seed_file(path: Path) -> CommandListPayload:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or not isinstance(data.get("commands"), list):
        raise ValueError(f"Seed file {path} must contain a 'commands' array")
    return data  # type: ignore[return-value]


async def seed_commands(
    store: CommandStore, payload: CommandListPayload
) -> List[CommandReadDto]:
    """
    Create every command of ``payload`` in ``store``

    Each command is committed on its own, so one invalid entry does not undo
    the ones before it.
    """
    mapper = build_command_mapper()
    created = []
    for entry in payload["commands"]:
        controller = CommandsController(store.open_repository(), mapper)
        created.append(await controller.create_command(entry))
    return created


async def main(seed_path: Path) -> None:
    load_dotenv()
    settings = Settings.from_env()
    store = get_command_store(settings)

    created = await seed_commands(store, load_seed_file(seed_path))
    logger.info(f"Seeded {len(created)} commands ({settings.command_store_type} store)")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("Usage: python -m scripts.seed_commands <seed.json>")
        sys.exit(1)
    asyncio.run(main(Path(sys.argv[1])))
