import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from src.core.storage.interface import StorageInterface
from src.core.storage.memory import MemoryStorage
from src.data.memory_repository import InMemoryCommandStore
from src.data.storage_repository import StorageCommandStore
from src.mapping.command_mapper import CommandMapper, build_command_mapper
from src.models.entities import Command
from tests.helpers import MIGRATION_COMMAND


@pytest.fixture
def mapper() -> CommandMapper:
    """Fixture for the real mapping rules"""
    return build_command_mapper()


@pytest.fixture
def migration_command() -> Command:
    return Command(
        id=MIGRATION_COMMAND["id"],
        how_to=MIGRATION_COMMAND["howTo"],
        platform=MIGRATION_COMMAND["platform"],
        command_line=MIGRATION_COMMAND["commandLine"],
    )


@pytest.fixture
def empty_store() -> InMemoryCommandStore:
    return InMemoryCommandStore()


@pytest.fixture
def seeded_store(migration_command: Command) -> InMemoryCommandStore:
    """In-memory store holding the single migration command (id 1)"""
    return InMemoryCommandStore([migration_command])


@pytest.fixture
def memory_storage() -> StorageInterface:
    """Fixture for obstore-backed memory storage"""
    return MemoryStorage(base_url="memory://test")


@pytest.fixture
def storage_store(memory_storage: StorageInterface) -> StorageCommandStore:
    return StorageCommandStore(memory_storage, prefix="commands/")


def _client_for(store, mapper: CommandMapper) -> Generator[TestClient, None, None]:
    from src.app import app
    from src.routers.commands import get_mapper, get_store

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_mapper] = lambda: mapper
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(
    empty_store: InMemoryCommandStore, mapper: CommandMapper
) -> Generator[TestClient, None, None]:
    """Test client wired to an empty in-memory store"""
    yield from _client_for(empty_store, mapper)


@pytest.fixture
def seeded_client(
    seeded_store: InMemoryCommandStore, mapper: CommandMapper
) -> Generator[TestClient, None, None]:
    """Test client wired to a store holding the migration command"""
    yield from _client_for(seeded_store, mapper)


@pytest.fixture
def minio_available() -> bool:
    """Check if S3-compatible storage credentials are available for testing"""
    required = ["S3_ENDPOINT", "S3_ACCESS_KEY_ID", "S3_SECRET_ACCESS_KEY", "S3_BUCKET"]
    return all(os.environ.get(name) for name in required)


@pytest.fixture
def minio_storage(minio_available: bool) -> StorageInterface:
    """Fixture for S3-compatible storage (MinIO/GCS)"""
    if not minio_available:
        pytest.skip("S3-compatible storage credentials not available for testing")

    from src.config.settings import Settings
    from src.data.factory import get_storage

    settings = Settings.from_env({**os.environ, "STORAGE_TYPE": "minio"})
    return get_storage(settings)
