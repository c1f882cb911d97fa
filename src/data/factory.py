import logging
from typing import Optional

from src.config.settings import Settings
from src.core.storage.interface import StorageInterface
from src.core.storage.memory import MemoryStorage
from src.core.storage.minio import MinioCloudStorage
from src.data.interface import CommandStore
from src.data.memory_repository import InMemoryCommandStore
from src.data.storage_repository import StorageCommandStore


logger = logging.getLogger(__name__)


def get_storage(settings: Settings) -> StorageInterface:
    """
    Create the object storage backend described by ``settings``

    Args:
        settings: Service settings ('memory' or 'minio' storage_type)

    Returns:
        StorageInterface implementation
    """
    storage_type = settings.storage_type.lower()
    config = settings.storage_config()

    if storage_type == "minio":
        if not config.get("bucket_name"):
            raise ValueError("bucket_name is required for Minio storage")

        return MinioCloudStorage(
            bucket_name=config["bucket_name"],
            endpoint=config["endpoint"],
            access_key=config.get("access_key"),
            secret_key=config.get("secret_key"),
            secure=config["secure"],
            base_url=config.get("base_url"),
        )

    elif storage_type == "memory":
        return MemoryStorage(base_url=config["base_url"])

    else:
        raise ValueError(f"Unknown storage type: {settings.storage_type}")


def get_command_store(
    settings: Settings, storage: Optional[StorageInterface] = None
) -> CommandStore:
    """
    Factory function to get the CommandStore selected by ``settings``

    Args:
        settings: Service settings ('memory' or 'storage' command_store_type)
        storage: Storage backend to use instead of building one from settings

    Returns:
        CommandStore implementation
    """
    store_type = settings.command_store_type.lower()

    if store_type == "memory":
        logger.info("Using in-memory command store")
        return InMemoryCommandStore()

    elif store_type == "storage":
        backend = storage or get_storage(settings)
        logger.info(
            f"Using object storage command store ({settings.storage_type}, "
            f"prefix={settings.commands_prefix})"
        )
        return StorageCommandStore(backend, prefix=settings.commands_prefix)

    else:
        raise ValueError(f"Unknown command store type: {settings.command_store_type}")
