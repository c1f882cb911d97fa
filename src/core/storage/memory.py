from typing import List
from src.core.storage.interface import StorageInterface
import obstore as obs
from obstore.exceptions import NotFoundError
from obstore.store import MemoryStore


class MemoryStorage(StorageInterface):
    """
    In-memory implementation of StorageInterface backed by obstore's MemoryStore
    (for tests and local development without an object store)
    """

    def __init__(self, base_url: str = "memory://"):
        """
        Initialize in-memory storage

        Args:
            base_url: Base URL prefix for virtual URLs
        """
        self._store = MemoryStore()
        self._base_url: str = base_url

    async def save_bytes(self, data: bytes, path: str) -> str:
        """Save binary data to in-memory storage"""
        await obs.put_async(self._store, path, data)
        return self.get_url(path)

    async def get_bytes(self, path: str) -> bytes:
        """Get binary data from in-memory storage"""
        try:
            result = await obs.get_async(self._store, path)
            return bytes(await result.bytes_async())
        except (FileNotFoundError, NotFoundError):
            raise FileNotFoundError(f"Path not found in memory storage: {path}")

    async def list_files(self, prefix: str) -> List[str]:
        """List files in in-memory storage with given prefix"""
        objects = self._store.list(prefix=prefix)
        return [obj["path"] for obj in await objects.collect_async()]

    async def delete(self, path: str) -> bool:
        """Delete an object from in-memory storage"""
        try:
            await obs.head_async(self._store, path)
        except (FileNotFoundError, NotFoundError):
            return False
        await obs.delete_async(self._store, path)
        return True

    def get_url(self, path: str) -> str:
        """Get URL for a stored object (virtual URL for in-memory storage)"""
        return f"{self._base_url}/{path}"
