"""
Abstract Key-Value Storage Interface

DESIGN DECISION: The store only ever needs get / set / remove on string keys.
This allows us to:
1. Keep data in a local JSON file on a real device
2. Use in-memory storage for testing
3. Swap in another backend without touching the domain store

Values are opaque strings. Serialization is the caller's job.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStoreInterface(ABC):
    """
    Abstract interface for asynchronous key-value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The key to read

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing anything under the same key.

        Args:
            key: The key to write
            value: The string to store

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    @abstractmethod
    async def remove(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Raises:
            StorageWriteError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Stored data could not be read."""
    pass


class StorageWriteError(StorageError):
    """Data could not be written."""
    pass
