"""
Storage Services Package

Provides the abstract key-value interface and concrete implementations.
The JSON file backend is used on a real device; the in-memory backend
in tests.
"""

from spending_tracker.services.storage.interface import (
    KeyValueStoreInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from spending_tracker.services.storage.json_file import JsonFileKeyValueStore
from spending_tracker.services.storage.memory import InMemoryKeyValueStore

__all__ = [
    # Interfaces
    "KeyValueStoreInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
