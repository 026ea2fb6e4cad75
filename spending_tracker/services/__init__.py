"""Services package."""

from spending_tracker.services.onboarding import (
    check_first_launch,
    set_first_launch_complete,
)
from spending_tracker.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStoreInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # Onboarding
    "check_first_launch",
    "set_first_launch_complete",
    # Storage services
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStoreInterface",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
