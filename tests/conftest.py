"""Shared fixtures."""

from datetime import datetime
from typing import Optional

import pytest

from spending_tracker.audit import AuditLogger
from spending_tracker.services.storage import (
    InMemoryKeyValueStore,
    StorageReadError,
    StorageWriteError,
)


class FailingKeyValueStore(InMemoryKeyValueStore):
    """In-memory store whose reads and/or writes can be made to fail."""

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        fail_reads: bool = False,
        fail_writes: bool = True,
    ):
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageReadError(f"cannot read {key}")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError(f"cannot write {key}")
        await super().set(key, value)


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def failing_kv() -> FailingKeyValueStore:
    return FailingKeyValueStore()


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def clock():
    """A clock frozen at 1 June 2024, 09:00."""
    now = datetime(2024, 6, 1, 9, 0, 0)
    return lambda: now
