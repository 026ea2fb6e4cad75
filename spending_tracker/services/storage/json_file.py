"""
JSON File Storage Implementation

DESIGN DECISION: A single JSON document on disk is used as the device store:
1. No database setup required
2. Users can inspect or back up their data with any text editor
3. The data volume of one person's expenses is tiny

TRADEOFFS:
- Every write rewrites the whole file (fine at this scale)
- No cross-process locking (the app is single-process)

Each write goes to a temporary file that is then renamed over the
original, so a crash mid-write leaves the previous document intact.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from spending_tracker.config import get_settings
from spending_tracker.services.storage.interface import (
    KeyValueStoreInterface,
    StorageReadError,
    StorageWriteError,
)


class JsonFileKeyValueStore(KeyValueStoreInterface):
    """
    File-backed key-value store.

    The file holds one JSON object mapping keys to string values.
    A missing file is an empty store.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        retry_attempts: Optional[int] = None,
    ):
        settings = get_settings().storage
        self._path = Path(path) if path is not None else settings.data_path
        self._retry_attempts = retry_attempts or settings.write_retry_attempts
        # set/remove are read-modify-write; serialize them
        self._write_lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_document(self) -> dict[str, str]:
        """Load the whole document from disk."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageReadError(f"Failed to read {self._path}: {e}")

        if not raw.strip():
            return {}

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageReadError(f"Corrupt store file {self._path}: {e}")

        if not isinstance(document, dict):
            raise StorageReadError(
                f"Corrupt store file {self._path}: expected an object, "
                f"got {type(document).__name__}"
            )
        return document

    def _replace_file(self, document: dict[str, str]) -> None:
        """Atomically replace the file with a new document."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent,
            prefix=f".{self._path.name}.",
            suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def _write_document(self, document: dict[str, str]) -> None:
        """Write with retry on transient OS errors."""
        for attempt in Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=wait_exponential(multiplier=0.1, max=2),
            retry=retry_if_exception_type(OSError),
            reraise=True,
        ):
            with attempt:
                self._replace_file(document)

    def _update(self, key: str, value: Optional[str]) -> None:
        try:
            document = self._read_document()
        except StorageReadError as e:
            raise StorageWriteError(f"Refusing to overwrite unreadable store: {e}")

        if value is None:
            if key not in document:
                return
            del document[key]
        else:
            document[key] = value

        try:
            self._write_document(document)
        except OSError as e:
            raise StorageWriteError(f"Failed to write {self._path}: {e}")

    async def get(self, key: str) -> Optional[str]:
        document = await asyncio.to_thread(self._read_document)
        value = document.get(key)
        if value is not None and not isinstance(value, str):
            raise StorageReadError(f"Value for '{key}' is not a string")
        return value

    async def set(self, key: str, value: str) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._update, key, value)

    async def remove(self, key: str) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._update, key, None)
