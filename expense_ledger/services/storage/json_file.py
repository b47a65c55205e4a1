"""
JSON File Storage Implementation

DESIGN DECISION: The whole store is one JSON object on disk mapping
store keys to their text values. This mirrors device key-value storage:
1. No database setup required
2. The file is human readable and easy to back up
3. Writes replace the file atomically (write temp file, then rename)

TRADEOFFS:
- Every write rewrites the whole file (fine for personal ledgers)
- No locking; a single writer is assumed
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from expense_ledger.services.storage.interface import (
    ConnectionError,
    KeyValueStoreInterface,
    StorageError,
)


logger = structlog.get_logger(__name__)


class JsonFileKeyValueStore(KeyValueStoreInterface):
    """
    File-backed key-value store.

    File IO runs in a worker thread so the event loop is never blocked.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        if not self._path.parent.exists():
            raise ConnectionError(
                f"Storage directory does not exist: {self._path.parent}"
            )

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Load the whole file; a missing file is an empty store."""
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read {self._path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path} is not a JSON object")
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Could not write {self._path}: {e}") from e

    def _set_sync(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value under {key!r} is not text", key=key)
        return value

    async def set(self, key: str, value: str) -> bool:
        await asyncio.to_thread(self._set_sync, key, value)
        logger.debug("store_write", key=key, path=str(self._path), size=len(value))
        return True
