"""JSON file store for named record collections.

Each collection lives in ``<data_dir>/<name>.json`` as a JSON array. Saves
replace the whole file atomically; loads never fail the caller.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from taskflow.errors import StorageError
from taskflow.utils.logger import get_logger

Record = dict[str, Any]


class JsonCollectionStore:
    """Durable store mapping collection names to JSON files."""

    def __init__(self, data_dir: str | Path):
        """Initialize the store.

        Args:
            data_dir: Directory holding the collection files. Created on first use.
        """
        self.data_dir = Path(data_dir)
        self._locks: dict[str, asyncio.Lock] = {}

    def path_for(self, name: str) -> Path:
        """Get the file backing a collection."""
        return self.data_dir / f"{name}.json"

    def ensure_location(self) -> None:
        """Create the data directory if it does not exist yet."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directory {self.data_dir}: {e}") from e

    def lock(self, name: str) -> asyncio.Lock:
        """Get the write lock for a collection.

        Writers hold it across load -> mutate -> save so that two writers
        cannot both start from the same snapshot.
        """
        lock = self._locks.get(name)
        if lock is None:
            lock = self._locks[name] = asyncio.Lock()
        return lock

    async def load(self, name: str) -> list[Record]:
        """Load a collection.

        A missing file or content that is not a JSON array loads as an empty
        collection. An empty result therefore means "nothing valid loaded",
        not "confirmed empty".

        Args:
            name: Collection name

        Returns:
            Records in stored order
        """
        return await asyncio.to_thread(self._read, name)

    async def save(self, name: str, records: list[Record]) -> None:
        """Replace a collection's full content atomically.

        Args:
            name: Collection name
            records: Every record of the collection, in order

        Raises:
            StorageError: If the file cannot be written
        """
        await asyncio.to_thread(self._write, name, records)

    def _read(self, name: str) -> list[Record]:
        path = self.path_for(name)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as e:
            get_logger().warning(
                "collection %s could not be read, treating as empty: %s", name, e
            )
            return []

        if not isinstance(data, list):
            get_logger().warning(
                "collection %s is not a JSON array, treating as empty", name
            )
            return []
        return data

    def _write(self, name: str, records: list[Record]) -> None:
        self.ensure_location()
        path = self.path_for(name)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{name}.", suffix=".tmp", dir=self.data_dir
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except (OSError, TypeError, ValueError) as e:
            with contextlib.suppress(OSError):
                os.unlink(tmp_name)
            raise StorageError(f"Failed to save collection {name}: {e}") from e
