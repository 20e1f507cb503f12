# expense_tracker/db/store.py
"""
Flat-file entry storage.

The whole collection lives in one pretty-printed JSON array and is read and
rewritten wholesale on every mutation. There is no locking: two concurrent
read-modify-write sequences can interleave and the last writer wins.
"""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Union

import structlog

from expense_tracker.models.entries import Entry

logger = structlog.get_logger(__name__)


class StorageError(Exception):
    """Base exception for storage operations."""


class DuplicateEntryError(StorageError):
    """An entry with the same id is already stored."""


class EntryStore:
    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def ensure_initialized(self) -> None:
        """Create the backing document with an empty collection if missing."""
        await self._run(self._ensure_document)

    async def read_all(self) -> List[Entry]:
        """
        Return every stored entry, newest first.

        An unparseable document, or one that does not hold a JSON array, reads
        as an empty collection.
        """
        await self.ensure_initialized()
        content = await self._run(self._path.read_bytes)

        try:
            parsed = json.loads(content)
        except ValueError:
            logger.warning("entry_store_unreadable", path=str(self._path))
            return []

        if not isinstance(parsed, list):
            logger.warning(
                "entry_store_unreadable",
                path=str(self._path),
                content_type=type(parsed).__name__,
            )
            return []

        entries: List[Entry] = []
        for position, record in enumerate(parsed):
            if not isinstance(record, dict):
                logger.warning("entry_record_skipped", position=position)
                continue
            entries.append(Entry.model_validate(record))
        return entries

    async def write_all(self, entries: List[Entry]) -> None:
        records = [entry.model_dump(by_alias=True) for entry in entries]
        await self._run(self._write_document, records)

    async def append(self, entry: Entry) -> List[Entry]:
        """Insert entry at the front and return the updated collection."""
        entries = await self.read_all()
        if any(existing.id == entry.id for existing in entries):
            raise DuplicateEntryError(f"Entry already exists: {entry.id}")

        entries.insert(0, entry)
        await self.write_all(entries)
        return entries

    async def remove(self, entry_id: str) -> Optional[List[Entry]]:
        """
        Drop the entry with entry_id and return what remains, or None (without
        writing) when no entry matched.
        """
        entries = await self.read_all()
        remaining = [entry for entry in entries if entry.id != entry_id]

        if len(remaining) == len(entries):
            return None

        await self.write_all(remaining)
        return remaining

    async def remove_by_id(self, entry_id: str) -> bool:
        return await self.remove(entry_id) is not None

    async def clear(self) -> None:
        await self.write_all([])

    async def _run(self, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Entry store operation failed on {self._path}: {e}") from e

    def _ensure_document(self) -> None:
        if self._path.exists():
            return
        self._write_document([])
        logger.info("entry_store_initialized", path=str(self._path))

    def _write_document(self, records: list) -> None:
        # Swap a fully written sibling file into place; readers never see
        # a half-written document.
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
