"""Plist-backed ordered image record store."""

import threading
from pathlib import Path

import structlog

from ..config import InsertionPolicy
from ..errors import DecodeError, RecordIndexError, WriteError
from ..models import ImageRecord
from .file_storage import FileStorage
from .plist_codec import decode_records, encode_records

logger = structlog.get_logger(__name__)


class RecordStore:
    """Ordered collection of image records backed by a single plist file.

    The in-memory sequence is the source of truth while the process runs.
    Every mutation rewrites the whole file. When that write fails the
    in-memory sequence keeps the change, so memory and disk may differ until
    the next successful write.

    Access is serialized with an in-process lock; there is no protection
    against a second process writing the same file.
    """

    def __init__(
        self,
        path: Path,
        *,
        policy: InsertionPolicy = InsertionPolicy.NEWEST_FIRST,
        file_storage: FileStorage | None = None,
    ) -> None:
        """
        Initialize the store. Nothing is read until load() is called.

        Args:
            path: Backing plist file.
            policy: Where create() places new records.
            file_storage: File operations; defaults to one rooted at path's directory.
        """
        self.path = Path(path)
        self.policy = policy
        self.file_storage = file_storage or FileStorage(self.path.parent)
        self._records: list[ImageRecord] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> tuple[ImageRecord, ...]:
        """Snapshot of the in-memory sequence."""
        with self._lock:
            return tuple(self._records)

    def load(self) -> list[ImageRecord]:
        """
        Read the backing file into memory.

        Returns:
            The ordered records; empty when the file does not exist.

        Raises:
            DecodeError: If the file exists but cannot be read or parsed.
                The in-memory sequence is left as it was.
        """
        with self._lock:
            try:
                data = self.file_storage.read_bytes(self.path)
            except OSError as exc:
                raise DecodeError(self.path, f"unreadable file ({exc})") from exc
            if data is None:
                records: list[ImageRecord] = []
            else:
                records = decode_records(data, self.path)
            self._records = records
            logger.info("records_loaded", path=str(self.path), count=len(records))
            return list(records)

    def create(self, record: ImageRecord) -> int:
        """
        Insert a record according to the insertion policy and persist.

        Returns:
            Position of the new record.

        Raises:
            EncodeError: If the sequence cannot be serialized; nothing changes.
            WriteError: If the file cannot be written; the record stays in memory.
        """
        with self._lock:
            if self.policy is InsertionPolicy.NEWEST_FIRST:
                position = 0
            else:
                position = len(self._records)
            updated = list(self._records)
            updated.insert(position, record)
            self._commit(updated)
            logger.info(
                "record_created",
                position=position,
                size=record.size,
                count=len(self._records),
            )
            return position

    def replace(self, position: int, record: ImageRecord) -> ImageRecord:
        """
        Swap the record at a position and persist.

        Returns:
            The record that was replaced.

        Raises:
            RecordIndexError: If position is out of range.
            EncodeError: If the sequence cannot be serialized; nothing changes.
            WriteError: If the file cannot be written; the swap stays in memory.
        """
        with self._lock:
            self._check_position(position)
            updated = list(self._records)
            previous = updated[position]
            updated[position] = record
            self._commit(updated)
            logger.info("record_replaced", position=position, size=record.size)
            return previous

    def delete(self, position: int) -> ImageRecord:
        """
        Remove the record at a position and persist.

        Returns:
            The removed record.

        Raises:
            RecordIndexError: If position is out of range.
            WriteError: If the file cannot be written; the removal stays in memory.
        """
        with self._lock:
            self._check_position(position)
            updated = list(self._records)
            removed = updated.pop(position)
            self._commit(updated)
            logger.info("record_deleted", position=position, count=len(self._records))
            return removed

    def _check_position(self, position: int) -> None:
        if not 0 <= position < len(self._records):
            raise RecordIndexError(position, len(self._records))

    def _commit(self, updated: list[ImageRecord]) -> None:
        """Adopt the new sequence and rewrite the file with it."""
        data = encode_records(updated)
        self._records = updated
        try:
            self.file_storage.write_atomic(self.path, data)
        except OSError as exc:
            logger.error(
                "store_write_failed",
                path=str(self.path),
                error=str(exc),
                count=len(updated),
            )
            raise WriteError(self.path, str(exc)) from exc
