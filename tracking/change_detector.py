"""
File Change Detector

Decides which files need (re)ingestion and keeps the tracking file in
sync with what has been written to the vector store.

Design:
- The tracking file lives next to the database: "X.db" -> "X.tracking.json"
- Loaded once at construction, mutated in memory, flushed with save()
- A missing or unreadable tracking file is an empty store, never an error
- The change predicate compares modification times only; the content
  hash is stored alongside but does not take part in the decision
- Removing a record does not touch the vector store (rows of deleted
  files stay in the collection)

Usage:
    from tracking import FileChangeDetector

    detector = FileChangeDetector("./sourcechat.db")
    if detector.needs_processing(path, modified_time(path)):
        ...
        detector.record_success(path, modified_time(path), detector.compute_hash(path))
    detector.save()
"""

import hashlib
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from shared.logging_config import get_logger

from .models import FileTrackingRecord, TrackingStore

logger = get_logger(__name__)

TRACKING_SUFFIX = ".tracking.json"


def tracking_path_for(db_path: str | Path) -> Path:
    """Replace the database path's extension with ``.tracking.json``."""
    return Path(db_path).with_suffix(TRACKING_SUFFIX)


def modified_time(path: str | Path) -> datetime:
    """Last modification time of a file as an aware UTC datetime."""
    return datetime.fromtimestamp(os.stat(path).st_mtime, tz=timezone.utc)


def _absolute(path: str | Path) -> str:
    return os.path.abspath(os.fspath(path))


class FileChangeDetector:
    """
    Tracks ingested files by absolute path.
    """

    def __init__(self, db_path: str | Path):
        self.tracking_file_path = tracking_path_for(db_path)
        self._store = self.load()

    def needs_processing(self, path: str | Path, last_modified: datetime) -> bool:
        """True for untracked files and for files whose mtime differs."""
        record = self._store.records.get(_absolute(path))
        if record is None:
            return True
        return record.last_modified != last_modified

    def reconcile_deletions(self, current_paths: Iterable[str | Path]) -> list[str]:
        """Tracked paths that are no longer part of the discovered file set."""
        current = {_absolute(p) for p in current_paths}
        return sorted(p for p in self._store.records if p not in current)

    def remove(self, path: str | Path) -> None:
        self._store.records.pop(_absolute(path), None)

    def record_success(
        self, path: str | Path, last_modified: datetime, content_hash: str
    ) -> None:
        self._store.records[_absolute(path)] = FileTrackingRecord(
            last_modified=last_modified,
            hash=content_hash,
            last_processed=datetime.now(timezone.utc),
        )

    @staticmethod
    def compute_hash(path: str | Path) -> str:
        """SHA-256 hex digest of the file bytes."""
        digest = hashlib.sha256()
        with open(path, "rb") as f:
            for block in iter(lambda: f.read(65536), b""):
                digest.update(block)
        return digest.hexdigest().upper()

    def get(self, path: str | Path) -> Optional[FileTrackingRecord]:
        return self._store.records.get(_absolute(path))

    def tracked_files(self) -> list[str]:
        return sorted(self._store.records)

    def __len__(self) -> int:
        return len(self._store.records)

    def save(self) -> None:
        """Write the whole store to the tracking file."""
        self._store.save(self.tracking_file_path)
        logger.debug(
            "Saved %d tracking records to %s",
            len(self._store.records),
            self.tracking_file_path,
        )

    def load(self) -> TrackingStore:
        """Read the tracking file; anything unreadable yields an empty store."""
        if not self.tracking_file_path.exists():
            return TrackingStore()
        try:
            return TrackingStore.load(self.tracking_file_path)
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(
                "Ignoring unreadable tracking file %s: %s",
                self.tracking_file_path,
                e,
            )
            return TrackingStore()

    def clear(self) -> None:
        """Drop every record and delete the tracking file."""
        self._store.records.clear()
        if self.tracking_file_path.exists():
            self.tracking_file_path.unlink()
