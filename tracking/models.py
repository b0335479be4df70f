"""
Data Models for File Change Tracking

Defines:
1. FileTrackingRecord - per-file bookkeeping entry
2. TrackingStore - the path -> record mapping persisted next to the database

Usage:
    store = TrackingStore.load("sourcechat.tracking.json")
    store.records["/abs/path/README.md"].last_modified
"""

import json
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field, RootModel


class FileTrackingRecord(BaseModel):
    """
    Bookkeeping entry for one successfully ingested file.
    """
    last_modified: datetime = Field(
        ...,
        description="File modification time observed when it was ingested",
    )
    hash: str = Field(
        ...,
        description="SHA-256 hex digest of the file bytes (recorded, not compared)",
    )
    last_processed: datetime = Field(
        ...,
        description="When the file was last ingested (UTC)",
    )


class TrackingStore(RootModel[dict[str, FileTrackingRecord]]):
    """Absolute file path -> FileTrackingRecord."""

    root: dict[str, FileTrackingRecord] = Field(default_factory=dict)

    @property
    def records(self) -> dict[str, FileTrackingRecord]:
        return self.root

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.model_dump(mode="json"), ensure_ascii=False, indent=indent)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: Path) -> "TrackingStore":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)
