"""
Tracking Module - incremental ingestion bookkeeping

Quick Start:
    from tracking import FileChangeDetector, modified_time

    detector = FileChangeDetector("./sourcechat.db")
    detector.needs_processing("src/app.py", modified_time("src/app.py"))
"""

from .change_detector import (
    TRACKING_SUFFIX,
    FileChangeDetector,
    modified_time,
    tracking_path_for,
)
from .models import FileTrackingRecord, TrackingStore

__all__ = [
    "FileChangeDetector",
    "FileTrackingRecord",
    "TrackingStore",
    "TRACKING_SUFFIX",
    "modified_time",
    "tracking_path_for",
]
