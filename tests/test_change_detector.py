"""Tests for tracking: FileChangeDetector and the tracking file."""

import json
import os
from datetime import datetime, timedelta, timezone

import pytest

from tracking.change_detector import (
    FileChangeDetector,
    modified_time,
    tracking_path_for,
)
from tracking.models import FileTrackingRecord, TrackingStore


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "sourcechat.db")


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "README.md"
    path.write_text("# Hello\n", encoding="utf-8")
    return path


class TestTrackingPath:
    def test_replaces_extension(self):
        assert tracking_path_for("/data/sourcechat.db").name == "sourcechat.tracking.json"

    def test_without_extension(self):
        assert tracking_path_for("/data/store").name == "store.tracking.json"


class TestNeedsProcessing:
    def test_untracked_file(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        assert detector.needs_processing(sample_file, modified_time(sample_file))

    def test_unchanged_file(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        mtime = modified_time(sample_file)
        detector.record_success(sample_file, mtime, "ABC")
        assert not detector.needs_processing(sample_file, mtime)

    def test_newer_file(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        mtime = modified_time(sample_file)
        detector.record_success(sample_file, mtime, "ABC")
        assert detector.needs_processing(sample_file, mtime + timedelta(seconds=1))

    def test_older_file_also_counts_as_changed(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        mtime = modified_time(sample_file)
        detector.record_success(sample_file, mtime, "ABC")
        assert detector.needs_processing(sample_file, mtime - timedelta(days=1))

    def test_hash_does_not_matter(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        mtime = modified_time(sample_file)
        detector.record_success(sample_file, mtime, "NOT-THE-REAL-HASH")
        assert not detector.needs_processing(sample_file, mtime)

    def test_relative_and_absolute_paths_match(self, db_path, sample_file, monkeypatch):
        monkeypatch.chdir(sample_file.parent)
        detector = FileChangeDetector(db_path)
        mtime = modified_time(sample_file)
        detector.record_success("README.md", mtime, "ABC")
        assert not detector.needs_processing(str(sample_file), mtime)


class TestReconcileDeletions:
    def test_returns_stale_paths(self, db_path, tmp_path):
        detector = FileChangeDetector(db_path)
        now = datetime.now(timezone.utc)
        kept = tmp_path / "kept.md"
        gone = tmp_path / "gone.md"
        detector.record_success(kept, now, "A")
        detector.record_success(gone, now, "B")

        stale = detector.reconcile_deletions([kept])
        assert stale == [os.path.abspath(gone)]

    def test_nothing_stale(self, db_path, tmp_path):
        detector = FileChangeDetector(db_path)
        detector.record_success(tmp_path / "a.md", datetime.now(timezone.utc), "A")
        assert detector.reconcile_deletions([tmp_path / "a.md"]) == []

    def test_remove(self, db_path, tmp_path):
        detector = FileChangeDetector(db_path)
        detector.record_success(tmp_path / "a.md", datetime.now(timezone.utc), "A")
        detector.remove(tmp_path / "a.md")
        detector.remove(tmp_path / "never-tracked.md")
        assert len(detector) == 0


class TestRecordSuccess:
    def test_stores_record(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        mtime = modified_time(sample_file)
        before = datetime.now(timezone.utc)
        detector.record_success(sample_file, mtime, "ABC123")

        record = detector.get(sample_file)
        assert isinstance(record, FileTrackingRecord)
        assert record.last_modified == mtime
        assert record.hash == "ABC123"
        assert record.last_processed >= before

    def test_keys_are_absolute(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        detector.record_success(sample_file, modified_time(sample_file), "A")
        assert detector.tracked_files() == [os.path.abspath(sample_file)]


class TestComputeHash:
    def test_sha256_uppercase(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        assert FileChangeDetector.compute_hash(path) == (
            "E3B0C44298FC1C149AFBF4C8996FB92427AE41E4649B934CA495991B7852B855"
        )

    def test_content_changes_hash(self, tmp_path):
        a = tmp_path / "a.txt"
        b = tmp_path / "b.txt"
        a.write_text("one", encoding="utf-8")
        b.write_text("two", encoding="utf-8")
        assert FileChangeDetector.compute_hash(a) != FileChangeDetector.compute_hash(b)


class TestPersistence:
    def test_save_and_reload(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        mtime = modified_time(sample_file)
        detector.record_success(sample_file, mtime, "ABC")
        detector.save()

        reloaded = FileChangeDetector(db_path)
        assert len(reloaded) == 1
        assert not reloaded.needs_processing(sample_file, mtime)

    def test_file_layout(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        detector.record_success(sample_file, modified_time(sample_file), "ABC")
        detector.save()

        data = json.loads(detector.tracking_file_path.read_text(encoding="utf-8"))
        entry = data[os.path.abspath(sample_file)]
        assert set(entry) == {"last_modified", "hash", "last_processed"}
        assert entry["hash"] == "ABC"

    def test_missing_file_is_empty(self, db_path):
        detector = FileChangeDetector(db_path)
        assert len(detector) == 0
        assert not detector.tracking_file_path.exists()

    def test_corrupt_file_is_empty(self, db_path):
        tracking_path_for(db_path).write_text("{not json", encoding="utf-8")
        assert len(FileChangeDetector(db_path)) == 0

    def test_wrong_shape_is_empty(self, db_path):
        tracking_path_for(db_path).write_text('{"a": {"hash": 1}}', encoding="utf-8")
        assert len(FileChangeDetector(db_path)) == 0

    def test_save_creates_parent_directory(self, tmp_path):
        detector = FileChangeDetector(tmp_path / "nested" / "dir" / "store.db")
        detector.save()
        assert detector.tracking_file_path.exists()

    def test_clear(self, db_path, sample_file):
        detector = FileChangeDetector(db_path)
        detector.record_success(sample_file, modified_time(sample_file), "A")
        detector.save()
        detector.clear()
        assert len(detector) == 0
        assert not detector.tracking_file_path.exists()


class TestTrackingStore:
    def test_empty_roundtrip(self, tmp_path):
        path = tmp_path / "t.json"
        TrackingStore().save(path)
        assert TrackingStore.load(path).records == {}
