"""Unit tests for FileMonitor."""

import os

import pytest

from seoedit.services.file_monitor import FileMonitor


def bump_mtime(path):
    stat = path.stat()
    os.utime(path, (stat.st_atime, stat.st_mtime + 5))


class TestFileMonitor:
    """Test FileMonitor class."""

    def test_record_and_check_unmodified(self, tmp_path):
        """Test a recorded file is not modified right away."""
        monitor = FileMonitor()
        test_file = tmp_path / "content.md"
        test_file.write_text("Initial content")

        monitor.record(test_file)

        assert not monitor.is_modified(test_file)

    def test_detect_modification(self, tmp_path):
        """Test detecting a changed mtime."""
        monitor = FileMonitor()
        test_file = tmp_path / "content.md"
        test_file.write_text("Initial content")
        monitor.record(test_file)

        bump_mtime(test_file)

        assert monitor.is_modified(test_file)

    def test_refresh_after_modification(self, tmp_path):
        """Test refresh accepts the current mtime."""
        monitor = FileMonitor()
        test_file = tmp_path / "content.md"
        test_file.write_text("Initial content")
        monitor.record(test_file)
        bump_mtime(test_file)

        monitor.refresh(test_file)

        assert not monitor.is_modified(test_file)

    def test_deleted_file_is_modified(self, tmp_path):
        """Test a recorded file that disappeared counts as modified."""
        monitor = FileMonitor()
        test_file = tmp_path / "content.md"
        test_file.write_text("Initial content")
        monitor.record(test_file)

        test_file.unlink()

        assert monitor.is_modified(test_file)

    def test_untracked_file(self, tmp_path):
        """Test untracked paths are modified only if they exist."""
        monitor = FileMonitor()
        missing = tmp_path / "missing.md"
        existing = tmp_path / "existing.md"
        existing.write_text("Content")

        assert not monitor.is_modified(missing)
        assert monitor.is_modified(existing)

    def test_record_missing_file(self, tmp_path):
        """Test recording a missing file raises."""
        with pytest.raises(FileNotFoundError):
            FileMonitor().record(tmp_path / "missing.md")
