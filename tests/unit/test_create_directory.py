"""Unit tests for CreateDirectoryOperation."""

import os
import stat
from pathlib import Path

import pytest

from fsynth.operations import factories as op


@pytest.mark.unit
class TestCreateDirectory:
    def test_creates_with_parents_by_default(self, temp_dir: Path):
        target = temp_dir / "a" / "b" / "c"
        operation = op.create_directory(target)

        assert operation.validate() == (True, None)
        assert operation.execute() == (True, None)
        assert target.is_dir()
        assert operation.performed

    def test_without_parents(self, temp_dir: Path):
        ok, error = op.create_directory(temp_dir / "a" / "b", create_parent_dirs=False).validate()

        assert not ok
        assert "create_parent_dirs is false" in error

    def test_existing_directory_is_noop(self, sample_files):
        operation = op.create_directory(sample_files["sub"])

        assert operation.execute() == (True, None)
        assert not operation.performed

    def test_existing_directory_with_exclusive(self, sample_files):
        ok, error = op.create_directory(sample_files["sub"], exclusive=True).validate()

        assert not ok
        assert "exclusive" in error

    def test_file_in_the_way(self, sample_files):
        ok, error = op.create_directory(sample_files["source"]).execute()

        assert not ok
        assert "not a directory" in error

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_mode(self, temp_dir: Path):
        target = temp_dir / "private"

        op.create_directory(target, mode=0o700).execute()

        assert stat.S_IMODE(target.stat().st_mode) == 0o700

    def test_invalid_mode_fails_validation(self, temp_dir: Path):
        ok, error = op.create_directory(temp_dir / "d", mode="999").validate()

        assert not ok
        assert "Invalid permission mode" in error


@pytest.mark.unit
class TestCreateDirectoryUndo:
    def test_undo_removes_created_directory(self, temp_dir: Path):
        target = temp_dir / "made"
        operation = op.create_directory(target)
        operation.execute()

        assert operation.undo() == (True, None)
        assert not target.exists()

    def test_undo_noop_when_not_created(self, sample_files):
        operation = op.create_directory(sample_files["sub"])
        operation.execute()

        assert operation.undo() == (True, None)
        assert sample_files["sub"].is_dir()

    def test_undo_refuses_non_empty(self, temp_dir: Path):
        target = temp_dir / "made"
        operation = op.create_directory(target)
        operation.execute()
        (target / "file.txt").write_text("x")

        ok, error = operation.undo()

        assert not ok
        assert "not empty" in error
        assert target.is_dir()

    def test_undo_fails_when_removed(self, temp_dir: Path):
        target = temp_dir / "made"
        operation = op.create_directory(target)
        operation.execute()
        target.rmdir()

        ok, error = operation.undo()

        assert not ok
        assert "no longer exists" in error

    def test_second_undo_is_noop(self, temp_dir: Path):
        operation = op.create_directory(temp_dir / "made")
        operation.execute()

        assert operation.undo() == (True, None)
        assert operation.undo() == (True, None)
