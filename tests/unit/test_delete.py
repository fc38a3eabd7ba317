"""
Unit tests for DeleteOperation.

Tests cover:
- Item type detection and snapshotting at validation
- Deleting files, empty directories and symlinks (never their referents)
- Non-empty directories with and without is_recursive
- Restoring deleted items on undo
"""

import os
import stat
from pathlib import Path

import pytest

from fsynth.models import ItemType
from fsynth.operations import factories as op


@pytest.mark.unit
class TestDeleteValidate:
    def test_file_snapshot(self, sample_files):
        operation = op.delete(sample_files["source"])

        assert operation.validate() == (True, None)
        assert operation.item_type is ItemType.FILE
        assert operation.original_content == b"hello world"
        assert operation.checksum_data.original_checksum is not None

    def test_missing_path(self, temp_dir: Path):
        ok, error = op.delete(temp_dir / "ghost").validate()

        assert not ok
        assert "does not exist" in error

    def test_non_empty_directory(self, sample_files):
        ok, error = op.delete_directory(sample_files["full"]).validate()

        assert not ok
        assert "not empty" in error

    def test_non_empty_directory_recursive_validates(self, sample_files):
        operation = op.delete_directory(sample_files["full"], recursive=True)

        assert operation.validate() == (True, None)
        assert operation.item_type is ItemType.DIRECTORY

    def test_unreadable_file_recorded_without_checksum(self, restricted_file):
        if restricted_file is None:
            pytest.skip("Permission bits are not enforced here")
        operation = op.delete_file(restricted_file)

        assert operation.validate() == (True, None)
        assert operation.original_content == b""
        assert operation.checksum_data.original_checksum is None


@pytest.mark.unit
class TestDeleteExecute:
    def test_deletes_file(self, sample_files):
        operation = op.delete_file(sample_files["source"])
        operation.validate()

        assert operation.execute() == (True, None)
        assert not sample_files["source"].exists()
        assert operation.performed

    def test_deletes_empty_directory(self, sample_files):
        operation = op.delete_directory(sample_files["sub"])

        assert operation.execute() == (True, None)
        assert not sample_files["sub"].exists()

    def test_recursive_delete_of_non_empty_directory_fails(self, sample_files):
        operation = op.delete_directory(sample_files["full"], recursive=True)
        operation.validate()

        ok, error = operation.execute()

        assert not ok
        assert "Failed to delete" in error
        assert (sample_files["full"] / "inner.txt").exists()

    def test_missing_path_is_noop(self, temp_dir: Path):
        operation = op.delete(temp_dir / "ghost")

        assert operation.execute() == (True, None)
        assert not operation.performed

    def test_symlink_removed_not_referent(self, sample_files, temp_dir: Path, symlinks_supported):
        if not symlinks_supported:
            pytest.skip("Symlinks not supported")
        link = temp_dir / "link"
        link.symlink_to(sample_files["source"])
        operation = op.delete(link)

        assert operation.validate() == (True, None)
        assert operation.item_type is ItemType.SYMLINK
        assert operation.execute() == (True, None)

        assert not os.path.lexists(link)
        assert sample_files["source"].read_text() == "hello world"


@pytest.mark.unit
class TestDeleteUndo:
    def test_restores_file(self, sample_files):
        path = sample_files["source"]
        operation = op.delete_file(path)
        operation.validate()
        operation.execute()

        assert operation.undo() == (True, None)
        assert path.read_text() == "hello world"
        assert not operation.performed

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_restores_file_mode(self, sample_files):
        path = sample_files["source"]
        os.chmod(path, 0o600)
        operation = op.delete_file(path)
        operation.validate()
        operation.execute()

        operation.undo()

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_restores_directory(self, sample_files):
        operation = op.delete_directory(sample_files["sub"])
        operation.validate()
        operation.execute()

        assert operation.undo() == (True, None)
        assert sample_files["sub"].is_dir()

    def test_restores_symlink(self, sample_files, temp_dir: Path, symlinks_supported):
        if not symlinks_supported:
            pytest.skip("Symlinks not supported")
        link = temp_dir / "link"
        link.symlink_to("source.txt")
        operation = op.delete(link)
        operation.validate()
        operation.execute()

        assert operation.undo() == (True, None)
        assert os.readlink(link) == "source.txt"

    def test_refuses_when_path_reoccupied(self, sample_files):
        path = sample_files["source"]
        operation = op.delete_file(path)
        operation.validate()
        operation.execute()
        path.write_text("newcomer")

        ok, error = operation.undo()

        assert not ok
        assert "occupied" in error
        assert path.read_text() == "newcomer"

    def test_noop_when_nothing_deleted(self, temp_dir: Path):
        operation = op.delete(temp_dir / "ghost")
        operation.execute()

        assert operation.undo() == (True, None)
        assert not (temp_dir / "ghost").exists()

    def test_file_without_snapshot_fails(self, sample_files):
        path = sample_files["source"]
        operation = op.delete_file(path)
        operation.validate()
        operation.execute()
        operation.checksum_data.original_checksum = None

        ok, error = operation.undo()

        assert not ok
        assert "not recorded" in error
        assert not path.exists()
