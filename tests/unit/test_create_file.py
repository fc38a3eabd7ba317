"""
Unit tests for CreateFileOperation.

Tests cover:
- Exclusive creation with str and bytes content
- Parent handling and content type validation
- Mode application (failure is only a warning)
- Checksum-guarded undo
"""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from fsynth.operations import factories as op


@pytest.mark.unit
class TestCreateFileValidate:
    def test_new_path_is_valid(self, temp_dir: Path):
        assert op.create_file(temp_dir / "new.txt", "x").validate() == (True, None)

    def test_existing_path_rejected(self, sample_files):
        ok, error = op.create_file(sample_files["source"], "x").validate()

        assert not ok
        assert "already exists" in error

    def test_content_type_checked(self, temp_dir: Path):
        ok, error = op.create_file(temp_dir / "n.txt", 42).validate()

        assert not ok
        assert "str or bytes" in error

    def test_missing_parent(self, temp_dir: Path):
        ok, error = op.create_file(temp_dir / "nope" / "n.txt", "x").validate()

        assert not ok
        assert "does not exist" in error


@pytest.mark.unit
class TestCreateFileExecute:
    def test_writes_utf8_text(self, temp_dir: Path):
        target = temp_dir / "hello.txt"

        ok, error = op.create_file(target, "héllo").execute()

        assert ok, error
        assert target.read_bytes() == "héllo".encode("utf-8")

    def test_writes_bytes(self, temp_dir: Path):
        target = temp_dir / "data.bin"

        op.create_file(target, b"\x00\x01\x02").execute()

        assert target.read_bytes() == b"\x00\x01\x02"

    def test_default_content_is_empty(self, temp_dir: Path):
        target = temp_dir / "empty.txt"

        op.create_file(target).execute()

        assert target.read_bytes() == b""

    def test_creates_parents(self, temp_dir: Path):
        target = temp_dir / "a" / "b" / "c.txt"

        ok, error = op.create_file(target, "x", create_parent_dirs=True).execute()

        assert ok, error
        assert target.read_text() == "x"

    def test_refuses_existing_file(self, sample_files):
        ok, error = op.create_file(sample_files["source"], "clobber").execute()

        assert not ok
        assert sample_files["source"].read_text() == "hello world"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_applies_mode(self, temp_dir: Path):
        target = temp_dir / "script.sh"

        op.create_file(target, "#!/bin/sh\n", mode="0755").execute()

        assert stat.S_IMODE(target.stat().st_mode) == 0o755

    def test_invalid_mode_is_only_a_warning(self, temp_dir: Path):
        target = temp_dir / "m.txt"
        operation = op.create_file(target, "x", mode="not-octal")

        ok, error = operation.execute()

        assert ok, error
        assert target.exists()
        assert operation.performed

    def test_checksum_failure_removes_file(self, temp_dir: Path):
        target = temp_dir / "c.txt"
        operation = op.create_file(target, "x")

        with patch.object(operation._hasher, "calculate", return_value=(None, "boom")):
            ok, error = operation.execute()

        assert not ok
        assert not target.exists()


@pytest.mark.unit
class TestCreateFileUndo:
    def test_undo_deletes_file(self, temp_dir: Path):
        target = temp_dir / "u.txt"
        operation = op.create_file(target, "content")
        operation.execute()

        assert operation.undo() == (True, None)
        assert not target.exists()

    def test_undo_when_already_gone(self, temp_dir: Path):
        target = temp_dir / "u.txt"
        operation = op.create_file(target, "content")
        operation.execute()
        target.unlink()

        assert operation.undo() == (True, None)

    def test_undo_refuses_modified_file(self, temp_dir: Path):
        target = temp_dir / "u.txt"
        operation = op.create_file(target, "content")
        operation.execute()
        target.write_text("changed")

        ok, error = operation.undo()

        assert not ok
        assert "modified since creation" in error
        assert target.read_text() == "changed"

    def test_undo_without_checksum_fails(self, sample_files):
        operation = op.create_file(sample_files["source"], "x")

        ok, error = operation.undo()

        assert not ok
        assert "No checksum recorded" in error
        assert sample_files["source"].exists()
