"""
Unit tests for FileHasher in fsynth.checksum.file_hasher.

Tests cover:
- SHA-256 output format and value
- Empty and multi-chunk files
- Change detection (no caching between observations)
- Error handling (None, missing path, directory, permission denied, I/O error)
"""

import hashlib
from pathlib import Path
from unittest.mock import patch

import pytest

from fsynth.checksum import CHUNK_SIZE, FileHasher, calculate_sha256


@pytest.mark.unit
class TestFileHasherBasic:
    """Basic FileHasher functionality tests."""

    def test_calculate_matches_hashlib(self, temp_dir: Path):
        content = b"Hello, World! This is test content."
        test_file = temp_dir / "test.txt"
        test_file.write_bytes(content)

        digest, error = FileHasher().calculate(test_file)

        assert error is None
        assert digest == hashlib.sha256(content).hexdigest()
        assert len(digest) == 64
        assert all(c in "0123456789abcdef" for c in digest)

    def test_empty_file(self, temp_dir: Path):
        test_file = temp_dir / "empty.txt"
        test_file.touch()

        assert FileHasher().hash_file(test_file) == hashlib.sha256(b"").hexdigest()

    def test_file_spanning_several_chunks(self, temp_dir: Path):
        data = b"0123456789" * (CHUNK_SIZE // 3)
        test_file = temp_dir / "big.bin"
        test_file.write_bytes(data)

        assert FileHasher().hash_file(test_file) == hashlib.sha256(data).hexdigest()

    def test_accepts_string_path(self, temp_dir: Path):
        test_file = temp_dir / "s.txt"
        test_file.write_text("abc")

        digest, _ = calculate_sha256(str(test_file))

        assert digest == hashlib.sha256(b"abc").hexdigest()

    def test_same_content_same_digest(self, temp_dir: Path):
        a = temp_dir / "a.txt"
        b = temp_dir / "b.txt"
        a.write_text("same")
        b.write_text("same")

        hasher = FileHasher()
        assert hasher.hash_file(a) == hasher.hash_file(b)

    def test_edit_is_detected_between_calls(self, temp_dir: Path):
        test_file = temp_dir / "edit.txt"
        test_file.write_text("before")
        hasher = FileHasher()
        first = hasher.hash_file(test_file)

        test_file.write_text("after!")

        assert hasher.hash_file(test_file) != first


@pytest.mark.unit
class TestFileHasherErrors:
    """Error handling tests."""

    def test_none_path(self):
        digest, error = FileHasher().calculate(None)

        assert digest is None
        assert "None" in error

    def test_missing_file(self, temp_dir: Path):
        hasher = FileHasher()
        digest, error = hasher.calculate(temp_dir / "missing.txt")

        assert digest is None
        assert "not found" in error
        assert hasher.get_errors() == [error]

    def test_directory(self, temp_dir: Path):
        digest, error = FileHasher().calculate(temp_dir)

        assert digest is None
        assert "Not a file" in error

    def test_permission_denied(self, restricted_file):
        if restricted_file is None:
            pytest.skip("Permission bits are not enforced here")

        digest, error = FileHasher().calculate(restricted_file)

        assert digest is None
        assert "Permission denied" in error

    def test_io_error(self, temp_dir: Path):
        test_file = temp_dir / "io.txt"
        test_file.write_text("x")
        hasher = FileHasher()

        with patch.object(hasher, "_compute_hash", side_effect=OSError("disk gone")):
            digest, error = hasher.calculate(test_file)

        assert digest is None
        assert "disk gone" in error

    def test_clear_errors(self, temp_dir: Path):
        hasher = FileHasher()
        hasher.calculate(temp_dir / "nope")
        assert hasher.get_errors()

        hasher.clear_errors()

        assert hasher.get_errors() == []
