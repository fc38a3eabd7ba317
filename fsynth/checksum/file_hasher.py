"""File checksum service.

This module provides the FileHasher class for computing SHA-256 digests of
file contents. Operations use the digests purely for change detection: a file
is considered unchanged between two observations iff its digest is identical.

Example:
    >>> from fsynth.checksum import FileHasher
    >>> hasher = FileHasher()
    >>> digest, error = hasher.calculate(Path("/path/to/file.txt"))
    >>> if digest is None:
    ...     print(f"Could not hash: {error}")
"""

import hashlib
from pathlib import Path
from typing import List, Optional, Tuple, Union

# Buffer size for chunked file reading (8KB)
CHUNK_SIZE = 8192


class FileHasher:
    """Computes SHA-256 hex digests of file contents.

    Unlike a deduplication hasher, FileHasher never caches results: two
    observations of the same path must each read the bytes on disk, otherwise
    an in-place edit inside the filesystem's mtime resolution would go
    unnoticed.

    Attributes:
        _errors: Error messages encountered during hashing, oldest first.
    """

    def __init__(self) -> None:
        """Initialize the FileHasher with an empty error list."""
        self._errors: List[str] = []

    def calculate(self, file_path: Union[str, Path, None]) -> Tuple[Optional[str], Optional[str]]:
        """Compute the SHA-256 digest of a file.

        Args:
            file_path: Path to the file to hash. Symlinks are followed.

        Returns:
            Tuple of (digest, error). On success digest is the 64-character
            hex digest and error is None; on failure digest is None and error
            describes the problem (missing path, not a regular file,
            permission denied, I/O error).
        """
        if file_path is None:
            return self._fail("File path cannot be None")

        path = Path(file_path)
        try:
            if not path.exists():
                return self._fail(f"File not found: {path}")
            if not path.is_file():
                return self._fail(f"Not a file: {path}")
            return self._compute_hash(path), None
        except PermissionError:
            return self._fail(f"Permission denied reading: {path}")
        except OSError as e:
            return self._fail(f"Error reading {path}: {e}")

    def hash_file(self, file_path: Union[str, Path]) -> Optional[str]:
        """Compute the SHA-256 digest of a file, or None on error."""
        digest, _ = self.calculate(file_path)
        return digest

    def _compute_hash(self, file_path: Path) -> str:
        """Read a file in chunks and return its SHA-256 hex digest.

        Raises:
            OSError: If the file cannot be opened or read.
        """
        sha256_hash = hashlib.sha256()
        with open(file_path, "rb") as f:
            while True:
                chunk = f.read(CHUNK_SIZE)
                if not chunk:
                    break
                sha256_hash.update(chunk)
        return sha256_hash.hexdigest()

    def _fail(self, message: str) -> Tuple[None, str]:
        self._errors.append(message)
        return None, message

    def get_errors(self) -> List[str]:
        """Get list of errors encountered during hashing operations.

        Returns:
            List of error message strings.
        """
        return self._errors.copy()

    def clear_errors(self) -> None:
        """Clear the list of accumulated errors."""
        self._errors.clear()


def calculate_sha256(file_path: Union[str, Path, None]) -> Tuple[Optional[str], Optional[str]]:
    """Module-level shortcut for FileHasher().calculate()."""
    return FileHasher().calculate(file_path)
