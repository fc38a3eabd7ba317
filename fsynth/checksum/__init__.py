"""Checksum package for fsynth.

- FileHasher: Computes SHA-256 digests of file contents for change detection.
- calculate_sha256: One-shot helper returning (digest, error).

Example:
    >>> from fsynth.checksum import FileHasher
    >>> digest, error = FileHasher().calculate(Path("notes.txt"))
"""

from .file_hasher import CHUNK_SIZE, FileHasher, calculate_sha256

__all__ = ["CHUNK_SIZE", "FileHasher", "calculate_sha256"]
