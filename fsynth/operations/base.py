"""
Base class and shared helpers for filesystem operations.

Every operation exposes the same three capabilities, each returning an
``(ok, error)`` tuple instead of raising:

- validate(): read-only precondition checks (may record checksums)
- execute(): perform the mutation
- undo(): reverse a successful execute()

Undo follows a tolerant-success rule: if the filesystem already looks the way
the undo wants it to look, the undo succeeds as a no-op. It still fails when
the state needed to reverse safely was never recorded, when recorded digests
no longer match, or when reversing would clobber an unrelated item.
"""

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from fsynth.checksum import FileHasher
from fsynth.models import ChecksumData, OperationType

# Configure module logger
logger = logging.getLogger("fsynth.operations")

PathLike = Union[str, Path]
OperationResult = Tuple[bool, Optional[str]]


def to_path(value: Optional[PathLike]) -> Optional[Path]:
    """Convert a caller-supplied path to Path, mapping None/"" to None."""
    if value is None:
        return None
    if isinstance(value, str) and value == "":
        return None
    return Path(value)


def path_exists(path: Path) -> bool:
    """True if anything (including a broken symlink) occupies path."""
    return os.path.lexists(path)


def missing_parent(path: Path) -> Optional[Path]:
    """Return the parent of path if it is not an existing directory."""
    parent = path.parent
    if str(parent) in ("", "."):
        return None
    if parent.is_dir():
        return None
    return parent


def make_parent_dirs(path: Path) -> OperationResult:
    """Create all missing ancestors of path."""
    parent = missing_parent(path)
    if parent is None:
        return True, None
    if path_exists(parent) and not parent.is_dir():
        return False, f"Cannot create parent for '{path}': '{parent}' is not a directory."
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return False, f"Failed to create parent directories for '{path}': {e}"
    return True, None


class Operation(ABC):
    """Abstract base for the six filesystem operation variants.

    Attributes:
        source: Optional source path (copy/move/symlink target/delete path).
        target: Path the operation creates or modifies.
        options: Recognised option flags, defaults filled in.
        checksum_data: Digests recorded during validate/execute.
        performed: True once execute() made a real change, False for
            tolerant no-ops and after a successful undo().
        logger: Logger used for trace output. Never affects results.
    """

    operation_type: OperationType
    DEFAULT_OPTIONS: Mapping[str, Any] = {}

    def __init__(
        self,
        source: Optional[PathLike],
        target: Optional[PathLike],
        options: Optional[Mapping[str, Any]] = None,
        hasher: Optional[FileHasher] = None,
        logger_instance: Optional[logging.Logger] = None,
    ) -> None:
        """
        Create an operation.

        Parameters:
            source (PathLike | None): Source path, if the variant has one.
            target (PathLike | None): Target path.
            options (Mapping | None): Variant-specific flags. Keys must appear in
                DEFAULT_OPTIONS; None values fall back to the default.
            hasher (FileHasher | None): Checksum service, a new FileHasher by default.
            logger_instance (logging.Logger | None): Injected logger.

        Raises:
            ValueError: If options contains an unrecognised key.
        """
        self.source = to_path(source)
        self.target = to_path(target)
        self.options: Dict[str, Any] = self._merge_options(options)
        self.checksum_data = ChecksumData()
        self.performed = False
        self._hasher = hasher or FileHasher()
        self.logger = logger_instance or logger

    def _merge_options(self, options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        merged = dict(self.DEFAULT_OPTIONS)
        for key, value in (options or {}).items():
            if key not in self.DEFAULT_OPTIONS:
                valid = ", ".join(sorted(self.DEFAULT_OPTIONS)) or "none"
                raise ValueError(
                    f"Unrecognized option '{key}' for {type(self).__name__} (valid options: {valid})"
                )
            if value is not None:
                merged[key] = value
        return merged

    @abstractmethod
    def validate(self) -> OperationResult:
        """Check preconditions without mutating the filesystem."""
        raise NotImplementedError(f"{type(self).__name__} must implement validate()")

    @abstractmethod
    def execute(self) -> OperationResult:
        """Perform the filesystem mutation."""
        raise NotImplementedError(f"{type(self).__name__} must implement execute()")

    @abstractmethod
    def undo(self) -> OperationResult:
        """Reverse a successful execute()."""
        raise NotImplementedError(f"{type(self).__name__} must implement undo()")

    def _compare_checksum(
        self, path: Path, stored: Optional[str]
    ) -> Tuple[bool, Optional[str], Optional[str]]:
        """
        Compare the current digest of path with a previously stored one.

        Returns:
            (ok, error, current_digest). With no stored digest the current one
            is returned for the caller to store (first observation). A digest
            that cannot be computed, or one that differs from the stored
            digest, yields ok=False with a descriptive error.
        """
        current, error = self._hasher.calculate(path)
        if current is None:
            return False, f"Checksum calculation failed for '{path}': {error}", None
        if stored is None:
            self.logger.debug(f"Recording first checksum for {path}: {current}")
            return True, None, current
        if stored != current:
            return (
                False,
                f"Checksum mismatch for '{path}': expected {stored}, found {current}",
                current,
            )
        return True, None, current

    def checksum(self) -> OperationResult:
        """
        Check the source file against its recorded digest.

        The first call stores the digest; later calls fail if the source
        content changed since. Operations without a source succeed trivially.
        """
        if self.source is None:
            return True, None
        ok, error, current = self._compare_checksum(self.source, self.checksum_data.source_checksum)
        if not ok:
            if current is not None:
                error = f"Source file has changed since operation was created: {self.source}"
            self.logger.warning(error)
            return False, error
        if self.checksum_data.source_checksum is None:
            self.checksum_data.source_checksum = current
        return True, None

    def _recorded_output(self) -> Optional[Tuple[Path, str]]:
        """Path and digest of the file this operation wrote, if recorded."""
        if self.target is not None and self.checksum_data.target_checksum is not None:
            return self.target, self.checksum_data.target_checksum
        return None

    def verify_checksum(self) -> OperationResult:
        """Re-hash the operation's recorded output and report drift."""
        recorded = self._recorded_output()
        if recorded is None:
            return True, None
        path, digest = recorded
        ok, error, _ = self._compare_checksum(path, digest)
        return ok, error

    def describe(self) -> str:
        """One-line human description of the operation."""
        if self.source is not None and self.target is not None and self.source != self.target:
            return f"{self.operation_type.value}: {self.source} -> {self.target}"
        return f"{self.operation_type.value}: {self.target or self.source}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source!r}, target={self.target!r})"
