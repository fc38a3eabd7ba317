"""
Copy a single regular file.

The source digest is recorded when the operation is planned; validate()
refuses to proceed if the source changed since. The digest of the written
copy is recorded so undo() only removes the copy if nobody edited it.
"""

from pathlib import Path
from typing import Any, Mapping, Optional

from fsynth.models import OperationType

from .base import (
    Operation,
    OperationResult,
    PathLike,
    make_parent_dirs,
    missing_parent,
    path_exists,
)
from .permissions import copy_with_attributes, is_readable


class CopyFileOperation(Operation):
    """Copies ``source`` to ``target``.

    Options:
        overwrite: Replace an existing target file. A symlink target is always
            rejected. Defaults to False.
        create_parent_dirs: Create missing target ancestors. Defaults to False.
        preserve_attributes: Copy mode bits and timestamps. Defaults to False.
        verify_checksum: Fail (and remove the copy) if the copy's digest
            differs from the source digest. Defaults to False.
    """

    operation_type = OperationType.COPY_FILE
    DEFAULT_OPTIONS: Mapping[str, Any] = {
        "overwrite": False,
        "create_parent_dirs": False,
        "preserve_attributes": False,
        "verify_checksum": False,
    }

    def __init__(
        self,
        source: Optional[PathLike],
        target: Optional[PathLike],
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(source, target, options, **kwargs)
        # Snapshot the source as planned; a missing source leaves this unset
        if self.source is not None and self.source.is_file():
            self.checksum()
        self.checksum_data.initial_source_checksum = self.checksum_data.source_checksum

    def _check_existing_target(self) -> OperationResult:
        # Copying onto a symlink would write through it to the file it points at
        if self.target.is_symlink():
            return False, f"Target path '{self.target}' is a symlink, refusing to write through it."
        if self.target.is_dir():
            return False, f"Target path '{self.target}' is a directory."
        if not self.options["overwrite"]:
            return False, f"Target file '{self.target}' exists and overwrite is false."
        return True, None

    def validate(self) -> OperationResult:
        self.logger.debug(f"Validating copy {self.source} -> {self.target}")
        if self.source is None:
            return False, "Source path not specified for CopyFileOperation"
        if self.target is None:
            return False, "Target path not specified for CopyFileOperation"

        if not self.source.is_file():
            return False, f"Source path '{self.source}' is not a file or does not exist."
        if not is_readable(self.source):
            return False, f"Source file '{self.source}' is not readable."

        # Compare against the digest recorded at planning time
        ok, error, current = self._compare_checksum(
            self.source, self.checksum_data.initial_source_checksum
        )
        if not ok:
            if current is not None:
                error = f"Source file has changed since operation was created: {self.source}"
            return False, f"Source file validation failed: {error}"
        if self.checksum_data.initial_source_checksum is None:
            self.checksum_data.initial_source_checksum = current
            self.checksum_data.source_checksum = current

        if path_exists(self.target):
            return self._check_existing_target()
        if not self.options["create_parent_dirs"]:
            parent = missing_parent(self.target)
            if parent is not None:
                return (
                    False,
                    f"Parent directory of target ('{parent}') does not exist "
                    "and create_parent_dirs is false.",
                )
        return True, None

    def execute(self) -> OperationResult:
        self.logger.info(f"Copying {self.source} -> {self.target}")
        if self.source is None or self.target is None:
            return False, "Source and target paths must be specified for CopyFileOperation"
        if path_exists(self.target):
            ok, error = self._check_existing_target()
            if not ok:
                return False, error

        if self.options["create_parent_dirs"]:
            ok, error = make_parent_dirs(self.target)
            if not ok:
                return False, error

        try:
            copy_with_attributes(self.source, self.target, self.options["preserve_attributes"])
        except OSError as e:
            return False, f"Failed to copy file from '{self.source}' to '{self.target}': {e}"

        digest, error = self._hasher.calculate(self.target)
        if digest is None:
            self._discard_copy()
            return False, f"Failed to calculate checksum for copied file '{self.target}': {error}"

        if self.options["verify_checksum"]:
            expected = self.checksum_data.initial_source_checksum
            if expected is not None and digest != expected:
                self._discard_copy()
                return (
                    False,
                    f"Checksum mismatch after copying '{self.source}' to '{self.target}': "
                    f"expected {expected}, got {digest}",
                )

        self.checksum_data.target_checksum = digest
        self.performed = True
        self.logger.debug(f"Target checksum stored for {self.target}: {digest}")
        return True, None

    def _discard_copy(self) -> None:
        try:
            Path(self.target).unlink()
        except OSError as e:
            self.logger.warning(f"Could not remove partial copy '{self.target}': {e}")

    def undo(self) -> OperationResult:
        self.logger.info(f"Undoing copy to {self.target}")
        if self.target is None or not path_exists(self.target):
            self.logger.info(f"Copied file '{self.target}' is already gone; nothing to undo")
            self.performed = False
            return True, None

        if self.checksum_data.target_checksum is None:
            return False, f"No target checksum recorded for '{self.target}', cannot safely undo."

        current, error = self._hasher.calculate(self.target)
        if current is None:
            return False, f"Failed to calculate checksum for '{self.target}' during undo: {error}"
        if current != self.checksum_data.target_checksum:
            return (
                False,
                f"Copied file '{self.target}' has changed since operation "
                "(checksum mismatch), cannot safely undo.",
            )

        try:
            self.target.unlink()
        except OSError as e:
            return False, f"Failed to delete copied file '{self.target}' during undo: {e}"
        self.performed = False
        return True, None
