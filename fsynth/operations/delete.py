"""
Delete a file, an empty directory or a symlink.

validate() snapshots what is about to disappear (file bytes and digest, or the
symlink's target string) so that undo() can put it back. Recursive deletion of
directory contents is not supported: a non-empty directory passes validation
with ``is_recursive`` but execute() fails on ``rmdir``.
"""

import os
import stat
from typing import Any, Mapping, Optional

from fsynth.models import ItemType, OperationType

from .base import Operation, OperationResult, PathLike, path_exists


class DeleteOperation(Operation):
    """Removes the item at ``path``.

    Attributes:
        item_type: Kind of item found at validation time, None until validated.
        original_content: Bytes of a deleted file (b"" if it was unreadable).
        original_mode: Permission bits of a deleted file.
        link_target: Target string of a deleted symlink.
    """

    operation_type = OperationType.DELETE
    DEFAULT_OPTIONS: Mapping[str, Any] = {"is_recursive": False}

    def __init__(
        self,
        path: Optional[PathLike],
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(path, path, options, **kwargs)
        self.item_type: Optional[ItemType] = None
        self.original_content: Optional[bytes] = None
        self.original_mode: Optional[int] = None
        self.link_target: Optional[str] = None

    def validate(self) -> OperationResult:
        self.logger.debug(f"Validating delete {self.target}")
        if self.target is None:
            return False, "Path not specified for DeleteOperation"
        if not path_exists(self.target):
            return False, f"Path does not exist: {self.target}"

        if self.target.is_symlink():
            self.item_type = ItemType.SYMLINK
            try:
                self.link_target = os.readlink(self.target)
            except OSError as e:
                self.link_target = None
                self.logger.warning(f"Could not read symlink target of '{self.target}': {e}")
            return True, None

        if self.target.is_dir():
            self.item_type = ItemType.DIRECTORY
            try:
                has_entries = any(self.target.iterdir())
            except OSError as e:
                return False, f"Cannot list directory '{self.target}': {e}"
            if has_entries:
                if not self.options["is_recursive"]:
                    return (
                        False,
                        f"Directory '{self.target}' is not empty and is_recursive is false.",
                    )
                self.logger.warning(
                    f"Recursive delete of '{self.target}' requested; "
                    "only empty directories can be removed"
                )
            return True, None

        self.item_type = ItemType.FILE
        try:
            self.original_content = self.target.read_bytes()
            self.original_mode = stat.S_IMODE(os.stat(self.target).st_mode)
        except OSError as e:
            self.original_content = b""
            self.checksum_data.original_checksum = None
            self.logger.warning(f"Could not read '{self.target}' before deletion, undo will fail: {e}")
            return True, None
        digest, error = self._hasher.calculate(self.target)
        if digest is None:
            self.logger.warning(f"Could not checksum '{self.target}' before deletion: {error}")
        self.checksum_data.original_checksum = digest
        return True, None

    def execute(self) -> OperationResult:
        self.logger.info(f"Deleting {self.target}")
        if self.target is None:
            return False, "Path not specified for DeleteOperation"
        if not path_exists(self.target):
            self.logger.info(f"Path already absent, nothing to delete: {self.target}")
            self.performed = False
            return True, None
        if self.item_type is None:
            ok, error = self.validate()
            if not ok:
                return False, error

        try:
            if self.item_type is ItemType.DIRECTORY:
                os.rmdir(self.target)
            else:
                os.unlink(self.target)
        except OSError as e:
            return False, f"Failed to delete '{self.target}': {e}"
        self.performed = True
        return True, None

    def undo(self) -> OperationResult:
        self.logger.info(f"Undoing delete of {self.target}")
        if not self.performed:
            return True, None
        if path_exists(self.target):
            return False, f"Path '{self.target}' is occupied, cannot restore deleted item."

        if self.item_type is ItemType.DIRECTORY:
            try:
                os.mkdir(self.target)
            except OSError as e:
                return False, f"Failed to recreate directory '{self.target}': {e}"
        elif self.item_type is ItemType.SYMLINK:
            if self.link_target is None:
                return False, f"Symlink target of '{self.target}' was not recorded, cannot restore."
            try:
                os.symlink(self.link_target, self.target)
            except OSError as e:
                return False, f"Failed to recreate symlink '{self.target}': {e}"
        else:
            ok, error = self._restore_file()
            if not ok:
                return False, error

        self.performed = False
        return True, None

    def _restore_file(self) -> OperationResult:
        if self.checksum_data.original_checksum is None or self.original_content is None:
            return False, f"Original content of '{self.target}' was not recorded, cannot restore."
        try:
            with open(self.target, "xb") as f:
                f.write(self.original_content)
        except OSError as e:
            return False, f"Failed to restore file '{self.target}': {e}"
        if self.original_mode is not None:
            try:
                os.chmod(self.target, self.original_mode)
            except OSError as e:
                self.logger.warning(f"Restored '{self.target}' without its original mode: {e}")

        digest, _ = self._hasher.calculate(self.target)
        if digest != self.checksum_data.original_checksum:
            self.logger.warning(f"Restored file '{self.target}' does not match its original checksum")
        return True, None
