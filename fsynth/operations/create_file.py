"""Create a new file with given content."""

import os
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
from .permissions import is_writable, set_mode


class CreateFileOperation(Operation):
    """
    Creates ``target`` exclusively and writes ``content`` into it.

    String content is encoded as UTF-8; bytes are written unchanged. The
    digest of the written file is recorded so undo() refuses to delete a file
    that was edited after creation.
    """

    operation_type = OperationType.CREATE_FILE
    DEFAULT_OPTIONS: Mapping[str, Any] = {
        "content": "",
        "mode": None,
        "create_parent_dirs": False,
    }

    def __init__(
        self,
        target: Optional[PathLike],
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(None, target, options, **kwargs)

    def _content_bytes(self) -> Optional[bytes]:
        content = self.options["content"]
        if isinstance(content, bytes):
            return content
        if isinstance(content, str):
            return content.encode("utf-8")
        return None

    def validate(self) -> OperationResult:
        self.logger.debug(f"Validating create file {self.target}")
        if self.target is None:
            return False, "Target path not specified for CreateFileOperation"
        if path_exists(self.target):
            return False, f"File already exists: {self.target}"
        if self._content_bytes() is None:
            content_type = type(self.options["content"]).__name__
            return False, f"Content must be str or bytes, got {content_type}"
        if not self.options["create_parent_dirs"]:
            parent = missing_parent(self.target)
            if parent is not None:
                return (
                    False,
                    f"Parent directory '{parent}' does not exist and create_parent_dirs is false.",
                )
        return True, None

    def execute(self) -> OperationResult:
        self.logger.info(f"Creating file {self.target}")
        if self.target is None:
            return False, "Target path not specified for CreateFileOperation"
        if path_exists(self.target):
            return False, f"File already exists: {self.target}"
        data = self._content_bytes()
        if data is None:
            return False, f"Content must be str or bytes, got {type(self.options['content']).__name__}"

        parent = self.target.parent
        if parent.is_dir() and not is_writable(parent):
            return False, f"Parent directory '{parent}' is not writable."
        if self.options["create_parent_dirs"]:
            ok, error = make_parent_dirs(self.target)
            if not ok:
                return False, error

        try:
            with open(self.target, "xb") as f:
                f.write(data)
        except FileExistsError:
            return False, f"File already exists: {self.target}"
        except OSError as e:
            return False, f"Failed to write file '{self.target}': {e}"

        # Digest before chmod so a read-protecting mode cannot block hashing
        digest, error = self._hasher.calculate(self.target)
        if digest is None:
            try:
                self.target.unlink()
            except OSError as e:
                self.logger.warning(f"Could not remove '{self.target}' after checksum failure: {e}")
            return False, f"Failed to calculate checksum for created file '{self.target}': {error}"
        self.checksum_data.target_checksum = digest
        self.performed = True

        if self.options["mode"] is not None:
            ok, error = set_mode(self.target, self.options["mode"])
            if not ok:
                self.logger.warning(f"File created but mode not applied: {error}")
        return True, None

    def undo(self) -> OperationResult:
        self.logger.info(f"Undoing create file {self.target}")
        if self.target is None or not path_exists(self.target):
            self.performed = False
            return True, None

        stored = self.checksum_data.target_checksum
        if stored is None:
            return False, f"No checksum recorded for '{self.target}', cannot safely undo."
        current, error = self._hasher.calculate(self.target)
        if current is None:
            return False, f"Failed to calculate checksum for '{self.target}' during undo: {error}"
        if current != stored:
            return (
                False,
                f"File '{self.target}' has been modified since creation "
                "(checksum mismatch), cannot safely undo.",
            )

        try:
            os.remove(self.target)
        except OSError as e:
            return False, f"Failed to delete '{self.target}' during undo: {e}"
        self.performed = False
        return True, None
