"""Create a symbolic link, optionally replacing an existing file or link."""

import os
from pathlib import Path
from typing import Any, Mapping, Optional

from fsynth.models import ItemType, OperationType

from .base import (
    Operation,
    OperationResult,
    PathLike,
    make_parent_dirs,
    missing_parent,
    path_exists,
)


class SymlinkOperation(Operation):
    """
    Creates a symlink at ``target`` pointing at ``source``.

    The link value is stored verbatim (the target need not exist). With
    ``relative`` the value is rewritten relative to the link's directory.
    A file or symlink replaced under ``overwrite`` is remembered so undo()
    can put it back.
    """

    operation_type = OperationType.SYMLINK
    DEFAULT_OPTIONS: Mapping[str, Any] = {
        "overwrite": False,
        "create_parent_dirs": False,
        "relative": False,
    }

    def __init__(
        self,
        link_target: Optional[PathLike],
        link_path: Optional[PathLike],
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(link_target, link_path, options, **kwargs)
        self.link_value: Optional[str] = None
        if link_target is not None and str(link_target) != "":
            self.link_value = os.fspath(link_target)
            if self.options["relative"] and self.target is not None:
                self.link_value = os.path.relpath(self.link_value, self.target.parent)
        self.overwritten_type: Optional[ItemType] = None
        self.overwritten_content: Optional[bytes] = None
        self.overwritten_mode: Optional[int] = None
        self.overwritten_link: Optional[str] = None

    def validate(self) -> OperationResult:
        self.logger.debug(f"Validating symlink {self.target} -> {self.link_value}")
        if self.target is None:
            return False, "Link path not specified for SymlinkOperation"
        if self.link_value is None:
            return False, "Link target not specified for SymlinkOperation"
        if path_exists(self.target):
            if self.target.is_dir() and not self.target.is_symlink():
                return False, f"Link path '{self.target}' is an existing directory."
            if not self.options["overwrite"]:
                return False, f"Link path '{self.target}' exists and overwrite is false."
        elif not self.options["create_parent_dirs"]:
            parent = missing_parent(self.target)
            if parent is not None:
                return (
                    False,
                    f"Parent directory '{parent}' does not exist and create_parent_dirs is false.",
                )
        return True, None

    def execute(self) -> OperationResult:
        self.logger.info(f"Creating symlink {self.target} -> {self.link_value}")
        ok, error = self.validate()
        if not ok:
            return False, error

        if self.options["create_parent_dirs"]:
            ok, error = make_parent_dirs(self.target)
            if not ok:
                return False, error

        if path_exists(self.target):
            ok, error = self._save_overwritten()
            if not ok:
                return False, error
            try:
                os.unlink(self.target)
            except OSError as e:
                return False, f"Failed to remove existing '{self.target}': {e}"

        try:
            os.symlink(self.link_value, self.target)
        except OSError as e:
            message = f"Failed to create symlink '{self.target}': {e}"
            restored, restore_error = self._restore_overwritten()
            if not restored:
                message = f"{message}; additionally failed to restore overwritten item: {restore_error}"
            return False, message
        self.performed = True
        return True, None

    def _save_overwritten(self) -> OperationResult:
        try:
            if self.target.is_symlink():
                self.overwritten_type = ItemType.SYMLINK
                self.overwritten_link = os.readlink(self.target)
            else:
                self.overwritten_type = ItemType.FILE
                self.overwritten_content = self.target.read_bytes()
                self.overwritten_mode = os.stat(self.target).st_mode & 0o7777
        except OSError as e:
            self.overwritten_type = None
            return False, f"Cannot record existing item at '{self.target}' before overwrite: {e}"
        self.logger.debug(f"Recorded overwritten {self.overwritten_type.value} at {self.target}")
        return True, None

    def _restore_overwritten(self) -> OperationResult:
        """Put back the item replaced during execute(), if any."""
        if self.overwritten_type is None:
            return True, None
        target: Path = self.target
        try:
            if self.overwritten_type is ItemType.SYMLINK:
                os.symlink(self.overwritten_link, target)
            else:
                with open(target, "xb") as f:
                    f.write(self.overwritten_content or b"")
                if self.overwritten_mode is not None:
                    os.chmod(target, self.overwritten_mode)
        except OSError as e:
            return False, f"Failed to restore overwritten item at '{target}': {e}"
        self.overwritten_type = None
        return True, None

    def undo(self) -> OperationResult:
        self.logger.info(f"Undoing symlink {self.target}")
        if not self.performed:
            return True, None

        if not path_exists(self.target):
            if self.overwritten_type is None:
                self.performed = False
                return True, None
        elif not self.target.is_symlink():
            return False, f"Path '{self.target}' is no longer a symlink, cannot undo."
        else:
            try:
                os.unlink(self.target)
            except OSError as e:
                return False, f"Failed to remove symlink '{self.target}': {e}"

        ok, error = self._restore_overwritten()
        if not ok:
            return False, error
        self.performed = False
        return True, None

    def describe(self) -> str:
        return f"{self.operation_type.value}: {self.target} -> {self.link_value}"
