"""Create a directory, optionally with its ancestors."""

import os
from typing import Any, Mapping, Optional

from fsynth.models import OperationType

from .base import Operation, OperationResult, PathLike, missing_parent, path_exists
from .permissions import parse_mode


class CreateDirectoryOperation(Operation):
    """
    Creates the directory ``target``.

    An already existing directory is accepted as a no-op unless ``exclusive``
    is set. undo() only removes a directory this instance created, and only
    while it is still empty.
    """

    operation_type = OperationType.CREATE_DIRECTORY
    DEFAULT_OPTIONS: Mapping[str, Any] = {
        "create_parent_dirs": True,
        "exclusive": False,
        "mode": None,
    }

    def __init__(
        self,
        target: Optional[PathLike],
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(None, target, options, **kwargs)

    def _check(self) -> OperationResult:
        if self.target is None:
            return False, "Target path not specified for CreateDirectoryOperation"
        if path_exists(self.target) and not self.target.is_dir():
            return False, f"Path exists but is not a directory: {self.target}"
        if self.target.is_dir():
            if self.options["exclusive"]:
                return False, f"Directory already exists and exclusive is true: {self.target}"
            return True, None
        if not self.options["create_parent_dirs"]:
            parent = missing_parent(self.target)
            if parent is not None:
                return (
                    False,
                    f"Parent directory '{parent}' does not exist and create_parent_dirs is false.",
                )
        if self.options["mode"] is not None:
            try:
                parse_mode(self.options["mode"])
            except ValueError as e:
                return False, str(e)
        return True, None

    def validate(self) -> OperationResult:
        self.logger.debug(f"Validating create directory {self.target}")
        return self._check()

    def execute(self) -> OperationResult:
        self.logger.info(f"Creating directory {self.target}")
        ok, error = self._check()
        if not ok:
            return False, error
        if self.target.is_dir():
            self.logger.debug(f"Directory already exists, nothing to do: {self.target}")
            self.performed = False
            return True, None

        try:
            if self.options["create_parent_dirs"]:
                self.target.mkdir(parents=True)
            else:
                self.target.mkdir()
        except OSError as e:
            return False, f"Failed to create directory '{self.target}': {e}"
        self.performed = True

        if self.options["mode"] is not None:
            try:
                os.chmod(self.target, parse_mode(self.options["mode"]))
            except OSError as e:
                self.logger.warning(f"Directory created but mode not applied to '{self.target}': {e}")
        return True, None

    def undo(self) -> OperationResult:
        self.logger.info(f"Undoing create directory {self.target}")
        if not self.performed:
            return True, None
        if not path_exists(self.target):
            return False, f"Directory '{self.target}' no longer exists, cannot undo."
        if self.target.is_symlink() or not self.target.is_dir():
            return False, f"Path '{self.target}' is no longer a directory, cannot undo."
        try:
            if any(self.target.iterdir()):
                return False, f"Directory '{self.target}' is not empty, cannot undo."
            self.target.rmdir()
        except OSError as e:
            return False, f"Failed to remove directory '{self.target}' during undo: {e}"
        self.performed = False
        return True, None
