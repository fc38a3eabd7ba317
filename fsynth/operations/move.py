"""
Move or rename a file, directory or symlink.

Moving a file or symlink onto an existing directory places it inside that
directory under its own name, the way ``mv`` does.
"""

import errno
import os
import shutil
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

from fsynth.models import OperationType

from .base import (
    Operation,
    OperationResult,
    PathLike,
    make_parent_dirs,
    path_exists,
)


def _move_path(source: Path, destination: Path) -> None:
    """
    Rename source to destination, copying across filesystems when needed.

    Raises:
        OSError: If the move fails.
    """
    try:
        os.replace(source, destination)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        if path_exists(destination) and (destination.is_symlink() or not destination.is_dir()):
            os.unlink(destination)
        shutil.move(str(source), str(destination))


class MoveOperation(Operation):
    """Moves ``source`` to ``target``.

    Options:
        overwrite: Replace an existing item at the effective target.
        create_parent_dirs: Create missing ancestors of the effective target.

    Attributes:
        effective_target: Where the item lands, resolved at validate/execute.
        was_directory: The source was a real directory.
        was_symlink: The source was a symlink (moved as a link).
        source_link_target: Link value of a symlink source.
        overwrote_existing: execute() replaced an existing item, which undo()
            cannot bring back.
    """

    operation_type = OperationType.MOVE
    DEFAULT_OPTIONS: Mapping[str, Any] = {
        "overwrite": False,
        "create_parent_dirs": False,
    }

    def __init__(
        self,
        source: Optional[PathLike],
        target: Optional[PathLike],
        options: Optional[Mapping[str, Any]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(source, target, options, **kwargs)
        self.effective_target: Optional[Path] = None
        self.was_directory = False
        self.was_symlink = False
        self.source_link_target: Optional[str] = None
        self.overwrote_existing = False

    def resolve_target(self) -> Path:
        """Return the path the source will occupy after the move."""
        source_is_dir = self.source.is_dir() and not self.source.is_symlink()
        if self.target.is_dir() and path_exists(self.source) and not source_is_dir:
            return self.target / self.source.name
        return self.target

    def _check_existing_target(self, effective: Path) -> OperationResult:
        """Overwrite and type rules for an item already at the effective target."""
        if not self.options["overwrite"]:
            return False, f"Target '{effective}' exists and overwrite is false."
        effective_is_dir = effective.is_dir() and not effective.is_symlink()
        if self.was_directory and not effective_is_dir:
            return False, f"Cannot move directory '{self.source}' onto non-directory '{effective}'."
        if not self.was_directory and effective_is_dir:
            return False, f"Cannot move '{self.source}' onto directory '{effective}'."
        return True, None

    def validate(self) -> OperationResult:
        self.logger.debug(f"Validating move {self.source} -> {self.target}")
        if self.source is None or self.target is None:
            return False, "Source and target paths must be specified for MoveOperation"
        if os.path.abspath(self.source) == os.path.abspath(self.target):
            return False, f"Source and target are the same path: {self.source}"
        if not path_exists(self.source):
            return False, f"Source path does not exist: {self.source}"

        self.was_symlink = self.source.is_symlink()
        self.was_directory = not self.was_symlink and self.source.is_dir()
        if self.was_symlink:
            try:
                self.source_link_target = os.readlink(self.source)
            except OSError as e:
                return False, f"Cannot read symlink '{self.source}': {e}"
        elif not self.was_directory:
            ok, error, current = self._compare_checksum(
                self.source, self.checksum_data.initial_source_checksum
            )
            if not ok:
                return False, f"Source file is not accessible or has changed: {error}"
            self.checksum_data.initial_source_checksum = current
            self.checksum_data.source_checksum = current

        effective = self.resolve_target()
        self.effective_target = effective
        if os.path.abspath(effective) == os.path.abspath(self.source):
            return False, f"Source and target are the same path: {self.source}"

        if path_exists(effective):
            return self._check_existing_target(effective)

        parent = effective.parent
        if path_exists(parent) and not parent.is_dir():
            return False, f"Parent of target '{effective}' is not a directory: {parent}"
        if not parent.is_dir() and not self.options["create_parent_dirs"]:
            return (
                False,
                f"Parent directory '{parent}' does not exist and create_parent_dirs is false.",
            )
        return True, None

    def execute(self) -> OperationResult:
        self.logger.info(f"Moving {self.source} -> {self.target}")
        if self.source is None or self.target is None:
            return False, "Source and target paths must be specified for MoveOperation"
        if not path_exists(self.source):
            return False, f"Source path no longer exists: {self.source}"

        self.was_symlink = self.source.is_symlink()
        self.was_directory = not self.was_symlink and self.source.is_dir()
        if self.was_symlink and self.source_link_target is None:
            try:
                self.source_link_target = os.readlink(self.source)
            except OSError as e:
                return False, f"Cannot read symlink '{self.source}': {e}"

        effective = self.resolve_target()
        self.effective_target = effective
        # The target may have appeared since validate()
        target_exists = path_exists(effective)
        if target_exists:
            ok, error = self._check_existing_target(effective)
            if not ok:
                return False, error
            self.logger.warning(f"Overwriting existing item at '{effective}'")
        self.overwrote_existing = target_exists

        if self.options["create_parent_dirs"]:
            ok, error = make_parent_dirs(effective)
            if not ok:
                return False, error

        try:
            _move_path(self.source, effective)
        except OSError as e:
            return False, f"Failed to move '{self.source}' to '{effective}': {e}"
        self.performed = True

        if not self.was_symlink and effective.is_file():
            digest, error = self._hasher.calculate(effective)
            self.checksum_data.final_target_checksum = digest
            expected = self.checksum_data.initial_source_checksum
            if digest is None:
                self.logger.warning(f"Could not checksum moved file '{effective}': {error}")
            elif expected is not None and digest != expected:
                self.logger.warning(f"Checksum of moved file '{effective}' differs from the source")
        return True, None

    def undo(self) -> OperationResult:
        self.logger.info(f"Undoing move {self.source} -> {self.effective_target}")
        if not self.performed:
            return True, None
        effective = self.effective_target
        if effective is None or not path_exists(effective):
            return False, f"Nothing found at moved location '{effective}', cannot undo."
        if path_exists(self.source):
            return False, f"Original location '{self.source}' is occupied, cannot undo move."
        if self.overwrote_existing:
            self.logger.warning(f"Item overwritten at '{effective}' during the move cannot be restored")

        if self.options["create_parent_dirs"]:
            ok, error = make_parent_dirs(self.source)
            if not ok:
                return False, error

        if self.was_symlink:
            try:
                current_link = os.readlink(effective)
            except OSError:
                current_link = None
            if current_link != self.source_link_target:
                self.logger.warning(f"Symlink '{effective}' changed target since the move")
        elif self.checksum_data.final_target_checksum is not None:
            current, _ = self._hasher.calculate(effective)
            if current != self.checksum_data.final_target_checksum:
                self.logger.warning(f"File '{effective}' changed since the move")

        try:
            _move_path(effective, self.source)
        except OSError as e:
            return False, f"Failed to move '{effective}' back to '{self.source}': {e}"
        self.performed = False
        return True, None

    def _recorded_output(self) -> Optional[Tuple[Path, str]]:
        if self.effective_target is not None and self.checksum_data.final_target_checksum is not None:
            return self.effective_target, self.checksum_data.final_target_checksum
        return None
