"""
Factory functions for building operations.

These are the public constructors, also reachable as ``fsynth.op``::

    from fsynth import op
    queue.add(op.copy_file("a.txt", "b.txt", overwrite=True))
"""

from typing import Any, Dict, Type

from fsynth.models import OperationType

from .base import Operation, PathLike
from .copy_file import CopyFileOperation
from .create_directory import CreateDirectoryOperation
from .create_file import CreateFileOperation
from .delete import DeleteOperation
from .move import MoveOperation
from .symlink import SymlinkOperation

OPERATION_CLASSES: Dict[OperationType, Type[Operation]] = {
    OperationType.COPY_FILE: CopyFileOperation,
    OperationType.CREATE_DIRECTORY: CreateDirectoryOperation,
    OperationType.CREATE_FILE: CreateFileOperation,
    OperationType.SYMLINK: SymlinkOperation,
    OperationType.MOVE: MoveOperation,
    OperationType.DELETE: DeleteOperation,
}


def copy_file(source: PathLike, target: PathLike, **options: Any) -> CopyFileOperation:
    """Copy a regular file. See CopyFileOperation for options."""
    return CopyFileOperation(source, target, options)


def create_directory(path: PathLike, **options: Any) -> CreateDirectoryOperation:
    """Create a directory (parents included by default)."""
    return CreateDirectoryOperation(path, options)


def create_file(path: PathLike, content: Any = "", **options: Any) -> CreateFileOperation:
    """Create a new file containing content (str or bytes)."""
    options["content"] = content
    return CreateFileOperation(path, options)


def symlink(link_target: PathLike, link_path: PathLike, **options: Any) -> SymlinkOperation:
    """Create link_path pointing at link_target."""
    return SymlinkOperation(link_target, link_path, options)


def move(source: PathLike, target: PathLike, **options: Any) -> MoveOperation:
    """Move a file, directory or symlink."""
    return MoveOperation(source, target, options)


move_file = move


def delete(path: PathLike, **options: Any) -> DeleteOperation:
    """Delete a file, symlink or empty directory."""
    return DeleteOperation(path, options)


def delete_file(path: PathLike) -> DeleteOperation:
    return DeleteOperation(path)


def delete_directory(path: PathLike, recursive: bool = False) -> DeleteOperation:
    return DeleteOperation(path, {"is_recursive": recursive})
