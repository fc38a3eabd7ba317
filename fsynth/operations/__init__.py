"""Filesystem operations package for fsynth.

Each operation is planned first and touches the disk only when executed:
- Operation: Abstract base with validate()/execute()/undo()
- CopyFileOperation, CreateFileOperation, CreateDirectoryOperation,
  DeleteOperation, MoveOperation, SymlinkOperation: The six variants
- factories: copy_file(), move(), delete(), ... (exposed as ``fsynth.op``)

Example:
    >>> from fsynth.operations import factories as op
    >>> operation = op.create_file("notes.txt", content="hello")
    >>> ok, error = operation.validate()
    >>> if ok:
    ...     ok, error = operation.execute()
"""

from . import factories
from .base import Operation, OperationResult
from .copy_file import CopyFileOperation
from .create_directory import CreateDirectoryOperation
from .create_file import CreateFileOperation
from .delete import DeleteOperation
from .factories import OPERATION_CLASSES
from .move import MoveOperation
from .symlink import SymlinkOperation

__all__ = [
    "factories",
    "Operation",
    "OperationResult",
    "CopyFileOperation",
    "CreateDirectoryOperation",
    "CreateFileOperation",
    "DeleteOperation",
    "MoveOperation",
    "SymlinkOperation",
    "OPERATION_CLASSES",
]
