"""fsynth - Filesystem operation planning and execution.

Build a queue of intended filesystem changes without touching the disk, then
execute it under a standard, validate-first, best-effort or transactional
model, or validate it in a dry run.

Example:
    >>> from fsynth import ExecutionConfig, ExecutionRunner, OperationQueue, op
    >>> queue = OperationQueue()
    >>> queue.add(op.create_directory("build"))
    >>> queue.add(op.create_file("build/VERSION", content="1.0\\n"))
    >>> results = ExecutionRunner().execute(queue, ExecutionConfig(model="transactional"))
"""

__version__ = "0.1.0"

from .checksum import FileHasher, calculate_sha256
from .models import (
    ChecksumData,
    ErrorEntry,
    ExecutionConfig,
    ExecutionModel,
    ItemType,
    OnError,
    OperationType,
    Phase,
    ProcessorError,
    ProcessorOptions,
    ProcessorState,
    Results,
    Severity,
)
from .operations import (
    CopyFileOperation,
    CreateDirectoryOperation,
    CreateFileOperation,
    DeleteOperation,
    MoveOperation,
    Operation,
    SymlinkOperation,
)
from .operations import factories as op
from .orchestration import ExecutionRunner, RunLogger
from .planning import PlanError, load_plan
from .processing import OperationQueue, Processor, Queue

__all__ = [
    "__version__",
    "op",
    "FileHasher",
    "calculate_sha256",
    "ChecksumData",
    "ErrorEntry",
    "ExecutionConfig",
    "ExecutionModel",
    "ItemType",
    "OnError",
    "OperationType",
    "Phase",
    "ProcessorError",
    "ProcessorOptions",
    "ProcessorState",
    "Results",
    "Severity",
    "Operation",
    "CopyFileOperation",
    "CreateDirectoryOperation",
    "CreateFileOperation",
    "DeleteOperation",
    "MoveOperation",
    "SymlinkOperation",
    "ExecutionRunner",
    "RunLogger",
    "PlanError",
    "load_plan",
    "OperationQueue",
    "Processor",
    "Queue",
]


def main() -> None:
    """Entry point for the fsynth CLI application."""
    from fsynth.cli import app
    app()
