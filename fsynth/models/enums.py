"""
Enumerations shared by operations, the processor and the reporting layer.

- OperationType: Closed set of operation variants
- ItemType: Kind of filesystem item recorded by a delete operation
- Phase: Stage of a processor run in which an error occurred
- ExecutionModel: Execution policy selected for a run
- OnError: Dry-run reaction to a validation error
- ProcessorState: Lifecycle state of a processor run
- Severity: Severity attached to reported errors
"""

from enum import Enum


class OperationType(Enum):
    """Tags the six operation variants."""
    COPY_FILE = "copy_file"
    CREATE_DIRECTORY = "create_directory"
    CREATE_FILE = "create_file"
    SYMLINK = "symlink"
    MOVE = "move"
    DELETE = "delete"


class ItemType(Enum):
    """Kind of item found at a path when it was inspected."""
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


class Phase(Enum):
    """Stage of a processor run."""
    VALIDATION = "validation"
    EXECUTION = "execution"
    ROLLBACK = "rollback"


class ExecutionModel(Enum):
    """Execution policy for a queue of operations."""
    STANDARD = "standard"              # Validate+execute each op, stop on first error
    VALIDATE_FIRST = "validate_first"  # Validate everything before executing anything
    BEST_EFFORT = "best_effort"        # Skip failing ops and keep going
    TRANSACTIONAL = "transactional"    # Undo executed ops in reverse on failure


class OnError(Enum):
    """What a dry run does after a validation error."""
    STOP = "stop"
    CONTINUE = "continue"


class ProcessorState(Enum):
    """Lifecycle of a single Processor.process() call."""
    PENDING = "pending"
    VALIDATING = "validating"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"
    ROLLING_BACK = "rolling_back"
    ROLLED_BACK = "rolled_back"


class Severity(Enum):
    """Severity of a reported error entry."""
    WARNING = "warning"
    ERROR = "error"
