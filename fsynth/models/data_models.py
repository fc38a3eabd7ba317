"""
Core data models for fsynth.

This module contains the following dataclasses:
- ChecksumData: Digests an operation records about the files it touches
- ProcessorOptions: Flags controlling a Processor run
- ProcessorError: An error recorded by the Processor, tagged by phase
- ExecutionConfig: Caller-facing configuration of an execution run
- ErrorEntry: A reported error with its operation index and type
- Results: Aggregated outcome of an execution run
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .enums import ExecutionModel, OnError, OperationType, Phase, Severity


@dataclass
class ChecksumData:
    """SHA-256 digests recorded by an operation, keyed by role."""
    source_checksum: Optional[str] = None          # Last observed source digest
    initial_source_checksum: Optional[str] = None  # Source digest when the op was planned
    target_checksum: Optional[str] = None          # Digest of the file the op wrote
    original_checksum: Optional[str] = None        # Digest of a file before deletion
    final_target_checksum: Optional[str] = None    # Digest of a file after a move


@dataclass
class ProcessorOptions:
    """Execution flags for a Processor run."""
    validate_first: bool = False    # Validate every op before executing any
    best_effort: bool = False       # Keep going after failures
    transactional: bool = False     # Roll back executed ops on failure
    verify_checksums: bool = False  # Re-hash recorded outputs after execute
    force: bool = False             # With validate_first, execute despite failures


@dataclass
class ProcessorError:
    """An error recorded during a Processor run."""
    operation: Any                  # The Operation that failed
    phase: Phase                    # Stage the failure happened in
    message: str                    # Error message returned by the operation


@dataclass
class ExecutionConfig:
    """Configuration for ExecutionRunner.execute()."""
    model: ExecutionModel = ExecutionModel.STANDARD
    on_error: OnError = OnError.STOP
    dry_run: bool = False
    log_level: Optional[str] = None

    def __post_init__(self) -> None:
        """Coerce string values into their enums.

        Raises:
            ValueError: If model or on_error is not a recognised value.
        """
        if not isinstance(self.model, ExecutionModel):
            try:
                self.model = ExecutionModel(self.model)
            except ValueError:
                valid = ", ".join(m.value for m in ExecutionModel)
                raise ValueError(f"Unknown execution model '{self.model}' (expected one of: {valid})")
        if not isinstance(self.on_error, OnError):
            try:
                self.on_error = OnError(self.on_error)
            except ValueError:
                valid = ", ".join(o.value for o in OnError)
                raise ValueError(f"Unknown on_error value '{self.on_error}' (expected one of: {valid})")


@dataclass
class ErrorEntry:
    """A reported error tied to the queue position of its operation."""
    operation_index: int                     # 0-based position in the queue, -1 if unknown
    operation_type: Optional[OperationType]  # Variant of the failing operation
    message: str                             # Human-readable error message
    severity: Severity = Severity.ERROR      # ERROR or WARNING
    phase: Optional[Phase] = None            # Processor phase, None for dry runs


@dataclass
class Results:
    """Outcome of an ExecutionRunner run."""
    success: bool = True
    errors: List[ErrorEntry] = field(default_factory=list)
    executed_count: int = 0
    skipped_count: int = 0
    rollback_count: int = 0
    log: List[str] = field(default_factory=list)
    dry_run: bool = False
    model: ExecutionModel = ExecutionModel.STANDARD
    duration: float = 0.0  # Seconds

    def is_success(self) -> bool:
        return self.success

    def get_errors(self) -> List[ErrorEntry]:
        return list(self.errors)

    def get_log(self) -> List[str]:
        return list(self.log)

    def add_error(
        self,
        operation_index: int,
        operation_type: Optional[OperationType],
        message: str,
        severity: Severity = Severity.ERROR,
        phase: Optional[Phase] = None,
    ) -> None:
        """Append an error entry; ERROR severity marks the run as failed."""
        self.errors.append(
            ErrorEntry(
                operation_index=operation_index,
                operation_type=operation_type,
                message=message,
                severity=severity,
                phase=phase,
            )
        )
        if severity is Severity.ERROR:
            self.success = False

    def add_log(self, message: str) -> None:
        self.log.append(message)

    @property
    def error_count(self) -> int:
        """Number of ERROR-severity entries."""
        return sum(1 for entry in self.errors if entry.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Number of WARNING-severity entries."""
        return sum(1 for entry in self.errors if entry.severity is Severity.WARNING)
