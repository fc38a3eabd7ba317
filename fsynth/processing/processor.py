"""
Processor: runs a queue of operations under one execution policy.

The processor never raises for filesystem problems. Every failure becomes a
ProcessorError tagged with the phase it happened in, and process() reports
(success, errors).
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union

from fsynth.models import Phase, ProcessorError, ProcessorOptions, ProcessorState
from fsynth.operations import Operation

from .queue import OperationQueue, Queue

# Configure module logger
logger = logging.getLogger("fsynth.processing")

QueueLike = Union[Queue, OperationQueue, Iterable[Operation]]


class Processor:
    """
    Executes operations in order, validating, skipping or rolling back
    according to its ProcessorOptions.

    Attributes:
        options: Flags for this processor.
        executed: Operations whose execute() succeeded, in execution order.
        errors: Recorded failures, in the order they happened.
        rolled_back: Operations whose undo() was attempted, in undo order.
        warnings: Post-execute checksum verification problems.
        skipped: Number of operations skipped under best_effort.
        state: Current ProcessorState.
    """

    def __init__(
        self,
        options: Optional[ProcessorOptions] = None,
        logger_instance: Optional[logging.Logger] = None,
    ) -> None:
        self.options = options or ProcessorOptions()
        self.logger = logger_instance or logger
        self._reset()

    def _reset(self) -> None:
        self.executed: List[Operation] = []
        self.errors: List[ProcessorError] = []
        self.rolled_back: List[Operation] = []
        self.warnings: List[ProcessorError] = []
        self.skipped = 0
        self.state = ProcessorState.PENDING

    @property
    def transactional(self) -> bool:
        return self.options.transactional

    @property
    def best_effort(self) -> bool:
        # A transactional run always stops and unwinds on failure
        return self.options.best_effort and not self.options.transactional

    @staticmethod
    def _drain(queue: QueueLike) -> List[Operation]:
        if isinstance(queue, OperationQueue):
            queue = queue.snapshot()
        if isinstance(queue, Queue):
            operations = []
            while not queue.is_empty():
                operations.append(queue.dequeue())
            return operations
        return list(queue)

    def _record(self, operation: Operation, phase: Phase, message: Optional[str]) -> None:
        message = message or f"{phase.value.capitalize()} failed"
        self.logger.error(f"{phase.value} failed for {operation.describe()}: {message}")
        self.errors.append(ProcessorError(operation=operation, phase=phase, message=message))

    def process(self, queue: QueueLike) -> Tuple[bool, List[ProcessorError]]:
        """
        Run every operation in queue.

        Parameters:
            queue: A working Queue (consumed), an OperationQueue (a snapshot
                is taken) or any iterable of operations.

        Returns:
            (success, errors). errors is a copy of self.errors.
        """
        self._reset()
        operations = self._drain(queue)
        self.logger.info(f"Processing {len(operations)} operation(s) with {self.options}")

        if self.options.validate_first:
            if not self._validate_all(operations):
                self.state = ProcessorState.FAILED
                return False, list(self.errors)
            for operation in operations:
                if not self._execute_one(operation):
                    return False, list(self.errors)
        else:
            for operation in operations:
                self.state = ProcessorState.VALIDATING
                ok, error = operation.validate()
                if not ok:
                    self._record(operation, Phase.VALIDATION, error)
                    if self.best_effort:
                        self.skipped += 1
                        continue
                    self._stop()
                    return False, list(self.errors)
                if not self._execute_one(operation):
                    return False, list(self.errors)

        self.state = ProcessorState.COMPLETED
        success = not self.errors or self.best_effort
        self.logger.info(
            f"Processing finished: {len(self.executed)} executed, "
            f"{self.skipped} skipped, {len(self.errors)} error(s)"
        )
        return success, list(self.errors)

    def _validate_all(self, operations: List[Operation]) -> bool:
        """Validate everything up front. False means the run must abort."""
        self.state = ProcessorState.VALIDATING
        for operation in operations:
            ok, error = operation.validate()
            if ok:
                continue
            self._record(operation, Phase.VALIDATION, error)
            if not self.options.force:
                return False
        if self.errors:
            self.logger.warning(f"Executing despite {len(self.errors)} validation failure(s) (force)")
        return True

    def _execute_one(self, operation: Operation) -> bool:
        """Execute one operation. False means the run has stopped."""
        self.state = ProcessorState.EXECUTING
        ok, error = operation.execute()
        if not ok:
            self._record(operation, Phase.EXECUTION, error)
            if self.best_effort:
                self.skipped += 1
                return True
            self._stop()
            return False

        self.executed.append(operation)
        if self.options.verify_checksums:
            verified, problem = operation.verify_checksum()
            if not verified:
                self.logger.warning(f"Checksum verification failed for {operation.describe()}: {problem}")
                self.warnings.append(
                    ProcessorError(operation=operation, phase=Phase.EXECUTION, message=problem)
                )
        return True

    def _stop(self) -> None:
        if self.transactional:
            self.rollback()
        else:
            self.state = ProcessorState.FAILED

    def rollback(self) -> None:
        """Undo every executed operation in reverse order.

        Undo failures are recorded with the rollback phase; the unwind always
        continues to the first operation.
        """
        self.state = ProcessorState.ROLLING_BACK
        self.logger.warning(f"Rolling back {len(self.executed)} executed operation(s)")
        for operation in reversed(self.executed):
            self.rolled_back.append(operation)
            ok, error = operation.undo()
            if not ok:
                self._record(operation, Phase.ROLLBACK, error)
        self.state = ProcessorState.ROLLED_BACK

    def format_errors(self) -> str:
        """Render recorded errors, one numbered line each."""
        lines = []
        for i, err in enumerate(self.errors, 1):
            operation = err.operation
            op_type = operation.operation_type.value if operation is not None else "unknown"
            source = getattr(operation, "source", None) or "n/a"
            target = getattr(operation, "target", None) or "n/a"
            lines.append(
                f"Error {i} [{err.phase.value} phase]: {err.message} "
                f"(operation: {op_type}, source: {source}, target: {target})"
            )
        return "\n".join(lines)
