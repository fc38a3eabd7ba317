"""ExecutionRunner: the caller-facing entry point for running a queue.

Example:
    from fsynth import ExecutionConfig, ExecutionRunner, OperationQueue, op

    queue = OperationQueue()
    queue.add(op.create_directory("out"))
    queue.add(op.copy_file("report.txt", "out/report.txt"))

    results = ExecutionRunner().execute(queue, ExecutionConfig(model="transactional"))
    if not results.is_success():
        for entry in results.get_errors():
            print(entry.operation_index, entry.message)
"""

import logging
import time
from typing import Dict, Optional

from fsynth.models import (
    ExecutionConfig,
    ExecutionModel,
    OnError,
    Phase,
    ProcessorOptions,
    Results,
    Severity,
)
from fsynth.operations import Operation
from fsynth.processing import OperationQueue, Processor

# Configure module logger
logger = logging.getLogger("fsynth.orchestration")


class ExecutionRunner:
    """Runs an OperationQueue under an ExecutionConfig and reports Results.

    The runner maps the configured execution model onto ProcessorOptions,
    hands the Processor a snapshot of the queue, and turns processor errors
    into index-tagged ErrorEntry records. Dry runs never call execute().
    """

    def __init__(self, logger_instance: Optional[logging.Logger] = None) -> None:
        self.logger = logger_instance or logger

    @staticmethod
    def processor_options(model: ExecutionModel) -> ProcessorOptions:
        """Translate an execution model into processor flags."""
        return ProcessorOptions(
            validate_first=model is ExecutionModel.VALIDATE_FIRST,
            best_effort=model is ExecutionModel.BEST_EFFORT,
            transactional=model is ExecutionModel.TRANSACTIONAL,
            verify_checksums=True,
            force=False,
        )

    def execute(self, queue: OperationQueue, config: Optional[ExecutionConfig] = None) -> Results:
        """
        Execute (or, in a dry run, validate) every queued operation.

        Parameters:
            queue (OperationQueue): Planned operations. The queue itself is
                never consumed.
            config (ExecutionConfig | None): Model, dry-run and error policy;
                defaults to a standard live run.

        Returns:
            Results: Outcome with counts, error entries and log lines.

        Raises:
            TypeError: If queue is not an OperationQueue.
        """
        if not isinstance(queue, OperationQueue):
            raise TypeError(f"Expected an OperationQueue, got {type(queue).__name__}")
        config = config or ExecutionConfig()

        package_logger = logging.getLogger("fsynth")
        previous_level = package_logger.level
        if config.log_level:
            package_logger.setLevel(config.log_level.upper())

        started = time.monotonic()
        results = Results(dry_run=config.dry_run, model=config.model)
        try:
            results.add_log(
                f"Starting execution with model: {config.model.value}, dry_run: {config.dry_run}"
            )
            if config.dry_run:
                self._dry_run(queue, config, results)
            else:
                self._live_run(queue, config, results)
            results.add_log(
                f"Execution completed. Success: {results.success}, "
                f"Executed: {results.executed_count}, Errors: {results.error_count}"
            )
        finally:
            package_logger.setLevel(previous_level)
        results.duration = time.monotonic() - started
        return results

    def _dry_run(self, queue: OperationQueue, config: ExecutionConfig, results: Results) -> None:
        results.add_log("DRY RUN MODE: Simulating operations without making changes")
        keep_going = (
            config.model is ExecutionModel.BEST_EFFORT or config.on_error is OnError.CONTINUE
        )
        for index, operation in enumerate(queue.get_operations()):
            results.add_log(f"Validating operation {index}: {operation.describe()}")
            ok, error = operation.validate()
            if ok:
                results.add_log("  Validation successful")
                results.executed_count += 1
                continue

            message = error or "Validation failed"
            results.add_error(index, operation.operation_type, message, phase=Phase.VALIDATION)
            results.add_log(f"  Validation failed: {message}")
            self.logger.info(f"Dry run: operation {index} would fail: {message}")
            if not keep_going:
                results.add_log("Stopping due to validation error")
                break
            results.skipped_count += 1

        if config.model is ExecutionModel.BEST_EFFORT:
            results.success = True

    def _live_run(self, queue: OperationQueue, config: ExecutionConfig, results: Results) -> None:
        operations = queue.get_operations()
        positions: Dict[int, int] = {id(op): i for i, op in enumerate(operations)}

        def index_of(operation: Operation) -> int:
            return positions.get(id(operation), -1)

        processor = Processor(self.processor_options(config.model))
        success, errors = processor.process(queue.snapshot())

        for err in errors:
            index = index_of(err.operation)
            results.add_error(
                index,
                getattr(err.operation, "operation_type", None),
                err.message,
                phase=err.phase,
            )
            results.add_log(f"Operation {index} failed during {err.phase.value}: {err.message}")

        for warning in processor.warnings:
            index = index_of(warning.operation)
            results.add_error(
                index,
                getattr(warning.operation, "operation_type", None),
                warning.message,
                severity=Severity.WARNING,
                phase=warning.phase,
            )
            results.add_log(f"Operation {index} warning: {warning.message}")

        results.executed_count = len(processor.executed)
        results.skipped_count = processor.skipped
        if processor.rolled_back:
            results.rollback_count = len(processor.rolled_back)
            results.add_log(f"Rolled back {results.rollback_count} operations")
        results.success = success
