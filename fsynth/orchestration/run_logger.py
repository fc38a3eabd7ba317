"""RunLogger: writes a structured record of one execution run to a file.

Sections: header (timestamp, mode, model), plan (one line per queued
operation), results (counts and error entries) and summary.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from fsynth.models import ExecutionModel, Results, Severity
from fsynth.operations import Operation

logger = logging.getLogger("fsynth.orchestration")


class RunLogger:
    """Structured run log file.

    Usage:
        with RunLogger(path, dry_run=False, model=ExecutionModel.TRANSACTIONAL) as run_log:
            run_log.log_header()
            run_log.log_plan(queue.get_operations())
            results = runner.execute(queue, config)
            run_log.log_results(results)
            run_log.log_summary(results)

    Attributes:
        SEPARATOR: Line written between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(
        self,
        log_file_path: Optional[Path] = None,
        dry_run: bool = False,
        model: ExecutionModel = ExecutionModel.STANDARD,
    ) -> None:
        """
        Parameters:
            log_file_path: Destination file. Defaults to a timestamped
                ``fsynth_run_<timestamp>.log`` in the current directory.
            dry_run: Whether the run only validates.
            model: Execution model of the run.

        Raises:
            OSError: If the parent directory is missing or not a directory.
        """
        self._dry_run = dry_run
        self._model = model
        self._started = datetime.now()
        self._handle: Optional[TextIO] = None

        if log_file_path is None:
            stamp = self._started.strftime("%Y-%m-%d_%H-%M-%S")
            self._log_file_path = Path.cwd() / f"fsynth_run_{stamp}.log"
        else:
            self._log_file_path = Path(log_file_path)

        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")

    def __enter__(self) -> "RunLogger":
        try:
            self._handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._handle is not None:
            try:
                self._handle.close()
            except OSError as e:
                logger.warning(f"Error closing run log {self._log_file_path}: {e}")
            finally:
                self._handle = None

    def get_log_path(self) -> Path:
        return self._log_file_path

    def log_header(self) -> None:
        self._section("fsynth - Execution Log")
        self._write(f"Timestamp: {self._timestamp(self._started)}")
        self._write(f"Mode: {'DRY RUN' if self._dry_run else 'LIVE'}")
        self._write(f"Model: {self._model.value}")
        self._write("")

    def log_plan(self, operations: List[Operation]) -> None:
        """Write one numbered line per planned operation."""
        self._section("PLAN")
        self._write(f"Operations queued: {len(operations)}")
        for index, operation in enumerate(operations):
            self._write(f"[{index}] {operation.describe()}", indent=2)
        self._write("")

    def log_results(self, results: Results) -> None:
        """Write counts, error entries and the runner's log lines."""
        self._section("RESULTS")
        verb = "Validated" if results.dry_run else "Executed"
        self._write(f"{verb}: {results.executed_count}")
        self._write(f"Skipped: {results.skipped_count}")
        self._write(f"Rolled back: {results.rollback_count}")
        if results.errors:
            self._write("Errors:")
            for entry in results.errors:
                marker = "!" if entry.severity is Severity.WARNING else "-"
                op_type = entry.operation_type.value if entry.operation_type else "unknown"
                phase = f" [{entry.phase.value}]" if entry.phase else ""
                self._write(
                    f"{marker} #{entry.operation_index} {op_type}{phase}: {entry.message}",
                    indent=2,
                )
        if results.log:
            self._write("Log:")
            for line in results.log:
                self._write(line, indent=2)
        self._write("")

    def log_summary(self, results: Results) -> None:
        self._section("SUMMARY")
        self._write(f"Result: {'SUCCESS' if results.success else 'FAILED'}")
        self._write(f"Errors: {results.error_count}")
        self._write(f"Warnings: {results.warning_count}")
        self._write(f"Duration: {self._format_duration(results.duration)}")
        self._write("")
        self._write(f"Log file: {self._log_file_path}")
        self._write(self.SEPARATOR)

    def _format_duration(self, seconds: float) -> str:
        """Format seconds as '45s', '5m 23s' or '1h 5m 30s'."""
        total = int(seconds)
        if total < 60:
            return f"{total}s"
        hours, rest = divmod(total, 3600)
        minutes, secs = divmod(rest, 60)
        if hours:
            return f"{hours}h {minutes}m {secs}s"
        return f"{minutes}m {secs}s"

    def _timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _section(self, title: str) -> None:
        self._write(self.SEPARATOR)
        self._write(title)
        self._write(self.SEPARATOR)

    def _write(self, text: str, indent: int = 0) -> None:
        if self._handle is None:
            logger.warning(f"Attempted to write to closed run log: {text}")
            return
        try:
            self._handle.write(" " * indent + text + "\n")
        except OSError as e:
            logger.warning(f"Error writing to run log: {e}")
