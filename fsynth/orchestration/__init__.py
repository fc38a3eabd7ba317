"""Orchestration package for fsynth.

- ExecutionRunner: Runs an OperationQueue under an ExecutionConfig.
- RunLogger: Structured run log files.
"""

from fsynth.orchestration.execution_runner import ExecutionRunner
from fsynth.orchestration.run_logger import RunLogger

__all__ = ["ExecutionRunner", "RunLogger"]
