"""
Models package for fsynth.

This package provides convenient imports for all data models:
- OperationType, ItemType, Phase, ExecutionModel, OnError, ProcessorState,
  Severity: Enumerations
- ChecksumData: Digests recorded by an operation
- ProcessorOptions: Processor run flags
- ProcessorError: Phase-tagged processor error
- ExecutionConfig: Execution run configuration
- ErrorEntry: Reported error
- Results: Run outcome
"""

from .enums import (
    ExecutionModel,
    ItemType,
    OnError,
    OperationType,
    Phase,
    ProcessorState,
    Severity,
)
from .data_models import (
    ChecksumData,
    ErrorEntry,
    ExecutionConfig,
    ProcessorError,
    ProcessorOptions,
    Results,
)

__all__ = [
    "ExecutionModel",
    "ItemType",
    "OnError",
    "OperationType",
    "Phase",
    "ProcessorState",
    "Severity",
    "ChecksumData",
    "ErrorEntry",
    "ExecutionConfig",
    "ProcessorError",
    "ProcessorOptions",
    "Results",
]
