"""
Load operation plans from JSON files.

A plan file looks like::

    {
      "operations": [
        {"type": "create_directory", "path": "out"},
        {"type": "copy_file", "source": "a.txt", "target": "out/a.txt",
         "options": {"overwrite": true}},
        {"type": "create_file", "path": "out/README", "content": "hello"},
        {"type": "symlink", "source": "a.txt", "target": "out/link"},
        {"type": "move", "source": "b.txt", "target": "out/"},
        {"type": "delete", "path": "old.txt"}
      ]
    }
"""

import json
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Union

from fsynth.models import OperationType
from fsynth.operations import Operation
from fsynth.operations import factories as op
from fsynth.processing import OperationQueue


class PlanError(ValueError):
    """Raised for unreadable or malformed plan files.

    Attributes:
        index: 0-based position of the offending entry, None for file-level errors.
    """

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        self.index = index
        if index is not None:
            message = f"Plan entry {index}: {message}"
        super().__init__(message)


def _resolve(value: Any, base_dir: Optional[Path], index: int, key: str) -> Path:
    if not isinstance(value, str) or not value:
        raise PlanError(f"'{key}' must be a non-empty string", index)
    path = Path(value).expanduser()
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return path


def _require(entry: Mapping[str, Any], index: int, *keys: str) -> Any:
    for key in keys:
        if key in entry:
            return entry[key]
    raise PlanError(f"missing required key '{keys[0]}'", index)


def build_operation(entry: Mapping[str, Any], index: int = 0, base_dir: Optional[Path] = None) -> Operation:
    """
    Build a single operation from a plan entry.

    Raises:
        PlanError: If the entry is malformed or names an unknown type/option.
    """
    if not isinstance(entry, Mapping):
        raise PlanError("entry must be an object", index)
    try:
        op_type = OperationType(entry.get("type"))
    except ValueError:
        valid = ", ".join(t.value for t in OperationType)
        raise PlanError(f"unknown operation type {entry.get('type')!r} (expected one of: {valid})", index)

    options = entry.get("options", {}) or {}
    if not isinstance(options, Mapping):
        raise PlanError("'options' must be an object", index)
    options = dict(options)

    try:
        if op_type is OperationType.COPY_FILE:
            return op.copy_file(
                _resolve(_require(entry, index, "source"), base_dir, index, "source"),
                _resolve(_require(entry, index, "target"), base_dir, index, "target"),
                **options,
            )
        if op_type is OperationType.MOVE:
            return op.move(
                _resolve(_require(entry, index, "source"), base_dir, index, "source"),
                _resolve(_require(entry, index, "target"), base_dir, index, "target"),
                **options,
            )
        if op_type is OperationType.SYMLINK:
            # The link value is stored as written; only the link location is resolved
            link_value = _require(entry, index, "source")
            if not isinstance(link_value, str) or not link_value:
                raise PlanError("'source' must be a non-empty string", index)
            link_path = _resolve(_require(entry, index, "target", "path"), base_dir, index, "target")
            return op.symlink(link_value, link_path, **options)

        path = _resolve(_require(entry, index, "path", "target"), base_dir, index, "path")
        if op_type is OperationType.CREATE_FILE:
            content = entry.get("content", options.pop("content", ""))
            return op.create_file(path, content, **options)
        if op_type is OperationType.CREATE_DIRECTORY:
            return op.create_directory(path, **options)
        return op.delete(path, **options)
    except TypeError as e:
        raise PlanError(str(e), index)
    except PlanError:
        raise
    except ValueError as e:
        raise PlanError(str(e), index)


def build_queue(entries: Sequence[Mapping[str, Any]], base_dir: Optional[Union[str, Path]] = None) -> OperationQueue:
    """Build an OperationQueue from plan entries, preserving their order."""
    base = Path(base_dir) if base_dir is not None else None
    queue = OperationQueue()
    for index, entry in enumerate(entries):
        queue.add(build_operation(entry, index, base))
    return queue


def load_plan(plan_path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None) -> OperationQueue:
    """
    Read a JSON plan file into an OperationQueue.

    Parameters:
        plan_path: Path of the JSON plan.
        base_dir: Directory that relative paths in the plan are resolved
            against. Relative paths are left as written when omitted.

    Raises:
        PlanError: If the file cannot be read, is not valid JSON, or any
            entry is malformed.
    """
    path = Path(plan_path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise PlanError(f"Cannot read plan file {path}: {e}")
    except json.JSONDecodeError as e:
        raise PlanError(f"Invalid JSON in plan file {path}: {e}")

    if isinstance(document, Mapping):
        entries = document.get("operations")
    else:
        entries = document
    if not isinstance(entries, list):
        raise PlanError("Plan must be a list of operations or an object with an 'operations' list")
    return build_queue(entries, base_dir)

