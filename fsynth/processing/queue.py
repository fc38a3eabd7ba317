"""
Operation queues.

Queue is a plain FIFO over a dict indexed by two counters, so enqueue and
dequeue never shift elements. OperationQueue is the caller-facing container
of planned operations; the Processor consumes a snapshot of it.
"""

from typing import Any, Dict, List, Optional

from fsynth.operations import Operation


class Queue:
    """First-in first-out queue with O(1) enqueue and dequeue."""

    def __init__(self) -> None:
        self._items: Dict[int, Any] = {}
        self._front = 0
        self._back = 0

    def enqueue(self, item: Any) -> None:
        self._items[self._back] = item
        self._back += 1

    def dequeue(self) -> Optional[Any]:
        """Remove and return the front item, or None when empty."""
        if self.is_empty():
            return None
        item = self._items.pop(self._front)
        self._front += 1
        if self._front == self._back:
            # Drained: restart the counters
            self._front = 0
            self._back = 0
        return item

    def peek(self) -> Optional[Any]:
        if self.is_empty():
            return None
        return self._items[self._front]

    def is_empty(self) -> bool:
        return self._front == self._back

    def size(self) -> int:
        return self._back - self._front

    def clear(self) -> None:
        self._items.clear()
        self._front = 0
        self._back = 0

    def __len__(self) -> int:
        return self.size()


class OperationQueue:
    """Ordered list of planned operations; insertion order is execution order."""

    def __init__(self) -> None:
        self._operations: List[Operation] = []

    def add(self, operation: Operation) -> "OperationQueue":
        """
        Append an operation.

        Returns:
            The queue itself, so calls can be chained.

        Raises:
            TypeError: If operation is not an Operation.
        """
        if not isinstance(operation, Operation):
            raise TypeError(f"Expected an Operation, got {type(operation).__name__}")
        self._operations.append(operation)
        return self

    def remove(self, index: int) -> Operation:
        """
        Remove and return the operation at a 0-based index.

        Raises:
            IndexError: If index is out of range.
        """
        if not 0 <= index < len(self._operations):
            raise IndexError(
                f"Operation index {index} out of range (queue holds {len(self._operations)})"
            )
        return self._operations.pop(index)

    def get_operations(self) -> List[Operation]:
        return list(self._operations)

    def clear(self) -> None:
        self._operations.clear()

    def size(self) -> int:
        return len(self._operations)

    def snapshot(self) -> Queue:
        """Return a working Queue holding the current operations in order."""
        working = Queue()
        for operation in self._operations:
            working.enqueue(operation)
        return working

    def __len__(self) -> int:
        return len(self._operations)

    def __iter__(self):
        return iter(list(self._operations))
