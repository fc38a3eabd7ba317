"""Processing package for fsynth.

- Queue: FIFO with O(1) enqueue/dequeue
- OperationQueue: Ordered container of planned operations
- Processor: Runs a queue under validate_first/best_effort/transactional rules
"""

from .processor import Processor
from .queue import OperationQueue, Queue

__all__ = ["OperationQueue", "Processor", "Queue"]
