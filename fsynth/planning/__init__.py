"""Planning package for fsynth.

- load_plan: Read a JSON plan file into an OperationQueue
- build_queue / build_operation: Build operations from plan entries
- PlanError: Malformed or unreadable plan
"""

from .plan_loader import PlanError, build_operation, build_queue, load_plan

__all__ = ["PlanError", "build_operation", "build_queue", "load_plan"]
