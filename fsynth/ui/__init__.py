"""Terminal UI package for fsynth.

- RunTUI: Rich tables and panels for plans and run results.
"""

from .run_tui import RunTUI

__all__ = ["RunTUI"]
