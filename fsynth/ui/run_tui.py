"""Terminal User Interface for fsynth runs.

Example:
    from fsynth.ui import RunTUI

    tui = RunTUI()
    tui.display_plan(queue.get_operations())
    if tui.confirm_execution():
        results = runner.execute(queue, config)
        tui.display_results(results)
"""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from fsynth.models import ErrorEntry, Results, Severity
from fsynth.operations import Operation

OPERATION_STYLES = {
    "copy_file": "cyan",
    "create_directory": "blue",
    "create_file": "green",
    "symlink": "magenta",
    "move": "yellow",
    "delete": "red",
}


class RunTUI:
    """Rich-based display of plans and run results.

    Args:
        console: Optional Rich Console. Pass one backed by a StringIO to
            capture output in tests.

    Attributes:
        console: The Rich Console used for all output.
    """

    MAX_ERRORS_DISPLAYED = 20

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_plan(self, operations: List[Operation], title: str = "Planned Operations") -> None:
        """Render the queued operations as a numbered table."""
        if not operations:
            self.console.print("[yellow]No operations in plan.[/yellow]")
            return

        table = Table(title=title)
        table.add_column("#", justify="right", style="cyan", no_wrap=True)
        table.add_column("Type")
        table.add_column("Source", style="white")
        table.add_column("Target", style="white")
        table.add_column("Options", style="dim")

        for index, operation in enumerate(operations):
            op_type = operation.operation_type.value
            style = OPERATION_STYLES.get(op_type, "white")
            source = getattr(operation, "link_value", None) or operation.source
            if operation.source == operation.target:
                source = None
            table.add_row(
                str(index),
                f"[{style}]{op_type}[/{style}]",
                escape(self._truncate(str(source))) if source is not None else "-",
                escape(self._truncate(str(operation.target))) if operation.target is not None else "-",
                escape(self._format_options(operation)),
            )
        self.console.print(table)

    def confirm_execution(self, dry_run: bool = False) -> bool:
        """Ask before touching the filesystem. Dry runs never ask."""
        if dry_run:
            return True
        panel = Panel(
            "[yellow]The operations above will modify the filesystem.[/yellow]",
            title="Confirm Execution",
            border_style="yellow",
        )
        self.console.print(panel)
        return Confirm.ask("Proceed?", default=False)

    def display_results(self, results: Results, show_log: bool = False) -> None:
        """Render the summary panel, error table and (optionally) the run log."""
        title = "Run Summary"
        if results.dry_run:
            title += " [yellow][DRY RUN][/yellow]"
        status = "[green]SUCCESS[/green]" if results.success else "[red]FAILED[/red]"
        border = "yellow" if results.dry_run else ("green" if results.success else "red")
        self.console.print(Panel(f"{title}\nResult: {status}", border_style=border))

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Model", results.model.value)
        table.add_row("Validated" if results.dry_run else "Executed", f"{results.executed_count:,}")
        table.add_row("Skipped", f"{results.skipped_count:,}")
        table.add_row("Rolled back", f"{results.rollback_count:,}")
        table.add_row("Errors", f"{results.error_count:,}")
        table.add_row("Warnings", f"{results.warning_count:,}")
        table.add_row("Duration", self._format_duration(results.duration))
        self.console.print(table)

        if results.errors:
            self._display_errors(results.errors)
        if show_log and results.log:
            self.console.print(Panel(escape("\n".join(results.log)), title="Log", border_style="dim"))

    def _display_errors(self, errors: List[ErrorEntry]) -> None:
        table = Table(title=f"Errors ({len(errors)})", border_style="red")
        table.add_column("#", justify="right", no_wrap=True)
        table.add_column("Type")
        table.add_column("Phase")
        table.add_column("Message")
        for entry in errors[: self.MAX_ERRORS_DISPLAYED]:
            color = "yellow" if entry.severity is Severity.WARNING else "red"
            table.add_row(
                str(entry.operation_index),
                entry.operation_type.value if entry.operation_type else "unknown",
                entry.phase.value if entry.phase else "-",
                f"[{color}]{escape(entry.message)}[/{color}]",
            )
        self.console.print(table)
        remaining = len(errors) - self.MAX_ERRORS_DISPLAYED
        if remaining > 0:
            self.console.print(f"... and {remaining} more")

    def _format_options(self, operation: Operation) -> str:
        defaults = operation.DEFAULT_OPTIONS
        changed = [
            f"{key}={value!r}"
            for key, value in operation.options.items()
            if key != "content" and value != defaults.get(key)
        ]
        return ", ".join(changed)

    def _format_duration(self, seconds: float) -> str:
        """Format seconds as '0.42s' under a minute, else '5m 23s'."""
        if seconds < 0:
            seconds = 0
        if seconds < 60:
            return f"{seconds:.2f}s"
        return f"{int(seconds // 60)}m {int(seconds % 60)}s"

    def _truncate(self, text: str, max_length: int = 60) -> str:
        if len(text) > max_length:
            return "..." + text[-(max_length - 3):]
        return text
