"""
fsynth - CLI Interface.

Plan filesystem changes in a JSON file, preview them, then execute them
under a chosen execution model.

Usage Examples:
    # Show the operations in a plan
    fsynth show plan.json

    # Validate only, reporting every problem
    fsynth run plan.json --dry-run --on-error continue

    # Execute, undoing everything if any step fails
    fsynth run plan.json --model transactional --yes

    # Execute with a run log and verbose output
    fsynth run plan.json --log-file run.log --verbose
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from fsynth.log_config import configure_logging
from fsynth.models import ExecutionConfig, ExecutionModel, OnError
from fsynth.orchestration import ExecutionRunner, RunLogger
from fsynth.planning import PlanError, load_plan
from fsynth.ui import RunTUI

__version__ = "0.1.0"

# Initialize Typer app
app = typer.Typer(
    name="fsynth",
    help="Plan filesystem operations, then execute them safely.",
    add_completion=False,
    no_args_is_help=True,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"fsynth v{__version__}")
        raise typer.Exit()


def validate_model(value: str) -> str:
    valid = [m.value for m in ExecutionModel]
    if value not in valid:
        raise typer.BadParameter(f"Model must be one of: {', '.join(valid)}")
    return value


def validate_on_error(value: str) -> str:
    valid = [o.value for o in OnError]
    if value not in valid:
        raise typer.BadParameter(f"on-error must be one of: {', '.join(valid)}")
    return value


def validate_plan_path(plan: Path) -> None:
    """
    Check that the plan file exists and is a regular file.

    Raises:
        typer.Exit: With code 1 and an error message otherwise.
    """
    if not plan.exists():
        console.print(f"[red]Error:[/red] Plan file does not exist: {plan}")
        raise typer.Exit(1)
    if not plan.is_file():
        console.print(f"[red]Error:[/red] Plan path is not a file: {plan}")
        raise typer.Exit(1)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """fsynth - plan filesystem operations, then execute them safely."""
    pass


@app.command()
def show(
    plan: Path = typer.Argument(..., help="JSON plan file."),
    base_dir: Optional[Path] = typer.Option(
        None,
        "--base-dir",
        "-b",
        help="Directory that relative plan paths are resolved against.",
    ),
) -> None:
    """Display the operations in a plan without validating or running them."""
    validate_plan_path(plan)
    try:
        queue = load_plan(plan, base_dir=base_dir)
    except PlanError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    RunTUI(console=console).display_plan(queue.get_operations())
    console.print(f"\n[dim]{queue.size()} operation(s) in {plan}[/dim]")


@app.command()
def run(
    plan: Path = typer.Argument(..., help="JSON plan file."),
    model: str = typer.Option(
        ExecutionModel.STANDARD.value,
        "--model",
        "-m",
        help="Execution model: standard, validate_first, best_effort or transactional.",
        callback=validate_model,
    ),
    on_error: str = typer.Option(
        OnError.STOP.value,
        "--on-error",
        help="Dry runs only: stop or continue after a validation error.",
        callback=validate_on_error,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        "-n",
        help="Validate operations without changing anything.",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation before a live run.",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for the run log file.",
    ),
    base_dir: Optional[Path] = typer.Option(
        None,
        "--base-dir",
        "-b",
        help="Directory that relative plan paths are resolved against.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
) -> None:
    """
    Validate and execute the operations in a plan.

    Runs the plan in four steps:
    1. Load: Parse the plan file into an operation queue
    2. Review: Display the plan and ask for confirmation (live runs)
    3. Execution: Run the queue under the chosen model
    4. Summary: Display results and write the run log
    """
    validate_plan_path(plan)
    configure_logging("INFO" if verbose else None)

    try:
        queue = load_plan(plan, base_dir=base_dir)
        config = ExecutionConfig(model=model, on_error=on_error, dry_run=dry_run)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    run_log: Optional[RunLogger] = None
    if log_file:
        try:
            run_log = RunLogger(log_file, dry_run=dry_run, model=config.model)
        except OSError as e:
            console.print(f"[red]Error:[/red] Failed to create log file: {e}")
            raise typer.Exit(1)

    tui = RunTUI(console=console)
    try:
        if dry_run:
            console.print("[yellow][DRY RUN MODE][/yellow] No files will be modified.\n")

        operations = queue.get_operations()
        tui.display_plan(operations)
        if not yes and not tui.confirm_execution(dry_run=dry_run):
            console.print("[yellow]Execution cancelled.[/yellow]")
            raise typer.Exit(0)

        with console.status("Running operations..."):
            results = ExecutionRunner().execute(queue, config)
        tui.display_results(results, show_log=verbose)

        if run_log is not None:
            with run_log:
                run_log.log_header()
                run_log.log_plan(operations)
                run_log.log_results(results)
                run_log.log_summary(results)
            console.print(f"\n[dim]Log written to: {run_log.get_log_path()}[/dim]")

        if not results.success:
            raise typer.Exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Run interrupted by user.[/yellow]")
        raise typer.Exit(130)

    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
