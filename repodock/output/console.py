# Repodock Console Output
# Rich-based console output for user-friendly display

import threading
from typing import Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from repodock.sync.result import BatchResult, SyncOutcome


class Console:
    """
    Console output manager using Rich.

    Progress lines may be printed from several worker threads at once;
    each line is written under a lock so lines never interleave, but lines
    from different workers appear in completion order.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored, highlight=False, soft_wrap=True)
        self._lock = threading.Lock()

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]✗ Error:[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]⚠ {message}[/yellow]")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]✓ {message}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[cyan]ℹ {message}[/cyan]")

    def print_debug(self, message: str) -> None:
        """Print message only in verbose mode."""
        if self.verbose:
            self._console.print(f"[dim]{message}[/dim]")

    def print_progress(self, outcome: SyncOutcome) -> None:
        """
        Print the outcome of one repository as soon as it is known.

        Args:
            outcome: Finished sync outcome.
        """
        if outcome.succeeded:
            line = f"  [green]✓[/green] [bold]{escape(outcome.name)}[/bold] - {escape(outcome.message)}"
        else:
            line = f"  [red]✗[/red] [bold]{escape(outcome.name)}[/bold] - {escape(outcome.message)}"

        with self._lock:
            self._console.print(line)
            if self.verbose and outcome.detail:
                for detail_line in outcome.detail.splitlines():
                    self._console.print(f"      [dim]{escape(detail_line)}[/dim]")

    def print_summary(self, result: BatchResult) -> None:
        """
        Print the final summary of a sync run.

        Args:
            result: Batch result to summarize.
        """
        self._console.print()
        self._console.print(
            Panel(
                f"Total: {result.total}\n"
                f"Successful: [green]{result.succeeded}[/green]\n"
                f"Failed: [red]{result.failed}[/red]",
                title="Summary",
                border_style="green" if result.success else "red",
            )
        )

        if result.success:
            self.print_success(f"All {result.total} repositories synced successfully!")
        else:
            self.print_warning(
                f"Synced {result.succeeded}/{result.total} repositories successfully. {result.failed} failed."
            )

    def print_outcomes_table(self, result: BatchResult) -> None:
        """Print every outcome in discovery order."""
        table = Table(show_header=True, header_style="bold")
        table.add_column("Repository", style="cyan")
        table.add_column("Status")
        table.add_column("Message", style="dim")

        for outcome in result.outcomes:
            if outcome.succeeded:
                status = "[green]synced[/green]"
            else:
                kind = outcome.failure_kind.value.replace("_", " ") if outcome.failure_kind else "failed"
                status = f"[red]{kind}[/red]"
            table.add_row(escape(outcome.name), status, escape(outcome.message))

        self._console.print(table)

    def print_mapping(self, title: str, values: dict[str, Optional[str]]) -> None:
        """Print a two-column key/value table."""
        table = Table(title=title, show_header=True)
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")

        for key, value in values.items():
            table.add_row(key, value if value is not None else "[dim]-[/dim]")

        self._console.print(table)


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
