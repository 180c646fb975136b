"""Rich formatting utilities for terminal output."""

from typing import Any, Iterable, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table

console = Console()


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")


def print_info(message: str) -> None:
    """Print info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def print_panel(title: str, content: str, style: str = "blue") -> None:
    """Print content in a bordered panel.

    Args:
        title: Panel title
        content: Panel body, one fact per line
        style: Border style, e.g. yellow for partial results
    """
    console.print(Panel(content, title=title, border_style=style))


def create_progress() -> Progress:
    """Create the per-file progress bar.

    The task starts with an unknown total while files are discovered and
    switches to a processed/total count once checking begins.

    Returns:
        Progress bound to the shared console
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def create_table(title: Optional[str] = None, **kwargs: Any) -> Table:
    """Create a Rich table with common styling.

    Args:
        title: Optional table title
        **kwargs: Additional Table arguments

    Returns:
        Table with a bold cyan header
    """
    return Table(title=title, show_header=True, header_style="bold cyan", **kwargs)


def print_pair_table(
    title: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[str]],
    limit: int,
) -> int:
    """Print up to ``limit`` file pairs as a table.

    The first column is styled as the earlier file, the second as the later
    one; any further column (a score) is right-aligned.

    Args:
        title: Table title
        columns: Column headers
        rows: Row values, already formatted
        limit: Maximum number of rows to print

    Returns:
        Number of rows left out
    """
    table = create_table(title=title)
    for position, header in enumerate(columns):
        if position == 0:
            table.add_column(header, style="cyan")
        elif position == 1:
            table.add_column(header, style="yellow")
        else:
            table.add_column(header, style="green", justify="right")

    hidden = 0
    for shown, row in enumerate(rows):
        if shown < limit:
            table.add_row(*row)
        else:
            hidden += 1

    console.print(table)
    return hidden
