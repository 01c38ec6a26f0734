"""Output formatting utilities using Rich."""

import json
from collections.abc import Callable, Sequence
from typing import Any

import yaml
from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table

from ..models.base import Record
from ..models.vsphere import DeploymentApplianceState, HostConnectionState, PowerState, TaskStatus

console = Console()

OUTPUT_FORMATS = ("table", "json", "yaml")

_GREEN_STATES = {
    PowerState.POWERED_ON.value,
    HostConnectionState.CONNECTED.value,
    TaskStatus.SUCCEEDED.value,
    DeploymentApplianceState.CONFIGURED.value,
}
_RED_STATES = {
    PowerState.POWERED_OFF.value,
    HostConnectionState.DISCONNECTED.value,
    HostConnectionState.NOT_RESPONDING.value,
    TaskStatus.FAILED.value,
    DeploymentApplianceState.FAILED.value,
}
_YELLOW_STATES = {
    PowerState.SUSPENDED.value,
    TaskStatus.PENDING.value,
    TaskStatus.RUNNING.value,
    TaskStatus.BLOCKED.value,
    DeploymentApplianceState.CONFIG_IN_PROGRESS.value,
    DeploymentApplianceState.QUESTION_RAISED.value,
}

# (header, style, cell renderer)
Column = tuple[str, str, Callable[[Any], str]]


def print_error(msg: str) -> None:
    """Print an error message to the console.

    Args:
        msg: The error message to display.
    """
    console.print(f"[bold red]Error:[/bold red] {msg}")


def print_success(msg: str) -> None:
    """Print a success message to the console.

    Args:
        msg: The success message to display.
    """
    console.print(f"[bold green]✓[/bold green] {msg}")


def print_warning(msg: str) -> None:
    """Print a warning message to the console.

    Args:
        msg: The warning message to display.
    """
    console.print(f"[bold yellow]Warning:[/bold yellow] {msg}")


def print_info(msg: str) -> None:
    """Print an info message to the console.

    Args:
        msg: The info message to display.
    """
    console.print(f"[cyan]{msg}[/cyan]")


def print_cancelled(msg: str = "Cancelled") -> None:
    """Print a cancellation message to the console.

    Args:
        msg: The cancellation message to display.
    """
    console.print(f"[yellow]{msg}[/yellow]")


def create_table(
    title: str | None = None,
    columns: list[tuple[str, str]] | None = None,
    rows: list[list[str]] | None = None,
    show_header: bool = True,
) -> Table:
    """Create a Rich table.

    Args:
        title: Optional table title.
        columns: List of (column_name, column_style) tuples.
        rows: List of row data.
        show_header: Whether to show the header row.

    Returns:
        A configured Rich Table instance.
    """
    table = Table(title=title, show_header=show_header, header_style="bold cyan")

    if columns:
        for col_name, col_style in columns:
            table.add_column(col_name, style=col_style)

    if rows:
        for row in rows:
            table.add_row(*row)

    return table


def print_records(
    records: Sequence[Record],
    columns: list[Column],
    output_format: str = "table",
    title: str | None = None,
) -> None:
    """Print records as a table, JSON or YAML.

    JSON and YAML output carry the full upstream payload; the table shows
    only *columns*.

    Args:
        records: Records to print.
        columns: Table columns as (header, style, renderer) tuples.
        output_format: One of ``table``, ``json``, ``yaml``.
        title: Table title.
    """
    if output_format == "json":
        data = [r.to_dict() for r in records]
        console.print(json.dumps(data, indent=2), markup=False, highlight=False, soft_wrap=True)
        return
    if output_format == "yaml":
        data = [r.to_dict() for r in records]
        console.print(
            yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip(),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return

    if not records:
        console.print(f"No {title.lower() if title else 'results'} found")
        return

    rows = [[render(record) for _, _, render in columns] for record in records]
    console.print(
        create_table(
            title=title,
            columns=[(header, style) for header, style, _ in columns],
            rows=rows,
        )
    )


def confirm(message: str, default: bool = False) -> bool:
    """Prompt user for confirmation.

    Args:
        message: The confirmation message to display.
        default: Default choice if user just presses enter.

    Returns:
        True if user confirmed, False otherwise.
    """
    return Confirm.ask(message, default=default)


def prompt(message: str, default: str | None = None) -> str:
    """Prompt user for text input.

    Args:
        message: The prompt message to display.
        default: Default value if user just presses enter.

    Returns:
        The user's input string.
    """
    if default is None:
        return Prompt.ask(message)
    return Prompt.ask(message, default=default)


def format_bytes(bytes_value: int | float | None) -> str:
    """Format bytes to human-readable string.

    Args:
        bytes_value: The number of bytes.

    Returns:
        Formatted string (e.g., '1.5 GB'), or '-' when unknown.
    """
    if bytes_value is None:
        return "-"
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if bytes_value < 1024.0:
            return f"{bytes_value:.1f} {unit}"
        bytes_value /= 1024.0
    return f"{bytes_value:.1f} PB"


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a percentage value.

    Args:
        value: The value between 0 and 100.
        decimals: Number of decimal places.

    Returns:
        Formatted percentage string (e.g., '75.5%').
    """
    return f"{value:.{decimals}f}%"


def get_status_color(status: str | None) -> str:
    """Get the Rich color name for a status string.

    Args:
        status: The status string (e.g., 'POWERED_ON', 'DISCONNECTED').

    Returns:
        Rich color name ('green', 'red', 'yellow', or 'white').
    """
    status_upper = (status or "").upper()
    if status_upper in _GREEN_STATES:
        return "green"
    elif status_upper in _RED_STATES:
        return "red"
    elif status_upper in _YELLOW_STATES:
        return "yellow"
    else:
        return "white"


def colored_status(status: str | None) -> str:
    """Wrap a status string in its Rich color markup."""
    if not status:
        return "-"
    color = get_status_color(status)
    return f"[{color}]{status}[/{color}]"
