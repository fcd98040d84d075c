"""Shared console helpers for create-edhor-stack.

All user-facing output goes through one Rich ``Console`` so that the prompt
provider, the CLI and the summary rendering share styling and can be
captured in tests.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print the chosen configuration as an aligned label/value list."""
    table = Table(title=title, title_justify="left", show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan", no_wrap=True)
    table.add_column()
    for label, value in data.items():
        table.add_row(label, escape(value))
    console.print(table)
    console.print()


def print_next_steps(lines: list[str], title: str = "Next steps") -> None:
    """Print the follow-up shell commands inside a panel."""
    body = "\n".join(f"[dim]$[/dim] {escape(line)}" for line in lines)
    console.print(Panel(body, title=title, border_style="cyan", expand=False))


# Status lines. Messages may contain paths, so they are escaped before styling.

def print_success(message: str) -> None:
    console.print(f"[bold green]✔ {escape(message)}[/bold green]")


def print_error(message: str) -> None:
    console.print(f"[bold red]✖ {escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]! {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    console.print(f"[dim]· {escape(message)}[/dim]")
