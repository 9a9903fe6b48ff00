"""
Terminal UI with Rich Library

Provides terminal output for the sandbox entry:
- Progress lines while pulling images and entering a sandbox
- Error panels for failed launches
- Tables for listing bundled profiles
"""

from typing import Any, Dict, List, Optional
from rich.console import Console
from rich.panel import Panel
from rich.table import Table


class RichConsole:
    """
    Rich console wrapper for CLI output.

    Provides styled output for various content types.
    """

    def __init__(self):
        self.console = Console()

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self.console.print(*args, **kwargs)

    def print_table(
        self,
        data: List[Dict[str, Any]],
        title: Optional[str] = None,
        columns: Optional[List[str]] = None,
    ) -> None:
        """Print data as a table."""
        if not data:
            return

        table = Table(title=title)

        cols = columns or list(data[0].keys())
        for col in cols:
            table.add_column(col.replace("_", " ").title())

        for row in data:
            table.add_row(*[str(row.get(col, "")) for col in cols])

        self.console.print(table)

    def print_error(self, message: str, title: str = "Error") -> None:
        """Print an error message."""
        self.console.print(Panel(
            f"[red]{message}[/red]",
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
        ))

    def print_info(self, message: str, title: str = "Info") -> None:
        """Print an info message."""
        self.console.print(Panel(
            f"[blue]{message}[/blue]",
            title=f"[bold blue]{title}[/bold blue]",
            border_style="blue",
        ))


class TerminalUI:
    """
    Main terminal UI controller.

    Provides high-level interface for CLI interactions.
    """

    def __init__(self, console: Optional[RichConsole] = None):
        self.console = console or RichConsole()

    def show_sandbox_status(self, sandbox: str) -> None:
        """Report where the CLI is running once no relaunch is needed."""
        if sandbox:
            self.console.print_info(f"Running inside sandbox ([bold]{sandbox}[/bold])", "Sandbox")
        else:
            self.console.print_info("Running without sandbox", "Sandbox")

    def show_profiles(self, names: List[str], default: str) -> None:
        """List bundled seatbelt profiles."""
        self.console.print_table(
            [{"profile": name, "default": "yes" if name == default else ""} for name in names],
            title="Seatbelt Profiles",
        )

    def show_error(self, message: str) -> None:
        """Display a failed sandbox launch."""
        self.console.print_error(message, "Sandbox Failed")
