"""Rich-based console utilities for styled CLI output.

Runner logs are not terminals, so rich falls back to plain text there;
on a workstation the same lines are colored.
"""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.theme import Theme

THEME = Theme({
    "dim": "#888888",
    "success": "bright_green",
    "info": "bright_cyan",
})


class Console:
    """Styled console output.

    Messages are escaped before printing; az output and cloud names may
    contain square brackets that rich would otherwise read as markup.
    """

    def __init__(self, rich_console: RichConsole | None = None):
        self._console = rich_console or RichConsole(theme=THEME, highlight=False)

    def print_dim(self, message: str):
        """Print dimmed/secondary text."""
        self._console.print(escape(message), style="dim")

    def print_success(self, message: str):
        """Print a success message (green)."""
        self._console.print(f"[success]✓[/success] {escape(message)}")

    def print_info(self, message: str):
        """Print an info message (cyan)."""
        self._console.print(f"[info]→[/info] {escape(message)}")


console = Console()
