"""Rich-enhanced output formatting with a plain-text mode."""

import json
import logging
import os
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

_logger = logging.getLogger(__name__)


def _should_use_rich() -> bool:
    """Check if Rich should be used.

    Returns:
        False when plain output was requested via ``SOLARTHERM_NO_RICH=1``.
    """
    return os.getenv("SOLARTHERM_NO_RICH", "0") != "1"


class OutputFormatter:
    """Unified output formatter with Rich enhancement support.

    Routes output to Rich renderables, or to plain ``print`` calls when
    Rich is disabled (useful for logs, pipes and cron mail).
    """

    def __init__(self, use_rich: bool | None = None) -> None:
        self.use_rich = _should_use_rich() if use_rich is None else use_rich
        self.console: Console | None = Console() if self.use_rich else None

    def print_status_table(
        self,
        items: list[tuple[str, str, str]],
        title: str = "DEVICE STATUS",
    ) -> None:
        """Print status items as a formatted table.

        Args:
            items: List of (category, label, value) tuples
            title: Table title
        """
        if not self.use_rich:
            self._print_status_plain(items, title)
        else:
            self._print_status_rich(items, title)

    def print_error(
        self,
        message: str,
        title: str = "Error",
        details: list[str] | None = None,
    ) -> None:
        """Print an error message.

        Args:
            message: Error message
            title: Panel title
            details: Optional list of detail lines
        """
        if not self.use_rich:
            self._print_error_plain(message, title, details)
        else:
            self._print_error_rich(message, title, details)

    def print_json_highlighted(self, data: Any) -> None:
        """Print JSON with syntax highlighting when Rich is enabled."""
        text = json.dumps(data, indent=2, default=str)
        if not self.use_rich:
            print(text)
            return
        assert self.console is not None
        self.console.print(Syntax(text, "json", theme="monokai"))

    def print_tokens(self, tokens: list[tuple[int, str, str]]) -> None:
        """Print raw frame tokens as (position, tag, token) rows."""
        if not self.use_rich:
            for position, tag, token in tokens:
                print(f"{position:>3}  {tag:<22} {token!r}")
            return
        assert self.console is not None
        table = Table(title="RAW FRAME", show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Slot", style="magenta")
        table.add_column("Token", style="green")
        for position, tag, token in tokens:
            table.add_row(str(position), tag, repr(token))
        self.console.print(table)

    # Plain text implementations

    def _print_status_plain(
        self, items: list[tuple[str, str, str]], title: str
    ) -> None:
        """Plain text status output."""
        max_label = max((len(label) for _, label, _ in items), default=20)
        max_value = max((len(str(value)) for _, _, value in items), default=20)
        width = max(max_label + max_value + 4, len(title))

        print("=" * width)
        print(title)
        print("=" * width)

        current_category: str | None = None
        for category, label, value in items:
            if category != current_category:
                if current_category is not None:
                    print()
                print(category)
                print("-" * width)
                current_category = category
            print(f"  {label:<{max_label}}  {value}")

        print("=" * width)

    def _print_error_plain(
        self, message: str, title: str, details: list[str] | None
    ) -> None:
        print(f"{title}: {message}")
        for detail in details or []:
            print(f"  - {detail}")

    # Rich implementations

    def _print_status_rich(
        self, items: list[tuple[str, str, str]], title: str
    ) -> None:
        """Rich-enhanced status output."""
        assert self.console is not None

        if not items:
            self._print_status_plain(items, title)
            return

        table = Table(title=title, show_header=False)
        current_category: str | None = None
        for category, label, value in items:
            if category != current_category:
                if current_category is not None:
                    table.add_row()
                table.add_row(Text(category, style="bold cyan"))
                current_category = category
            table.add_row(
                Text(f"  {label}", style="magenta"),
                Text(str(value), style="green"),
            )

        self.console.print(table)

    def _print_error_rich(
        self, message: str, title: str, details: list[str] | None
    ) -> None:
        """Rich-enhanced error output."""
        assert self.console is not None

        content = f"{title}\n\n{message}"
        if details:
            content += "\n\nDetails:"
            for detail in details:
                content += f"\n  - {detail}"

        self.console.print(Panel(content, border_style="red", padding=(1, 2)))


# Global formatter instance
_formatter: OutputFormatter | None = None


def get_formatter() -> OutputFormatter:
    """Get the global formatter instance."""
    global _formatter
    if _formatter is None:
        _formatter = OutputFormatter()
    return _formatter
