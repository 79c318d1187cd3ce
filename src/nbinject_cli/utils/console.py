"""Console utility functions for formatting and output."""

import click
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


# Status symbols for consistent iconography
STATUS_SYMBOLS = {
    'success': '✨',
    'sparkles': '✨',
    'running': '🚀',
    'info': '💡',
    'warning': '⚠️',
    'error': '❌',
    'list': '📋',
    'preview': '👀',
}


def _get_console() -> Optional[Console]:
    """Get Rich console instance."""
    try:
        return Console()
    except Exception:
        return None


def _rich_echo(message: str, color: str = "white", style: str = None, bold: bool = False, symbol: str = None):
    """Echo message with Rich formatting, plain click output as last resort."""
    if style is not None:
        color = style

    if symbol and symbol in STATUS_SYMBOLS:
        message = f"{STATUS_SYMBOLS[symbol]} {message}"

    console = _get_console()
    if console:
        style_str = f"bold {color}" if bold else color
        # File paths may contain square brackets
        console.print(message, style=style_str, markup=False, highlight=False, soft_wrap=True)
        return

    click.echo(message)


def _rich_success(message: str, symbol: str = None):
    """Display success message with green color and bold styling."""
    _rich_echo(message, color="green", symbol=symbol, bold=True)


def _rich_error(message: str, symbol: str = None):
    """Display error message with red color."""
    _rich_echo(message, color="red", symbol=symbol)


def _rich_warning(message: str, symbol: str = None):
    """Display warning message with yellow color."""
    _rich_echo(message, color="yellow", symbol=symbol)


def _rich_info(message: str, symbol: str = None):
    """Display info message with blue color."""
    _rich_echo(message, color="blue", symbol=symbol)


def _rich_panel(content, title: str = None, style: str = "cyan", fallback: str = None):
    """Display content in a Rich panel, plain text when no console is available.

    ``content`` may be a string or any Rich renderable; ``fallback`` is echoed
    instead of it when printing without Rich.
    """
    console = _get_console()
    if console:
        console.print(Panel(content, title=title, border_style=style, padding=(0, 1)))
        return

    if title:
        click.echo(f"\n--- {title} ---")
    click.echo(fallback if fallback is not None else str(content))
    if title:
        click.echo("-" * (len(title) + 8))


def _create_files_table(files_data: list, title: str = "Files") -> Optional[Table]:
    """Create a Rich table for file display.

    Rows may be dicts with ``name``/``description`` keys or (name, description) pairs.
    """
    table = Table(title=f"📋 {title}", show_header=True, header_style="bold cyan")
    table.add_column("File", style="bold white")
    table.add_column("Status", style="white")

    for file_info in files_data:
        if isinstance(file_info, dict):
            table.add_row(escape(file_info.get("name", "")), escape(file_info.get("description", "")))
        elif isinstance(file_info, (list, tuple)) and len(file_info) >= 2:
            table.add_row(escape(str(file_info[0])), escape(str(file_info[1])))
        else:
            table.add_row(escape(str(file_info)), "")

    return table


def _print_table(table: Table):
    """Print a Rich table, falling back to plain rows."""
    console = _get_console()
    if console:
        console.print(table)
        return
    for row in zip(*(column.cells for column in table.columns)):
        click.echo("  ".join(str(cell) for cell in row))
