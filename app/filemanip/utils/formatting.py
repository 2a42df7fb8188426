"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from collections.abc import Container, Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from filemanip.core.theme import get_theme
from filemanip.filesystem.models import Item, ItemKind
from filemanip.filesystem.trash import original_name


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


_KIND_STYLES = {
    ItemKind.DIRECTORY: "kind.directory",
    ItemKind.FILE: "kind.file",
    ItemKind.SYMLINK: "kind.symlink",
}


def format_size(size_bytes: int) -> str:
    """Format a byte count as a human-readable size."""
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if size < 1024 or unit == "TB":
            if unit == "B":
                return f"{int(size)} {unit}"
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def format_time(modified_at: str | None) -> str:
    """Format an ISO 8601 timestamp as ``YYYY-MM-DD HH:MM``; empty if unknown."""
    if not modified_at:
        return ""
    return modified_at[:16].replace("T", " ")


def format_name(item: Item, selected: bool = False) -> str:
    """Format an item name with its kind style.

    Directories get a trailing slash; symlinks to directories show their
    resolved target.
    """
    style = _KIND_STYLES[item.kind]
    name = escape(item.name)
    if item.is_dir:
        name += "/"
    elif item.symlink_target is not None:
        name += f" -> {escape(str(item.symlink_target))}"
    if selected:
        return f"[selected]{name}[/selected]"
    return f"[{style}]{name}[/{style}]"


def create_items_table(
    items: Iterable[Item],
    title: str,
    selected: Container[Item] = (),
) -> Table:
    """Create a Rich table listing a directory snapshot.

    Args:
        items: Items in display order.
        title: Table title (usually the directory path).
        selected: Items to highlight as selected.

    Returns:
        Rich Table configured for item display.
    """
    table = Table(
        title=escape(title),
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", style="muted", justify="right")
    table.add_column("Name", no_wrap=True)
    table.add_column("Size", style="info", justify="right")
    table.add_column("Modified", style="muted")

    for index, item in enumerate(items):
        size = "" if item.is_dir else format_size(item.size)
        table.add_row(
            str(index),
            format_name(item, item in selected),
            size,
            format_time(item.modified_at),
        )
    return table


def create_trash_table(items: Iterable[Item]) -> Table:
    """Create a Rich table listing trash entries with their original names."""
    table = Table(
        title="Trash",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Stored Name", no_wrap=True)
    table.add_column("Original Name", no_wrap=True)
    table.add_column("Kind", style="muted")
    table.add_column("Size", style="info", justify="right")

    for item in items:
        size = "" if item.is_dir else format_size(item.size)
        table.add_row(
            escape(item.name),
            format_name(item.relocated(item.path.with_name(original_name(item.name)))),
            item.kind.value,
            size,
        )
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
