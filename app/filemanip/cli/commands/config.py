"""Configuration commands.

Creates and displays ~/.config/filemanip/config.toml.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from filemanip.cli.types import fail, get_config
from filemanip.core.config import Config, ConfigError, save_config
from filemanip.core.paths import get_config_path
from filemanip.filesystem.trash import trash_for
from filemanip.utils.formatting import console, print_info, print_success

app = typer.Typer(
    help="Create and show the configuration file.",
    invoke_without_command=True,
    no_args_is_help=True,
)

# Written by 'config init' so the file documents the exec table layout
_STARTER_EXEC = {
    "xdg-open": ["pdf", "png", "jpg", "jpeg"],
}


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a starter configuration file."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_info(f"Config already exists: {escape(str(config_path))}")
        print_info("Use --force to overwrite.")
        return

    try:
        saved = save_config(Config(exec=_STARTER_EXEC))
    except ConfigError as e:
        fail(e)
    print_success(f"Config written to {escape(str(saved))}")


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config = get_config()
    config_path = get_config_path()
    source = str(config_path) if config_path.exists() else "built-in defaults"

    console.print(f"[bold]Source:[/bold] {escape(source)}")
    console.print(f"[bold]Default program:[/bold] {escape(config.default)}")
    console.print(f"[bold]Trash:[/bold] {escape(str(trash_for(config).root))}")

    mapping = config.extension_map
    if not mapping:
        console.print("[dim]No extension mappings.[/dim]")
        return

    table = Table(
        title="Extension Mappings",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Extension", style="info")
    table.add_column("Program")
    for ext in sorted(mapping):
        table.add_row(f".{escape(ext)}", escape(mapping[ext]))
    console.print(table)
