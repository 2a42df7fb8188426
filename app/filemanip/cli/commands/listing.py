"""Directory listing and open commands."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from filemanip.cli.types import fail, get_config, get_manager
from filemanip.core.errors import FilemanipError
from filemanip.core.session import save_session
from filemanip.filesystem.models import SortKey
from filemanip.filesystem.opener import open_item
from filemanip.filesystem.snapshot import snapshot_item
from filemanip.utils.formatting import console, create_items_table, print_info, print_warning


def ls(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to list."),
    ] = Path("."),
    sort: Annotated[
        SortKey | None,
        typer.Option(
            "--sort",
            "-s",
            help="Sort by name or modification time.",
            case_sensitive=False,
        ),
    ] = None,
    hidden: Annotated[
        bool | None,
        typer.Option(
            "--hidden/--no-hidden",
            help="Show or hide dotfiles.",
        ),
    ] = None,
    save: Annotated[
        bool,
        typer.Option(
            "--save",
            help="Remember the sort order and hidden-file setting.",
        ),
    ] = False,
) -> None:
    """List a directory, directories first.

    Examples:
        filemanip ls                  # Current directory
        filemanip ls ~/Downloads -s time
        filemanip ls --no-hidden --save
    """
    manager = get_manager(path, sort_key=sort, show_hidden=hidden)

    if not manager.snapshot:
        print_info(f"{escape(str(manager.directory))} is empty.")
    else:
        console.print(create_items_table(manager.snapshot, title=str(manager.directory)))

    if save:
        try:
            save_session(manager.session())
        except (OSError, RuntimeError) as e:
            print_warning(f"Could not save session: {e}")


def open_path(
    path: Annotated[
        Path,
        typer.Argument(help="File to open with its configured program."),
    ],
) -> None:
    """Open a file with the program configured for its extension."""
    config = get_config()
    try:
        item = snapshot_item(path.absolute())
        if item.is_dir:
            msg = f"Is a directory: {item.path}"
            raise FilemanipError(msg)
        code = open_item(item, config)
    except FilemanipError as e:
        fail(e)

    if code != 0:
        raise typer.Exit(code=code)
