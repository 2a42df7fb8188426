"""Trash inspection and maintenance commands."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from filemanip.cli.types import fail, get_operator
from filemanip.core.errors import FilemanipError, NotFoundError
from filemanip.utils.formatting import (
    console,
    create_trash_table,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Inspect, restore and empty the trash.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command("list")
def list_entries() -> None:
    """List trash entries, most recent first."""
    trash = get_operator().trash
    try:
        entries = trash.entries()
    except FilemanipError as e:
        fail(e)

    if not entries:
        print_info("Trash is empty.")
        return

    console.print(create_trash_table(entries))
    console.print(f"\n[dim]{len(entries)} entries in {escape(str(trash.root))}[/dim]")


@app.command()
def restore(
    names: Annotated[
        list[str],
        typer.Argument(help="Stored names of the entries to restore (see 'trash list')."),
    ],
    dest: Annotated[
        Path,
        typer.Option(
            "--dest",
            "-d",
            help="Directory to restore into.",
        ),
    ] = Path("."),
) -> None:
    """Move trash entries back out under their original names."""
    operator = get_operator()
    trash = operator.trash
    try:
        paths = [trash.root / name for name in names]
        missing = [path.name for path in paths if not trash.contains(path) or not path.exists()]
        if missing:
            msg = f"Not in trash: {', '.join(missing)}"
            raise NotFoundError(msg)
        produced = operator.restore_from_trash(trash.items_for(paths), dest.absolute())
    except FilemanipError as e:
        fail(e)

    for target in produced:
        print_success(f"Restored {escape(str(target))}")


@app.command()
def empty(
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Permanently delete everything in the trash."""
    trash = get_operator().trash
    if not yes:
        confirmed = typer.confirm("Are you sure to empty the trash directory?", default=False)
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        removed = trash.empty()
    except FilemanipError as e:
        fail(e)

    print_success(f"Removed {removed} trash entries.")
