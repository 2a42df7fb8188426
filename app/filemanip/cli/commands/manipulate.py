"""Delete, rename and paste commands.

Each invocation is a single manipulation; the undo history only lives as
long as the process, so use ``filemanip shell`` to undo. Deleted entries
can always be brought back with ``filemanip trash restore``.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from filemanip.cli.types import fail, get_manager, get_operator
from filemanip.core.errors import FilemanipError
from filemanip.filesystem.snapshot import snapshot_item
from filemanip.utils.formatting import print_info, print_success


def rm(
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to move to the trash."),
    ],
) -> None:
    """Move files or directories to the trash.

    Examples:
        filemanip rm notes.txt
        filemanip rm build/ dist/
    """
    operator = get_operator()
    try:
        items = [snapshot_item(path.absolute()) for path in paths]
        trash_paths = operator.delete_and_yank(items)
    except FilemanipError as e:
        fail(e)

    for item, trash_path in zip(items, trash_paths, strict=True):
        if trash_path is None:
            print_info(f"Removed dangling symlink {escape(str(item.path))}")
        else:
            print_success(f"Trashed {escape(str(item.path))} -> {escape(str(trash_path))}")


def mv(
    path: Annotated[
        Path,
        typer.Argument(help="Entry to rename."),
    ],
    new_name: Annotated[
        str,
        typer.Argument(help="New name within the same directory."),
    ],
) -> None:
    """Rename an entry within its directory."""
    operator = get_operator()
    try:
        item = snapshot_item(path.absolute())
        new_path = operator.rename(item, new_name)
    except FilemanipError as e:
        fail(e)

    print_success(f"Renamed {escape(str(item.path))} -> {escape(new_path.name)}")


def paste(
    sources: Annotated[
        list[Path],
        typer.Argument(help="Entries to copy (trash entries get their original name back)."),
    ],
    dest: Annotated[
        Path,
        typer.Option(
            "--dest",
            "-d",
            help="Destination directory.",
        ),
    ] = Path("."),
) -> None:
    """Copy entries into a directory without overwriting anything.

    Name collisions are resolved by numbering: report.txt, report_1.txt, ...
    """
    manager = get_manager(dest)
    try:
        manager.operator.yank(snapshot_item(source.absolute()) for source in sources)
        produced = manager.paste()
    except FilemanipError as e:
        fail(e)

    for target in produced:
        print_success(f"Pasted {escape(str(target))}")
