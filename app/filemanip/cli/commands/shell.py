"""Interactive shell command.

Keeps one FileManager alive across commands so that deletions, pastes and
renames can be undone and redone within the session.
"""

import shlex
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from filemanip.cli.types import get_manager
from filemanip.core.errors import FilemanipError
from filemanip.core.session import save_session
from filemanip.filesystem.manager import FileManager
from filemanip.filesystem.models import SortKey
from filemanip.models.history import describe_record
from filemanip.utils.formatting import (
    console,
    create_items_table,
    print_error,
    print_info,
    print_success,
    print_warning,
)

SHELL_HELP = """\
ls                 list the current directory
cd DIR | up        change directory
sel N | top N | bottom N | clear
                   toggle / range-select / clear the selection
y [N]              yank the selection (or item N)
d [N]              delete the selection (or item N) into the trash
p                  paste the clipboard here
mv N NAME          rename item N
u | r              undo / redo
o N                open item N (enters directories)
hidden | sort name|time
q                  quit"""


class UsageError(Exception):
    """Raised when a shell command line is malformed."""


class Shell:
    """Command dispatcher bound to one FileManager."""

    def __init__(self, manager: FileManager) -> None:
        self.manager = manager
        self._commands: dict[str, Callable[[list[str]], None]] = {
            "ls": self._ls,
            "cd": self._cd,
            "up": self._up,
            "sel": self._sel,
            "top": self._top,
            "bottom": self._bottom,
            "clear": self._clear,
            "y": self._yank,
            "d": self._delete,
            "p": self._paste,
            "mv": self._rename,
            "u": self._undo,
            "r": self._redo,
            "o": self._open,
            "hidden": self._hidden,
            "sort": self._sort,
            "help": self._help,
        }

    def handle(self, line: str) -> bool:
        """Run one command line. Returns False when the user quits."""
        try:
            words = shlex.split(line)
        except ValueError as e:
            print_error(escape(str(e)))
            return True
        if not words:
            return True

        name, args = words[0], words[1:]
        if name in ("q", "quit", "exit"):
            return False

        command = self._commands.get(name)
        if command is None:
            print_error(f"Unknown command: {escape(name)} (try 'help')")
            return True

        try:
            command(args)
        except UsageError as e:
            print_error(f"Usage: {escape(str(e))}")
        except FilemanipError as e:
            print_error(escape(str(e)))
        return True

    # === Commands ===

    def _ls(self, args: list[str]) -> None:
        snapshot = self.manager.snapshot
        if not snapshot:
            print_info(f"{escape(str(self.manager.directory))} is empty.")
            return
        console.print(
            create_items_table(
                snapshot,
                title=str(self.manager.directory),
                selected=self.manager.selection,
            )
        )

    def _cd(self, args: list[str]) -> None:
        [target] = _expect(args, 1, "cd DIR")
        path = Path(target).expanduser()
        if not path.is_absolute():
            path = self.manager.directory / path
        self.manager.change_dir(path)
        self._ls([])

    def _up(self, args: list[str]) -> None:
        self.manager.go_up()
        self._ls([])

    def _sel(self, args: list[str]) -> None:
        index = _index(_expect(args, 1, "sel N")[0])
        self.manager.toggle_select(index)

    def _top(self, args: list[str]) -> None:
        self.manager.select_from_top(_index(_expect(args, 1, "top N")[0]))

    def _bottom(self, args: list[str]) -> None:
        self.manager.select_to_bottom(_index(_expect(args, 1, "bottom N")[0]))

    def _clear(self, args: list[str]) -> None:
        self.manager.reset_selection()

    def _yank(self, args: list[str]) -> None:
        yanked = self.manager.yank(_optional_index(args, "y [N]"))
        print_info(f"Yanked {len(yanked)} item(s)")

    def _delete(self, args: list[str]) -> None:
        trash_paths = self.manager.delete(_optional_index(args, "d [N]"))
        print_success(f"Deleted {len(trash_paths)} item(s)")

    def _paste(self, args: list[str]) -> None:
        produced = self.manager.paste()
        if not produced:
            print_warning("Clipboard is empty.")
            return
        for target in produced:
            print_success(f"Pasted {escape(target.name)}")

    def _rename(self, args: list[str]) -> None:
        index_arg, new_name = _expect(args, 2, "mv N NAME")
        new_path = self.manager.rename(_index(index_arg), new_name)
        print_success(f"Renamed to {escape(new_path.name)}")

    def _undo(self, args: list[str]) -> None:
        record = self.manager.undo()
        print_success(f"Undid {escape(describe_record(record))}")

    def _redo(self, args: list[str]) -> None:
        record = self.manager.redo()
        print_success(f"Redid {escape(describe_record(record))}")

    def _open(self, args: list[str]) -> None:
        index = _index(_expect(args, 1, "o N")[0])
        previous = self.manager.directory
        code = self.manager.open(index)
        if self.manager.directory != previous:
            self._ls([])
        elif code != 0:
            print_warning(f"Program exited with code {code}")

    def _hidden(self, args: list[str]) -> None:
        shown = self.manager.toggle_hidden()
        print_info("Showing hidden files" if shown else "Hiding hidden files")

    def _sort(self, args: list[str]) -> None:
        [key] = _expect(args, 1, "sort name|time")
        try:
            sort_key = SortKey(key.lower())
        except ValueError as e:
            raise UsageError("sort name|time") from e
        self.manager.set_sort(sort_key)
        self._ls([])

    def _help(self, args: list[str]) -> None:
        console.print(escape(SHELL_HELP))


def _expect(args: list[str], count: int, usage: str) -> list[str]:
    if len(args) != count:
        raise UsageError(usage)
    return args


def _index(value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise UsageError(f"not an item number: {value}") from e


def _optional_index(args: list[str], usage: str) -> int | None:
    if len(args) > 1:
        raise UsageError(usage)
    return _index(args[0]) if args else None


def shell(
    path: Annotated[
        Path,
        typer.Argument(help="Directory to start in."),
    ] = Path("."),
) -> None:
    """Start an interactive session with undo/redo.

    Type 'help' at the prompt for the list of commands. The sort order and
    hidden-file setting are saved when the session ends.
    """
    session = Shell(get_manager(path))
    session.handle("ls")

    while True:
        try:
            line = console.input("[info]filemanip>[/info] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if not session.handle(line):
            break

    try:
        save_session(session.manager.session())
    except (OSError, RuntimeError) as e:
        print_warning(f"Could not save session: {e}")
