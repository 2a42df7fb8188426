"""Shared helpers for CLI commands.

Builds the engine objects from the on-disk configuration and session, and
turns engine errors into a printed error line plus exit code 1.
"""

from pathlib import Path
from typing import NoReturn

import typer
from rich.markup import escape

from filemanip.core.config import Config, ConfigError, load_config_or_default
from filemanip.core.errors import FilemanipError
from filemanip.core.session import load_session
from filemanip.filesystem.manager import FileManager
from filemanip.filesystem.models import SortKey
from filemanip.filesystem.operator import FilesystemOperator
from filemanip.filesystem.progress import ConsoleProgress
from filemanip.filesystem.trash import trash_for
from filemanip.utils.formatting import err_console, print_error


def fail(error: Exception) -> NoReturn:
    """Print ``error`` and exit with code 1."""
    print_error(escape(str(error)))
    raise typer.Exit(code=1)


def get_config() -> Config:
    """Load the configuration, exiting on a broken config file."""
    try:
        return load_config_or_default()
    except ConfigError as e:
        fail(e)


def get_operator(config: Config | None = None) -> FilesystemOperator:
    """Build an operator that reports progress on stderr."""
    config = config if config is not None else get_config()
    return FilesystemOperator(trash_for(config), progress=ConsoleProgress(err_console))


def get_manager(
    directory: Path,
    *,
    sort_key: SortKey | None = None,
    show_hidden: bool | None = None,
) -> FileManager:
    """Build a FileManager for ``directory`` from config and session.

    Explicit ``sort_key``/``show_hidden`` values override the session.
    """
    config = get_config()
    session = load_session()
    try:
        return FileManager(
            get_operator(config),
            directory,
            sort_key=sort_key if sort_key is not None else session.sort_by,
            show_hidden=show_hidden if show_hidden is not None else session.show_hidden,
            config=config,
        )
    except FilemanipError as e:
        fail(e)
