"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from filemanip import __version__
from filemanip.cli.commands import config, listing, manipulate, shell, trash
from filemanip.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="filemanip",
    help="Terminal file manipulation with a trash and undo history.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"filemanip version {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """filemanip - Browse, delete, paste and rename files safely.

    Deleted entries go to a trash directory and can be restored later.
    Use [bold]filemanip shell[/bold] for an interactive session with undo/redo.
    """
    _setup_logging(verbose, quiet)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.command("ls")(listing.ls)
app.command("open")(listing.open_path)
app.command("rm")(manipulate.rm)
app.command("mv")(manipulate.mv)
app.command("paste")(manipulate.paste)
app.command("shell")(shell.shell)
app.add_typer(trash.app, name="trash")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
