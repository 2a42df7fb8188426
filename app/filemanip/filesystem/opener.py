"""Open items with an external program.

The program is chosen by the item's lower-cased extension through the
configured extension map, falling back to the configured default.
"""

import logging

from filemanip.core.config import Config
from filemanip.core.errors import FilesystemError
from filemanip.filesystem.models import Item
from filemanip.utils.shell import command_exists, run_interactive

logger = logging.getLogger(__name__)


def resolve_program(item: Item, config: Config) -> str:
    """Pick the program that opens ``item``."""
    if item.extension is not None:
        program = config.extension_map.get(item.extension.lower())
        if program is not None:
            return program
    return config.default


def open_item(item: Item, config: Config) -> int:
    """Launch the configured program on ``item`` and wait for it.

    Args:
        item: Item to open.
        config: Configuration holding the extension map and default program.

    Returns:
        Exit code of the program.

    Raises:
        FilesystemError: If the program cannot be started.
    """
    program = resolve_program(item, config)
    if not command_exists(program):
        msg = f"Program not found: {program}"
        raise FilesystemError(msg)
    logger.debug("Opening %s with %s", item.path, program)
    try:
        return run_interactive([program, str(item.path)])
    except OSError as e:
        raise FilesystemError(f"Cannot run {program}: {e}") from e
