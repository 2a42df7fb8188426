"""Trash directory ownership and naming.

Every trash entry is named ``<unix-epoch-seconds>_<original-name>``. An
entry's presence in the trash is the only proof that a deletion can be
undone, so entries are never overwritten: when two deletions of the same
name land in the same second, the later one takes the next free second.
"""

import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

from filemanip.core.config import Config
from filemanip.core.errors import FilesystemError, RemoveError
from filemanip.core.paths import ensure_trash_dir, get_trash_dir
from filemanip.filesystem.models import Item, SortKey
from filemanip.filesystem.snapshot import list_directory, snapshot_item
from filemanip.filesystem.walk import remove_path

logger = logging.getLogger(__name__)

TRASH_NAME_SEPARATOR = "_"

_TRASH_NAME = re.compile(r"^(?P<timestamp>\d+)_(?P<name>.+)$", re.DOTALL)


def trash_entry_name(name: str, timestamp: int) -> str:
    """Build the stored name for ``name`` trashed at ``timestamp``."""
    return f"{timestamp}{TRASH_NAME_SEPARATOR}{name}"


def original_name(stored_name: str) -> str:
    """Recover the pre-deletion name from a stored trash name.

    The timestamp is parsed up to the first separator rather than by a fixed
    width, so names stay recoverable whatever the number of digits. Names
    without a timestamp prefix are returned unchanged.
    """
    match = _TRASH_NAME.match(stored_name)
    if match is None:
        return stored_name
    return match.group("name")


class Trash:
    """Engine-owned holding area for deleted content.

    Attributes:
        root: Absolute path of the trash directory.
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(os.path.abspath(root))

    @property
    def root(self) -> Path:
        return self._root

    def ensure(self) -> Path:
        """Create the trash directory if needed.

        Raises:
            FilesystemError: If the directory cannot be created.
        """
        try:
            return ensure_trash_dir(self._root)
        except RuntimeError as e:
            raise FilesystemError(str(e)) from e

    def allocate(self, name: str, now: float) -> Path:
        """Choose a free trash path for ``name`` deleted at ``now``.

        Args:
            name: Original entry name.
            now: Current time as a unix timestamp.

        Returns:
            Path inside the trash that does not exist yet.
        """
        timestamp = int(now)
        candidate = self._root / trash_entry_name(name, timestamp)
        while os.path.lexists(candidate):
            timestamp += 1
            candidate = self._root / trash_entry_name(name, timestamp)
        return candidate

    def contains(self, path: Path) -> bool:
        """Check whether ``path`` is a direct entry of the trash directory."""
        parent = Path(os.path.abspath(path)).parent
        if parent == self._root:
            return True
        return os.path.realpath(parent) == os.path.realpath(self._root)

    def overlaps(self, path: Path) -> bool:
        """Check whether ``path`` is the trash directory, lies inside it, or contains it.

        The final component of ``path`` is not resolved, so a symlink that
        merely points at the trash does not overlap it.
        """
        path = Path(os.path.abspath(path))
        real_path = os.path.join(os.path.realpath(path.parent), path.name)
        real_root = os.path.realpath(self._root)
        return os.path.commonpath([real_path, real_root]) in (real_path, real_root)

    def entries(self) -> tuple[Item, ...]:
        """List trash entries, most recently modified first.

        Returns an empty tuple when the trash directory does not exist yet.
        """
        if not self._root.is_dir():
            return ()
        return list_directory(self._root, SortKey.TIME, show_hidden=True)

    def items_for(self, paths: Iterable[Path]) -> list[Item]:
        """Rebuild Items for the given trash paths.

        Raises:
            NotFoundError: If a trash entry was removed outside the engine.
        """
        return [snapshot_item(path) for path in paths]

    def empty(self) -> int:
        """Permanently delete every trash entry.

        Returns:
            Number of entries removed.

        Raises:
            RemoveError: If an entry cannot be removed; earlier entries stay removed.
        """
        removed = 0
        for item in self.entries():
            try:
                remove_path(item.path)
            except OSError as e:
                raise RemoveError(f"Cannot remove trash entry {item.path}: {e}") from e
            removed += 1
        logger.info("Emptied trash %s (%d entries)", self._root, removed)
        return removed


def trash_for(config: Config) -> Trash:
    """Build the Trash configured in ``config`` (XDG data dir by default)."""
    return Trash(config.trash_dir if config.trash_dir is not None else get_trash_dir())
