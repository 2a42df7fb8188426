"""Directory snapshot builder.

Lists the direct children of a directory into an ordered, immutable tuple
of Items: directories first, then files and symlinks, each group sorted by
the requested key. Unreadable entries degrade into a File item with no
metadata instead of aborting the listing.
"""

import logging
import os
import re
import stat
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from filemanip.core.errors import FilesystemError, NotFoundError
from filemanip.filesystem.models import Item, ItemKind, SortKey

logger = logging.getLogger(__name__)

_DIGIT_RUN = re.compile(r"(\d+)")


def natural_key(name: str) -> tuple[tuple[int, int, str], ...]:
    """Build a digit-aware sort key so that ``file2`` sorts before ``file10``."""
    # re.split with a capture group puts digit runs at the odd indices
    return tuple(
        (0, int(part), "") if index % 2 else (1, 0, part)
        for index, part in enumerate(_DIGIT_RUN.split(name))
        if part
    )


def _time_key(item: Item) -> tuple[int, float]:
    if item.modified_at is None:
        return (0, 0.0)
    return (1, datetime.fromisoformat(item.modified_at).timestamp())


def sort_items(items: Iterable[Item], sort_key: SortKey) -> list[Item]:
    """Sort items by the given key.

    Name order is natural order with the raw name as tie-breaker. Time order
    is newest first; items without a modification time come last, and equal
    times keep natural name order.
    """
    by_name = sorted(items, key=lambda i: (natural_key(i.name), i.name))
    if sort_key == SortKey.NAME:
        return by_name
    return sorted(by_name, key=_time_key, reverse=True)


def filter_hidden(items: Iterable[Item]) -> list[Item]:
    """Drop dot-files, preserving the order of the remaining items."""
    return [item for item in items if not item.hidden]


def _build_item(path: Path, st: os.stat_result | None) -> Item:
    name = path.name
    suffix = path.suffix
    extension = suffix[1:].lower() if suffix else None
    hidden = name.startswith(".")

    if st is None:
        return Item(kind=ItemKind.FILE, name=name, path=path, extension=extension, hidden=hidden)

    if stat.S_ISDIR(st.st_mode):
        kind = ItemKind.DIRECTORY
    elif stat.S_ISLNK(st.st_mode):
        kind = ItemKind.SYMLINK
    else:
        kind = ItemKind.FILE

    symlink_target: Path | None = None
    if kind == ItemKind.SYMLINK:
        try:
            if stat.S_ISDIR(os.stat(path).st_mode):
                symlink_target = path.resolve()
        except OSError:
            # Dangling link
            symlink_target = None

    modified_at = datetime.fromtimestamp(st.st_mtime).astimezone().isoformat(timespec="seconds")

    return Item(
        kind=kind,
        name=name,
        path=path,
        symlink_target=symlink_target,
        size=st.st_size,
        extension=extension,
        modified_at=modified_at,
        hidden=hidden,
    )


def _read_item(path: Path) -> Item:
    try:
        st = os.lstat(path)
    except OSError as e:
        logger.debug("Cannot read metadata of %s: %s", path, e)
        st = None
    return _build_item(path, st)


def snapshot_item(path: Path) -> Item:
    """Build an Item for a single path.

    Args:
        path: Path to snapshot. Made absolute, but symlinks are not resolved.

    Returns:
        Item describing the entry.

    Raises:
        NotFoundError: If nothing exists at ``path``.
        FilesystemError: If ``path`` has no final component, like ``/``.
    """
    path = Path(os.path.abspath(path))
    if not path.name:
        msg = f"Not an entry with a name: {path}"
        raise FilesystemError(msg)
    try:
        st = os.lstat(path)
    except FileNotFoundError as e:
        raise NotFoundError(f"No such file or directory: {path}") from e
    except OSError as e:
        logger.debug("Cannot read metadata of %s: %s", path, e)
        st = None
    return _build_item(path, st)


def list_directory(
    path: Path,
    sort_key: SortKey = SortKey.NAME,
    show_hidden: bool = True,
) -> tuple[Item, ...]:
    """List a directory into an ordered snapshot.

    Args:
        path: Directory to enumerate (non-recursive).
        sort_key: Ordering applied within the directory and file groups.
        show_hidden: If False, dot-files are filtered out after sorting.

    Returns:
        Tuple of Items, directories before files and symlinks.

    Raises:
        FilesystemError: If the directory itself cannot be enumerated.
    """
    directory = Path(os.path.abspath(path))
    try:
        with os.scandir(directory) as it:
            children = [directory / entry.name for entry in it]
    except OSError as e:
        raise FilesystemError(f"Cannot read directory {directory}: {e}") from e

    directories: list[Item] = []
    others: list[Item] = []
    for child in children:
        item = _read_item(child)
        if item.kind == ItemKind.DIRECTORY:
            directories.append(item)
        else:
            others.append(item)

    ordered = sort_items(directories, sort_key) + sort_items(others, sort_key)
    if not show_hidden:
        ordered = filter_hidden(ordered)
    return tuple(ordered)
