"""Recursive tree walking and structure-preserving copies.

Copies run in two passes: the subtree is walked into a list first (giving
the total that drives progress reporting and making the copy immune to
entries it creates itself), then each entry is re-created under the target
root at the same relative position.
"""

import logging
import os
import shutil
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from filemanip.core.errors import CopyError, EncodingError, FilesystemError
from filemanip.filesystem.progress import ProgressReporter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """One entry found while walking a subtree.

    Attributes:
        path: Absolute path of the entry.
        is_dir: True for real directories; symlinks are never followed.
    """

    path: Path
    is_dir: bool


def _iter_children(directory: Path) -> Iterator[WalkEntry]:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise FilesystemError(f"Cannot read directory {directory}: {e}") from e

    for entry in entries:
        is_dir = entry.is_dir(follow_symlinks=False)
        yield WalkEntry(path=Path(entry.path), is_dir=is_dir)
        if is_dir:
            yield from _iter_children(Path(entry.path))


def walk_tree(root: Path) -> list[WalkEntry]:
    """Walk a directory subtree in pre-order, root first.

    Args:
        root: Directory to walk.

    Returns:
        List of entries; the first entry is the root itself.

    Raises:
        FilesystemError: If any directory in the subtree cannot be read.
    """
    return [WalkEntry(path=root, is_dir=True), *_iter_children(root)]


def require_text_name(path: Path) -> str:
    """Return the final component of ``path`` as valid text.

    Raises:
        EncodingError: If the name holds bytes that are not valid UTF-8.
    """
    name = path.name
    try:
        name.encode("utf-8")
    except UnicodeEncodeError as e:
        raise EncodingError(f"Cannot convert file name to UTF-8: {path!r}") from e
    return name


def copy_entry(source: Path, destination: Path) -> None:
    """Copy a single file or symlink, keeping links as links.

    Raises:
        CopyError: If the copy fails.
    """
    try:
        shutil.copy2(source, destination, follow_symlinks=False)
    except OSError as e:
        raise CopyError(f"Cannot copy item: {source}: {e}") from e


def copy_tree(
    entries: list[WalkEntry],
    target_root: Path,
    progress: ProgressReporter,
) -> Path:
    """Re-create a walked subtree under ``target_root``.

    Args:
        entries: Result of walk_tree(); the first entry is the source root.
        target_root: Directory to create; must not exist yet.
        progress: Receives one stage update per entry.

    Returns:
        target_root.

    Raises:
        CopyError: If the root cannot be created or any entry fails to copy.
    """
    source_root = entries[0].path
    total = len(entries)

    progress.stage(0, total)
    try:
        target_root.mkdir()
    except OSError as e:
        raise CopyError(f"Cannot create directory {target_root}: {e}") from e

    for index, entry in enumerate(entries[1:], start=1):
        progress.stage(index, total)
        destination = target_root / entry.path.relative_to(source_root)
        try:
            if entry.is_dir:
                destination.mkdir(parents=True, exist_ok=True)
                continue
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CopyError(f"Cannot create directory {destination}: {e}") from e
        copy_entry(entry.path, destination)

    logger.debug("Copied %d entries from %s to %s", total, source_root, target_root)
    return target_root


def remove_path(path: Path) -> None:
    """Remove a file, symlink or directory subtree.

    Raises:
        OSError: If removal fails.
    """
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()
