"""Filesystem manipulation operator.

Implements the three reversible manipulations (delete into the trash,
put/paste, rename), keeps the clipboard, and applies undo/redo on top of
the ManipulationLog.

Batches are processed strictly in input order. The first hard failure
aborts the batch and propagates; work already done for earlier targets is
not rolled back, so callers should re-list the directory after an error.
An undo or redo of a delete that fails partway keeps its progress in the
logged record, and retrying it skips the items already handled.
"""

import logging
import os
import shutil
import time
from collections.abc import Callable, Iterable, Sequence
from collections.abc import Set as AbstractSet
from dataclasses import replace
from pathlib import Path, PurePath

from filemanip.core.errors import FilemanipError, FilesystemError, NotFoundError, RemoveError
from filemanip.filesystem.history import IncompleteManipulationError, ManipulationLog
from filemanip.filesystem.models import Item, ItemKind
from filemanip.filesystem.progress import ProgressReporter
from filemanip.filesystem.snapshot import list_directory, snapshot_item
from filemanip.filesystem.trash import Trash, original_name
from filemanip.filesystem.walk import (
    copy_entry,
    copy_tree,
    remove_path,
    require_text_name,
    walk_tree,
)
from filemanip.models.history import DeleteRecord, ManipulationRecord, PutRecord, RenameRecord

logger = logging.getLogger(__name__)


def resolve_name(
    name: str,
    taken: AbstractSet[str],
    directory: Path | None = None,
    *,
    is_dir: bool = False,
) -> str:
    """Pick a name that collides with nothing in ``taken``.

    The name is returned unchanged when it is free. Otherwise a counter is
    appended to the stem (``report_1.txt``, ``report_2.txt``, ...); for
    directories and extension-less names the counter goes at the end.

    Args:
        name: Desired name.
        taken: Names already used in the destination.
        directory: If given, names that exist on disk there also count as taken.
        is_dir: Whether the entry is a directory (its suffix is not split off).

    Returns:
        A free name.
    """

    def is_free(candidate: str) -> bool:
        if candidate in taken:
            return False
        return directory is None or not os.path.lexists(directory / candidate)

    if is_free(name):
        return name

    if is_dir:
        stem, suffix = name, ""
    else:
        pure = PurePath(name)
        stem, suffix = pure.stem, pure.suffix

    counter = 1
    while True:
        candidate = f"{stem}_{counter}{suffix}"
        if is_free(candidate):
            return candidate
        counter += 1


class FilesystemOperator:
    """Performs logged, reversible filesystem manipulations.

    The operator knows the directory currently on display (set through
    load()) so that a paste without an explicit destination can reuse the
    already-listed names for collision checks.

    Attributes:
        _trash: Trash directory receiving deleted entries.
        _log: Undo/redo history.
        _progress: Receives batch and walk progress.
        _clock: Returns the current unix time; used for trash names.
    """

    def __init__(
        self,
        trash: Trash,
        log: ManipulationLog | None = None,
        *,
        progress: ProgressReporter | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the FilesystemOperator.

        Args:
            trash: Trash directory. Created on first delete.
            log: Undo/redo history. A fresh log is created if omitted.
            progress: Progress reporter. Defaults to a silent reporter.
            clock: Time source for trash names.
        """
        self._trash = trash
        self._log = log if log is not None else ManipulationLog()
        self._progress = progress if progress is not None else ProgressReporter()
        self._clock = clock
        self._clipboard: tuple[Item, ...] = ()
        self._current_dir: Path | None = None
        self._current_names: frozenset[str] = frozenset()

    @property
    def trash(self) -> Trash:
        return self._trash

    @property
    def log(self) -> ManipulationLog:
        return self._log

    @property
    def clipboard(self) -> tuple[Item, ...]:
        return self._clipboard

    @property
    def current_dir(self) -> Path | None:
        return self._current_dir

    def load(self, directory: Path, items: Iterable[Item]) -> None:
        """Set the directory on display and its listed items."""
        self._current_dir = Path(os.path.abspath(directory))
        self._current_names = frozenset(item.name for item in items)

    def yank(self, items: Iterable[Item]) -> tuple[Item, ...]:
        """Replace the clipboard with ``items``."""
        self._clipboard = tuple(items)
        return self._clipboard

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def delete_and_yank(self, targets: Sequence[Item], record: bool = True) -> list[Path | None]:
        """Move items into the trash and put them on the clipboard.

        The clipboard is replaced whether or not the call is logged; it holds
        the deleted items re-pointed at their trash entries, so they can be
        pasted elsewhere.

        Args:
            targets: Items to delete, processed in order.
            record: If True, log one DeleteRecord for the whole batch.

        Returns:
            Trash path per target, None for dangling symlinks that were
            unlinked without being trashed.

        Raises:
            CopyError: If content could not be copied into the trash.
            RemoveError: If a source could not be removed after copying.
            EncodingError: If a directory name is not valid text.
            FilesystemError: If a target overlaps the trash directory or a
                directory subtree cannot be read.
        """
        targets = list(targets)
        self._clipboard = ()
        if not targets:
            return []

        trash_paths: list[Path | None] = []
        self._trash_each(targets, trash_paths)

        if record:
            self._log.append(
                DeleteRecord(
                    trash_paths=tuple(trash_paths),
                    original_items=tuple(targets),
                    source_dir=self._current_dir or targets[0].path.parent,
                )
            )
        return trash_paths

    def _trash_each(self, targets: Sequence[Item], trash_paths: list[Path | None]) -> None:
        """Trash ``targets`` in order, appending each result to ``trash_paths`` once done."""
        for item in targets:
            if self._trash.overlaps(item.path):
                msg = f"Cannot trash {item.path}: overlaps the trash at {self._trash.root}"
                raise FilesystemError(msg)

        self._trash.ensure()
        total = len(targets)
        try:
            for index, item in enumerate(targets):
                self._progress.item(index, total)
                if item.kind == ItemKind.DIRECTORY:
                    trash_path = self._trash_directory(item)
                else:
                    trash_path = self._trash_file(item)
                trash_paths.append(trash_path)
                if trash_path is not None:
                    self._clipboard = (*self._clipboard, item.relocated(trash_path))
        finally:
            self._progress.done()

    def _trash_file(self, item: Item) -> Path | None:
        source = item.path
        if item.kind == ItemKind.SYMLINK and not source.exists():
            # Nothing behind a dangling link worth keeping
            try:
                source.unlink()
            except OSError as e:
                raise RemoveError(f"Cannot remove item: {source}: {e}") from e
            logger.info("Removed dangling symlink %s", source)
            return None

        trash_path = self._trash.allocate(item.name, self._clock())
        copy_entry(source, trash_path)
        try:
            source.unlink()
        except OSError as e:
            raise RemoveError(f"Cannot remove item: {source}: {e}") from e
        logger.info("Trashed %s -> %s", source, trash_path)
        return trash_path

    def _trash_directory(self, item: Item) -> Path:
        source = item.path
        entries = walk_tree(source)
        name = require_text_name(source)
        trash_root = self._trash.allocate(name, self._clock())
        copy_tree(entries, trash_root, self._progress)
        try:
            shutil.rmtree(source)
        except OSError as e:
            raise RemoveError(f"Cannot remove directory: {source}: {e}") from e
        logger.info("Trashed directory %s -> %s", source, trash_root)
        return trash_root

    # ------------------------------------------------------------------
    # Put / restore
    # ------------------------------------------------------------------

    def put(self, targets: Sequence[Item], destination: Path | None = None) -> list[Path]:
        """Paste items into a directory.

        Only a paste into the current directory (``destination`` omitted) is
        logged; explicit destinations are used when replaying history and
        must not add records of their own.

        Args:
            targets: Items to copy, processed in order.
            destination: Target directory. Defaults to the current directory.

        Returns:
            Paths created in the destination, in target order.

        Raises:
            CopyError: If any entry fails to copy.
            FilesystemError: If the destination cannot be listed.
        """
        targets = list(targets)
        if destination is not None:
            return self._put_into(targets, destination)

        if self._current_dir is None:
            msg = "No current directory loaded"
            raise FilesystemError(msg)

        produced = self._put_each(targets, self._current_dir, set(self._current_names))
        self._log.append(
            PutRecord(
                original_items=tuple(targets),
                produced_paths=tuple(produced),
                destination_dir=self._current_dir,
            )
        )
        return produced

    def restore_from_trash(self, trash_items: Sequence[Item], destination: Path) -> list[Path]:
        """Copy trash entries back out and remove them from the trash.

        Restored names drop the timestamp prefix and are renamed further only
        on collision. Not logged.

        Raises:
            CopyError: If an entry fails to copy out.
            RemoveError: If a trash entry cannot be removed after copying.
        """
        produced = self._put_into(trash_items, destination)
        for item in trash_items:
            try:
                remove_path(item.path)
            except OSError as e:
                raise RemoveError(f"Cannot remove trash entry: {item.path}: {e}") from e
        return produced

    def _put_into(self, targets: Sequence[Item], destination: Path) -> list[Path]:
        directory = Path(os.path.abspath(destination))
        taken = {item.name for item in list_directory(directory)}
        return self._put_each(targets, directory, taken)

    def _put_each(self, targets: Sequence[Item], directory: Path, taken: set[str]) -> list[Path]:
        produced: list[Path] = []
        total = len(targets)
        try:
            for index, item in enumerate(targets):
                self._progress.item(index, total)
                produced.append(self._put_one(item, directory, taken))
        finally:
            self._progress.done()
        return produced

    def _put_one(self, item: Item, directory: Path, taken: set[str]) -> Path:
        name = item.name
        if self._trash.contains(item.path):
            name = original_name(name)

        resolved = resolve_name(name, taken, directory, is_dir=item.is_dir)
        taken.add(resolved)
        target = directory / resolved

        if item.is_dir:
            copy_tree(walk_tree(item.path), target, self._progress)
        else:
            copy_entry(item.path, target)
        logger.info("Put %s -> %s", item.path, target)
        return target

    # ------------------------------------------------------------------
    # Rename
    # ------------------------------------------------------------------

    def rename(self, item: Item, new_name: str, record: bool = True) -> Path:
        """Rename an entry within its directory.

        Args:
            item: Entry to rename.
            new_name: New final path component.
            record: If True, log a RenameRecord.

        Returns:
            The new path (unchanged if the name is the same).

        Raises:
            FilesystemError: If the name is invalid or already taken.
            NotFoundError: If the entry no longer exists.
        """
        if not new_name or new_name in (".", "..") or os.sep in new_name:
            msg = f"Invalid name: {new_name!r}"
            raise FilesystemError(msg)
        if new_name == item.name:
            return item.path

        new_path = item.path.with_name(new_name)
        self._move(item.path, new_path)
        if record:
            self._log.append(RenameRecord(original_path=item.path, new_path=new_path))
        return new_path

    def _move(self, source: Path, target: Path) -> None:
        if os.path.lexists(target):
            msg = f"Already exists: {target}"
            raise FilesystemError(msg)
        try:
            os.rename(source, target)
        except FileNotFoundError as e:
            raise NotFoundError(f"No such file or directory: {source}") from e
        except OSError as e:
            raise FilesystemError(f"Cannot rename {source} -> {target}: {e}") from e
        logger.info("Renamed %s -> %s", source, target)

    # ------------------------------------------------------------------
    # Undo / redo
    # ------------------------------------------------------------------

    def undo(self) -> ManipulationRecord:
        """Invert the most recent active manipulation.

        Raises:
            NothingToUndoError: If nothing is left to undo.
            FilesystemError: If inverting fails; the pointer does not move.
        """
        return self._log.undo(self._invert)

    def redo(self) -> ManipulationRecord:
        """Re-apply the earliest undone manipulation.

        Raises:
            NothingToRedoError: If nothing is undone.
            FilesystemError: If re-applying fails; the pointer does not move.
        """
        return self._log.redo(self._reapply)

    def _invert(self, record: ManipulationRecord) -> ManipulationRecord | None:
        match record:
            case DeleteRecord():
                return self._restore_deleted(record)
            case PutRecord():
                self._remove_produced(record.produced_paths)
                return None
            case RenameRecord():
                self._move(record.new_path, record.original_path)
                return None

    def _reapply(self, record: ManipulationRecord) -> ManipulationRecord | None:
        match record:
            case DeleteRecord():
                return self._delete_again(record)
            case PutRecord():
                produced = self._put_into(record.original_items, record.destination_dir)
                return replace(record, produced_paths=tuple(produced))
            case RenameRecord():
                self._move(record.original_path, record.new_path)
                return None

    def _restore_deleted(self, record: DeleteRecord) -> DeleteRecord:
        pending: list[tuple[int, Path]] = []
        for index, (item, trash_path) in enumerate(
            zip(record.original_items, record.trash_paths, strict=True)
        ):
            if trash_path is None:
                continue
            if not os.path.lexists(trash_path) and os.path.lexists(item.path):
                # Restored by an earlier undo that failed further on
                continue
            pending.append((index, trash_path))
        # Fails with NotFoundError before anything moves if an entry is gone
        trash_items = self._trash.items_for(trash_path for _, trash_path in pending)

        restored = list(record.original_items)
        for (index, _), trash_item in zip(pending, trash_items, strict=True):
            parent = record.original_items[index].path.parent
            try:
                [restored_path] = self.restore_from_trash([trash_item], parent)
            except FilemanipError as e:
                partial = replace(record, original_items=tuple(restored))
                raise IncompleteManipulationError(partial, e) from e
            restored[index] = snapshot_item(restored_path)
        return replace(record, original_items=tuple(restored))

    def _delete_again(self, record: DeleteRecord) -> DeleteRecord:
        indexes: list[int] = []
        for index, (item, trash_path) in enumerate(
            zip(record.original_items, record.trash_paths, strict=True)
        ):
            if trash_path is None:
                continue
            if os.path.lexists(trash_path) and not os.path.lexists(item.path):
                # Trashed again by an earlier redo that failed further on
                continue
            indexes.append(index)

        self._clipboard = ()
        new_paths: list[Path | None] = []
        try:
            self._trash_each([record.original_items[index] for index in indexes], new_paths)
        except FilemanipError as e:
            partial = _with_trash_paths(record, indexes, new_paths)
            raise IncompleteManipulationError(partial, e) from e
        return _with_trash_paths(record, indexes, new_paths)

    def _remove_produced(self, paths: Iterable[Path]) -> None:
        for path in paths:
            if not os.path.lexists(path):
                logger.warning("Already removed: %s", path)
                continue
            try:
                remove_path(path)
            except OSError as e:
                raise RemoveError(f"Cannot remove item: {path}: {e}") from e
            logger.info("Removed %s", path)


def _with_trash_paths(
    record: DeleteRecord, indexes: Sequence[int], new_paths: Sequence[Path | None]
) -> DeleteRecord:
    """Point the entries at ``indexes`` to their new trash paths (as far as ``new_paths`` goes)."""
    trash_paths = list(record.trash_paths)
    for index, path in zip(indexes, new_paths, strict=False):
        trash_paths[index] = path
    return replace(record, trash_paths=tuple(trash_paths))
