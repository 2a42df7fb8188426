"""File manager state driven by the interactive loop.

FileManager owns the directory on display, its snapshot and selection,
and routes user actions to the FilesystemOperator. Every mutating call
re-lists the directory afterwards, also when the call fails, because a
failed batch may still have changed the disk.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from filemanip.core.config import Config
from filemanip.core.errors import FilemanipError, FilesystemError, NotFoundError
from filemanip.core.session import Session
from filemanip.filesystem.models import Item, SortKey
from filemanip.filesystem.opener import open_item
from filemanip.filesystem.operator import FilesystemOperator
from filemanip.filesystem.progress import ProgressReporter
from filemanip.filesystem.selection import Selection
from filemanip.filesystem.snapshot import filter_hidden, list_directory
from filemanip.filesystem.trash import trash_for
from filemanip.models.history import ManipulationRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FileManager:
    """Current directory, snapshot, selection and the actions on them.

    The operator is given the unfiltered listing so that hidden entries
    still count as taken names when pasting, even while they are not
    displayed.
    """

    def __init__(
        self,
        operator: FilesystemOperator,
        directory: Path,
        *,
        sort_key: SortKey = SortKey.NAME,
        show_hidden: bool = True,
        config: Config | None = None,
    ) -> None:
        """Initialize the FileManager and list ``directory``.

        Raises:
            FilesystemError: If ``directory`` cannot be listed.
        """
        self._operator = operator
        self._config = config if config is not None else Config()
        self._directory = Path(os.path.abspath(directory))
        self._sort_key = sort_key
        self._show_hidden = show_hidden
        self._snapshot: tuple[Item, ...] = ()
        self._selection = Selection()
        self.refresh()

    @classmethod
    def create(
        cls,
        directory: Path,
        config: Config,
        session: Session | None = None,
        progress: ProgressReporter | None = None,
    ) -> FileManager:
        """Build a FileManager with a trash taken from the configuration."""
        session = session if session is not None else Session()
        return cls(
            FilesystemOperator(trash_for(config), progress=progress),
            directory,
            sort_key=session.sort_by,
            show_hidden=session.show_hidden,
            config=config,
        )

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def snapshot(self) -> tuple[Item, ...]:
        return self._snapshot

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def operator(self) -> FilesystemOperator:
        return self._operator

    @property
    def clipboard(self) -> tuple[Item, ...]:
        return self._operator.clipboard

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def show_hidden(self) -> bool:
        return self._show_hidden

    def session(self) -> Session:
        """Export the listing preferences for persistence."""
        return Session(sort_by=self._sort_key, show_hidden=self._show_hidden)

    # ------------------------------------------------------------------
    # Listing and navigation
    # ------------------------------------------------------------------

    def refresh(self) -> tuple[Item, ...]:
        """Re-list the current directory.

        Raises:
            FilesystemError: If the directory cannot be listed.
        """
        listing = list_directory(self._directory, self._sort_key, show_hidden=True)
        self._snapshot = listing if self._show_hidden else tuple(filter_hidden(listing))
        self._operator.load(self._directory, listing)
        self._selection.prune(self._snapshot)
        return self._snapshot

    def change_dir(self, directory: Path) -> None:
        """Display another directory; the current one stays on failure.

        Raises:
            FilesystemError: If ``directory`` cannot be listed.
        """
        previous = self._directory
        self._directory = Path(os.path.abspath(directory))
        try:
            self.refresh()
        except FilesystemError:
            self._directory = previous
            raise
        self._selection.reset()

    def go_up(self) -> None:
        """Display the parent directory."""
        self.change_dir(self._directory.parent)

    def set_sort(self, sort_key: SortKey) -> None:
        self._sort_key = sort_key
        self.refresh()

    def toggle_hidden(self) -> bool:
        """Flip hidden-file visibility; returns the new state."""
        self._show_hidden = not self._show_hidden
        self.refresh()
        return self._show_hidden

    def get_item(self, index: int) -> Item:
        """Item at ``index`` in the displayed snapshot.

        Raises:
            NotFoundError: If ``index`` is out of range.
        """
        if not 0 <= index < len(self._snapshot):
            msg = f"Cannot choose item: index {index} out of range"
            raise NotFoundError(msg)
        return self._snapshot[index]

    def find(self, name: str) -> Item:
        """Displayed item called ``name``.

        Raises:
            NotFoundError: If no displayed item has that name.
        """
        for item in self._snapshot:
            if item.name == name:
                return item
        msg = f"No such item: {name}"
        raise NotFoundError(msg)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle_select(self, index: int) -> bool:
        return self._selection.toggle(self.get_item(index))

    def select_from_top(self, index: int) -> None:
        self._selection.select_from_top(self._snapshot, index)

    def select_to_bottom(self, index: int) -> None:
        self._selection.select_to_bottom(self._snapshot, index)

    def reset_selection(self) -> None:
        self._selection.reset()

    def targets(self, index: int | None = None) -> list[Item]:
        """Items an action applies to: the selection, else the item at ``index``.

        Raises:
            NotFoundError: If nothing is selected and ``index`` is invalid.
        """
        selected = self._selection.items(self._snapshot)
        if selected:
            return selected
        if index is None:
            msg = "No item selected"
            raise NotFoundError(msg)
        return [self.get_item(index)]

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def yank(self, index: int | None = None) -> tuple[Item, ...]:
        """Copy the targets to the clipboard."""
        return self._operator.yank(self.targets(index))

    def delete(self, index: int | None = None) -> list[Path | None]:
        """Move the targets to the trash (logged)."""
        targets = self.targets(index)
        trash_paths = self._mutate(lambda: self._operator.delete_and_yank(targets, record=True))
        self._selection.reset()
        return trash_paths

    def paste(self) -> list[Path]:
        """Paste the clipboard into the current directory (logged)."""
        clipboard = self._operator.clipboard
        if not clipboard:
            return []
        return self._mutate(lambda: self._operator.put(clipboard))

    def rename(self, index: int, new_name: str) -> Path:
        """Rename the item at ``index`` (logged)."""
        item = self.get_item(index)
        return self._mutate(lambda: self._operator.rename(item, new_name))

    def undo(self) -> ManipulationRecord:
        return self._mutate(self._operator.undo)

    def redo(self) -> ManipulationRecord:
        return self._mutate(self._operator.redo)

    def open(self, index: int) -> int:
        """Enter a directory item, or open a file item with its program.

        Returns:
            Exit code of the program, 0 when a directory was entered.
        """
        item = self.get_item(index)
        if item.is_dir or item.symlink_target is not None:
            self.change_dir(item.symlink_target or item.path)
            return 0
        return open_item(item, self._config)

    def _mutate(self, action: Callable[[], T]) -> T:
        try:
            result = action()
        except FilemanipError:
            self._refresh_after_failure()
            raise
        self.refresh()
        return result

    def _refresh_after_failure(self) -> None:
        try:
            self.refresh()
        except FilesystemError as e:
            logger.warning("Cannot refresh %s after failure: %s", self._directory, e)
