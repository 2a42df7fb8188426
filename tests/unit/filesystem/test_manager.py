"""Unit tests for the FileManager facade."""

from pathlib import Path
from unittest.mock import patch

import pytest
from filemanip.core.config import Config
from filemanip.core.errors import (
    CopyError,
    FilesystemError,
    NotFoundError,
    NothingToUndoError,
)
from filemanip.core.session import Session
from filemanip.filesystem.manager import FileManager
from filemanip.filesystem.models import SortKey
from filemanip.filesystem.operator import FilesystemOperator
from filemanip.filesystem.snapshot import snapshot_item


def _names(manager: FileManager) -> list[str]:
    return [item.name for item in manager.snapshot]


@pytest.fixture
def manager(operator: FilesystemOperator, work_dir: Path) -> FileManager:
    """FileManager showing work_dir."""
    return FileManager(operator, work_dir)


class TestListing:
    """Tests for listing and navigation."""

    def test_initial_snapshot(self, manager: FileManager, work_dir: Path) -> None:
        """The directory is listed on construction."""
        assert manager.directory == work_dir
        assert _names(manager) == ["docs", ".hidden", "a.txt", "file2.txt", "file10.txt"]

    def test_toggle_hidden(self, manager: FileManager) -> None:
        """Hidden entries disappear and come back."""
        assert manager.toggle_hidden() is False
        assert ".hidden" not in _names(manager)

        assert manager.toggle_hidden() is True
        assert ".hidden" in _names(manager)

    def test_set_sort(self, manager: FileManager) -> None:
        """Changing the sort key re-lists the directory."""
        manager.set_sort(SortKey.TIME)

        assert manager.sort_key == SortKey.TIME
        assert manager.snapshot[0].name == "docs"

    def test_change_dir_and_up(self, manager: FileManager, work_dir: Path) -> None:
        """change_dir enters a directory; go_up leaves it."""
        manager.change_dir(work_dir / "docs")
        assert _names(manager) == ["nested", "guide.md"]

        manager.go_up()
        assert manager.directory == work_dir

    def test_change_dir_failure_keeps_directory(
        self, manager: FileManager, work_dir: Path
    ) -> None:
        """A directory that cannot be listed leaves the view unchanged."""
        with pytest.raises(FilesystemError):
            manager.change_dir(work_dir / "missing")

        assert manager.directory == work_dir

    def test_get_item_out_of_range(self, manager: FileManager) -> None:
        """Invalid indexes raise NotFoundError."""
        with pytest.raises(NotFoundError):
            manager.get_item(99)
        with pytest.raises(NotFoundError):
            manager.get_item(-1)

    def test_find(self, manager: FileManager) -> None:
        """find() looks up a displayed item by name."""
        assert manager.find("a.txt").name == "a.txt"
        with pytest.raises(NotFoundError):
            manager.find("nope")

    def test_session_export(self, operator: FilesystemOperator, work_dir: Path) -> None:
        """Listing preferences round-trip through Session."""
        manager = FileManager(operator, work_dir, sort_key=SortKey.TIME, show_hidden=False)

        assert manager.session() == Session(sort_by=SortKey.TIME, show_hidden=False)

    def test_create_uses_session(self, work_dir: Path, tmp_path: Path) -> None:
        """create() applies session preferences and the configured trash."""
        config = Config(trash_dir=tmp_path / "bin")

        manager = FileManager.create(work_dir, config, Session(show_hidden=False))

        assert ".hidden" not in _names(manager)
        assert manager.operator.trash.root == tmp_path / "bin"


class TestActions:
    """Tests for actions routed through the manager."""

    def test_delete_refreshes(self, manager: FileManager, work_dir: Path) -> None:
        """The snapshot no longer shows a deleted item."""
        index = _names(manager).index("a.txt")

        manager.delete(index)

        assert "a.txt" not in _names(manager)
        assert len(manager.clipboard) == 1

    def test_delete_selection(self, manager: FileManager) -> None:
        """Selected items take precedence over the index."""
        names = _names(manager)
        manager.toggle_select(names.index("file2.txt"))
        manager.toggle_select(names.index("file10.txt"))

        manager.delete(0)

        assert _names(manager) == ["docs", ".hidden", "a.txt"]
        assert len(manager.selection) == 0

    def test_targets_need_index_or_selection(self, manager: FileManager) -> None:
        """Without a selection an index is required."""
        with pytest.raises(NotFoundError, match="No item selected"):
            manager.targets()

    def test_failed_delete_keeps_selection(self, manager: FileManager) -> None:
        """A delete that fails before moving anything leaves the selection as it was."""
        names = _names(manager)
        manager.toggle_select(names.index("file2.txt"))
        manager.toggle_select(names.index("file10.txt"))

        with (
            patch("filemanip.filesystem.walk.shutil.copy2", side_effect=OSError("disk full")),
            pytest.raises(CopyError),
        ):
            manager.delete()

        assert len(manager.selection) == 2

    def test_selection_pruned_after_delete(self, manager: FileManager) -> None:
        """Deleting an item drops it from the selection."""
        manager.select_to_bottom(3)
        manager.delete(0)

        assert len(manager.selection) == 0

    def test_yank_and_paste_elsewhere(self, manager: FileManager, work_dir: Path) -> None:
        """Yanked items are pasted into the newly displayed directory."""
        manager.yank(_names(manager).index("a.txt"))
        manager.change_dir(work_dir / "docs")

        [target] = manager.paste()

        assert target == work_dir / "docs" / "a.txt"
        assert "a.txt" in _names(manager)

    def test_paste_empty_clipboard(self, manager: FileManager) -> None:
        """Pasting an empty clipboard does nothing."""
        assert manager.paste() == []
        assert len(manager.operator.log) == 0

    def test_paste_avoids_hidden_names(self, operator: FilesystemOperator, work_dir: Path) -> None:
        """Hidden entries still block names while they are not shown."""
        manager = FileManager(operator, work_dir, show_hidden=False)
        manager.operator.yank([snapshot_item(work_dir / ".hidden")])

        [target] = manager.paste()

        assert target.name == ".hidden_1"

    def test_rename_and_undo_redo(self, manager: FileManager, work_dir: Path) -> None:
        """Rename, undo and redo refresh the snapshot each time."""
        manager.rename(_names(manager).index("a.txt"), "z.txt")
        assert "z.txt" in _names(manager)

        manager.undo()
        assert "a.txt" in _names(manager)

        manager.redo()
        assert "z.txt" in _names(manager)

    def test_delete_undo_restores_listing(self, manager: FileManager) -> None:
        """Undoing a delete shows the item again."""
        before = _names(manager)
        manager.delete(before.index("docs"))

        manager.undo()

        assert _names(manager) == before

    def test_undo_empty(self, manager: FileManager) -> None:
        """Undo with no history raises NothingToUndoError."""
        with pytest.raises(NothingToUndoError):
            manager.undo()

    def test_failed_action_still_refreshes(self, manager: FileManager, work_dir: Path) -> None:
        """The snapshot is re-listed after a failure."""
        (work_dir / "outside.txt").write_text("appeared")

        with pytest.raises(FilesystemError):
            manager.rename(_names(manager).index("a.txt"), "file2.txt")

        assert "outside.txt" in _names(manager)

    def test_open_directory(self, manager: FileManager, work_dir: Path) -> None:
        """Opening a directory enters it."""
        assert manager.open(_names(manager).index("docs")) == 0
        assert manager.directory == work_dir / "docs"

    def test_open_symlink_to_directory(self, manager: FileManager, work_dir: Path) -> None:
        """Opening a symlink to a directory enters its target."""
        (work_dir / "shortcut").symlink_to(work_dir / "docs")
        manager.refresh()

        manager.open(_names(manager).index("shortcut"))

        assert manager.directory == (work_dir / "docs").resolve()

    def test_open_file(self, manager: FileManager) -> None:
        """Opening a file launches its program."""
        index = _names(manager).index("a.txt")

        with patch("filemanip.filesystem.manager.open_item", return_value=0) as mock_open:
            assert manager.open(index) == 0

        mock_open.assert_called_once()
        assert mock_open.call_args[0][0].name == "a.txt"
