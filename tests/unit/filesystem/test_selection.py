"""Unit tests for the selection set."""

from pathlib import Path

from filemanip.filesystem.models import Item, ItemKind
from filemanip.filesystem.selection import Selection


def _snapshot(tmp_path: Path, *names: str) -> tuple[Item, ...]:
    return tuple(Item(kind=ItemKind.FILE, name=n, path=tmp_path / n) for n in names)


class TestSelection:
    """Tests for Selection."""

    def test_toggle(self, tmp_path: Path) -> None:
        """toggle() flips membership and reports the new state."""
        [item] = _snapshot(tmp_path, "a")
        selection = Selection()

        assert selection.toggle(item) is True
        assert item in selection
        assert selection.toggle(item) is False
        assert item not in selection

    def test_select_from_top(self, tmp_path: Path) -> None:
        """Items from the top through the index are selected."""
        snapshot = _snapshot(tmp_path, "a", "b", "c", "d")
        selection = Selection()

        selection.select_from_top(snapshot, 1)

        assert [i.name for i in selection.items(snapshot)] == ["a", "b"]

    def test_select_to_bottom(self, tmp_path: Path) -> None:
        """Items from the index to the end are selected."""
        snapshot = _snapshot(tmp_path, "a", "b", "c", "d")
        selection = Selection()
        selection.toggle(snapshot[0])

        selection.select_to_bottom(snapshot, 2)

        assert [i.name for i in selection.items(snapshot)] == ["c", "d"]

    def test_items_in_snapshot_order(self, tmp_path: Path) -> None:
        """Selected items follow snapshot order, not selection order."""
        snapshot = _snapshot(tmp_path, "a", "b", "c")
        selection = Selection()
        selection.toggle(snapshot[2])
        selection.toggle(snapshot[0])

        assert [i.name for i in selection.items(snapshot)] == ["a", "c"]

    def test_prune_and_reset(self, tmp_path: Path) -> None:
        """prune() drops vanished paths; reset() drops everything."""
        snapshot = _snapshot(tmp_path, "a", "b")
        selection = Selection()
        selection.select_from_top(snapshot, 1)

        selection.prune(snapshot[:1])
        assert len(selection) == 1

        selection.reset()
        assert len(selection) == 0

    def test_refreshed_item_stays_selected(self, tmp_path: Path) -> None:
        """Selection is keyed by path, so a new snapshot keeps it."""
        [old] = _snapshot(tmp_path, "a")
        selection = Selection()
        selection.toggle(old)

        refreshed = Item(kind=ItemKind.FILE, name="a", path=tmp_path / "a", size=10)

        assert refreshed in selection
