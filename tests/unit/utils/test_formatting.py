"""Unit tests for Rich formatting helpers."""

from pathlib import Path

import pytest
from filemanip.filesystem.models import Item, ItemKind
from filemanip.utils.formatting import (
    create_items_table,
    create_trash_table,
    format_name,
    format_size,
    format_time,
)


class TestFormatSize:
    """Tests for format_size."""

    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (512, "512 B"),
            (2048, "2.0 KB"),
            (5 * 1024 * 1024, "5.0 MB"),
        ],
    )
    def test_units(self, size: int, expected: str) -> None:
        """Sizes are scaled to the largest fitting unit."""
        assert format_size(size) == expected


class TestFormatTime:
    """Tests for format_time."""

    def test_iso_timestamp(self) -> None:
        """Timestamps are shortened to minutes."""
        assert format_time("2024-03-01T12:34:56+01:00") == "2024-03-01 12:34"

    def test_missing(self) -> None:
        """Unknown times render as an empty string."""
        assert format_time(None) == ""


class TestFormatName:
    """Tests for format_name."""

    def test_directory_slash(self) -> None:
        """Directories get a trailing slash and the directory style."""
        item = Item(kind=ItemKind.DIRECTORY, name="docs", path=Path("/w/docs"))

        assert format_name(item) == "[kind.directory]docs/[/kind.directory]"

    def test_symlink_target(self) -> None:
        """Directory symlinks show their target."""
        item = Item(
            kind=ItemKind.SYMLINK,
            name="link",
            path=Path("/w/link"),
            symlink_target=Path("/w/docs"),
        )

        assert "link -> /w/docs" in format_name(item)

    def test_selected(self) -> None:
        """Selected items use the selection style."""
        item = Item(kind=ItemKind.FILE, name="a.txt", path=Path("/w/a.txt"))

        assert format_name(item, selected=True) == "[selected]a.txt[/selected]"

    def test_markup_escaped(self) -> None:
        """Names that look like markup are escaped."""
        item = Item(kind=ItemKind.FILE, name="[red]x", path=Path("/w/[red]x"))

        assert "\\[red]x" in format_name(item)


class TestTables:
    """Tests for table builders."""

    def test_items_table(self) -> None:
        """One row per item with index, name, size and time columns."""
        items = [
            Item(kind=ItemKind.DIRECTORY, name="docs", path=Path("/w/docs")),
            Item(kind=ItemKind.FILE, name="a.txt", path=Path("/w/a.txt"), size=10),
        ]

        table = create_items_table(items, title="/w")

        assert table.row_count == 2
        assert [c.header for c in table.columns] == ["#", "Name", "Size", "Modified"]

    def test_trash_table_shows_original_name(self) -> None:
        """Trash rows pair the stored name with the original name."""
        entry = Item(
            kind=ItemKind.FILE,
            name="1700000000_report.txt",
            path=Path("/trash/1700000000_report.txt"),
        )

        table = create_trash_table([entry])

        assert table.row_count == 1
        original_cells = list(table.columns[1].cells)
        assert "report.txt" in str(original_cells[0])
        assert "1700000000" not in str(original_cells[0])
