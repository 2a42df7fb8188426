"""Unit tests for the rm, mv and paste commands."""

from pathlib import Path

from filemanip.cli.main import app
from filemanip.core.paths import get_trash_dir
from typer.testing import CliRunner

runner = CliRunner()


class TestRmCommand:
    """Tests for the rm command."""

    def test_rm_moves_to_trash(self, work_dir: Path) -> None:
        """Files and directories end up in the trash."""
        result = runner.invoke(app, ["rm", str(work_dir / "a.txt"), str(work_dir / "docs")])

        assert result.exit_code == 0
        assert not (work_dir / "a.txt").exists()
        assert not (work_dir / "docs").exists()
        names = sorted(p.name.split("_", 1)[1] for p in get_trash_dir().iterdir())
        assert names == ["a.txt", "docs"]

    def test_rm_missing_path(self, work_dir: Path) -> None:
        """A missing path fails before anything is deleted."""
        result = runner.invoke(app, ["rm", str(work_dir / "a.txt"), str(work_dir / "nope")])

        assert result.exit_code == 1
        assert "No such file or directory" in result.output
        assert (work_dir / "a.txt").exists()

    def test_rm_root(self) -> None:
        """The filesystem root is reported as an error, not a traceback."""
        result = runner.invoke(app, ["rm", "/"])

        assert result.exit_code == 1
        assert "Not an entry with a name" in result.output

    def test_rm_dangling_symlink(self, tmp_path: Path) -> None:
        """Dangling symlinks are removed without a trash entry."""
        link = tmp_path / "dangling"
        link.symlink_to(tmp_path / "missing")

        result = runner.invoke(app, ["rm", str(link)])

        assert result.exit_code == 0
        assert "dangling symlink" in result.output
        assert not link.is_symlink()


class TestMvCommand:
    """Tests for the mv command."""

    def test_rename(self, work_dir: Path) -> None:
        """mv renames within the directory."""
        result = runner.invoke(app, ["mv", str(work_dir / "a.txt"), "b.txt"])

        assert result.exit_code == 0
        assert (work_dir / "b.txt").read_text() == "alpha\n"

    def test_rename_collision(self, work_dir: Path) -> None:
        """mv refuses to overwrite."""
        result = runner.invoke(app, ["mv", str(work_dir / "a.txt"), "file2.txt"])

        assert result.exit_code == 1
        assert "Already exists" in result.output
        assert (work_dir / "a.txt").exists()


class TestPasteCommand:
    """Tests for the paste command."""

    def test_paste_with_collision(self, work_dir: Path) -> None:
        """Pasting into the same directory numbers the copy."""
        result = runner.invoke(app, ["paste", str(work_dir / "a.txt"), "--dest", str(work_dir)])

        assert result.exit_code == 0
        assert (work_dir / "a_1.txt").read_text() == "alpha\n"
        assert (work_dir / "a.txt").exists()

    def test_paste_directory(self, work_dir: Path, tmp_path: Path) -> None:
        """Directories are copied recursively."""
        dest = tmp_path / "dest"
        dest.mkdir()

        result = runner.invoke(app, ["paste", str(work_dir / "docs"), "-d", str(dest)])

        assert result.exit_code == 0
        assert (dest / "docs" / "nested" / "deep.txt").exists()

    def test_paste_from_trash(self, work_dir: Path, tmp_path: Path) -> None:
        """Trash entries are pasted under their original name."""
        runner.invoke(app, ["rm", str(work_dir / "a.txt")])
        [entry] = get_trash_dir().iterdir()
        dest = tmp_path / "dest"
        dest.mkdir()

        result = runner.invoke(app, ["paste", str(entry), "-d", str(dest)])

        assert result.exit_code == 0
        assert (dest / "a.txt").read_text() == "alpha\n"
        assert entry.exists()

    def test_paste_missing_destination(self, work_dir: Path, tmp_path: Path) -> None:
        """A destination that does not exist is an error."""
        result = runner.invoke(app, ["paste", str(work_dir / "a.txt"), "-d", str(tmp_path / "no")])

        assert result.exit_code == 1
