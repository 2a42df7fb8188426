"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from filemanip.filesystem.operator import FilesystemOperator
from filemanip.filesystem.trash import Trash

FIXED_TIME = 1700000000


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point every XDG base directory into the test's tmp_path."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg / "state"))
    monkeypatch.setenv("XDG_DATA_HOME", str(xdg / "data"))
    return xdg


@pytest.fixture
def trash(tmp_path: Path) -> Trash:
    """Trash rooted in tmp_path (created lazily by the engine)."""
    return Trash(tmp_path / "trash")


@pytest.fixture
def operator(trash: Trash) -> FilesystemOperator:
    """Operator with a fixed clock so trash names are predictable."""
    return FilesystemOperator(trash, clock=lambda: FIXED_TIME)


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    """Directory with a small mixed tree.

    work/
        docs/
            guide.md
            nested/
                deep.txt
        a.txt
        file2.txt
        file10.txt
        .hidden
    """
    root = tmp_path / "work"
    (root / "docs" / "nested").mkdir(parents=True)
    (root / "docs" / "guide.md").write_text("# guide\n")
    (root / "docs" / "nested" / "deep.txt").write_text("deep\n")
    (root / "a.txt").write_text("alpha\n")
    (root / "file2.txt").write_text("two\n")
    (root / "file10.txt").write_text("ten\n")
    (root / ".hidden").write_text("secret\n")
    return root
