"""Filesystem domain models.

This module defines the immutable Item snapshot of a single directory
entry, the entry kinds, and the sort keys used to order a listing.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path


class ItemKind(str, Enum):
    """Type of filesystem entry.

    Attributes:
        DIRECTORY: Regular directory.
        FILE: Regular file (also used for special files and unreadable entries).
        SYMLINK: Symbolic link, live or dangling.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"


class SortKey(str, Enum):
    """Ordering of a directory snapshot.

    Attributes:
        NAME: Natural (digit-aware) order on the display name.
        TIME: Newest modification first.
    """

    NAME = "name"
    TIME = "time"


@dataclass(frozen=True, slots=True)
class Item:
    """Snapshot of one filesystem entry at a point in time.

    Items are values, not live handles: after any mutation the caller
    rebuilds them. Selection is tracked separately by path.

    Attributes:
        kind: Entry kind, classified from the entry's own (link) metadata.
        name: Display name (final path component).
        path: Absolute path at snapshot time.
        symlink_target: Resolved directory for symlinks pointing at a directory.
        size: Size in bytes (0 if metadata was unreadable).
        extension: Lower-cased extension without the dot, used by the opener.
        modified_at: ISO 8601 modification time (None if metadata was unreadable).
        hidden: True iff the name starts with a dot.
    """

    kind: ItemKind
    name: str
    path: Path
    symlink_target: Path | None = None
    size: int = 0
    extension: str | None = None
    modified_at: str | None = None
    hidden: bool = False

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.name:
            msg = "Item name cannot be empty"
            raise ValueError(msg)

    @property
    def is_dir(self) -> bool:
        """Check if this item is a real directory (not a link to one)."""
        return self.kind == ItemKind.DIRECTORY

    def relocated(self, path: Path) -> Item:
        """Return a copy of this item pointing at ``path``.

        Metadata is kept from the original snapshot; only the path and the
        display name change.
        """
        return replace(self, path=path, name=path.name)
