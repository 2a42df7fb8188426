"""Filesystem manipulation engine.

This package provides the Item snapshot model and directory listing, the
trash, the delete/put/rename operator with its undo/redo log, and the
FileManager facade driven by the interactive loop.
"""

from filemanip.filesystem.models import Item, ItemKind, SortKey
from filemanip.filesystem.snapshot import list_directory, snapshot_item

__all__ = [
    "Item",
    "ItemKind",
    "SortKey",
    "list_directory",
    "snapshot_item",
]
