"""Manipulation records for undo/redo.

Each record captures enough state to invert (undo) or re-apply (redo) one
logged filesystem manipulation. Records are immutable; when re-applying a
record produces new paths, the log stores a refreshed copy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from filemanip.filesystem.models import Item


class ManipulationType(str, Enum):
    """Type of a logged manipulation.

    Attributes:
        DELETE: Items moved into the trash.
        PUT: Items pasted into a directory.
        RENAME: One entry renamed in place.
    """

    DELETE = "delete"
    PUT = "put"
    RENAME = "rename"


@dataclass(frozen=True, slots=True)
class DeleteRecord:
    """Items moved into the trash by one delete call.

    Attributes:
        trash_paths: Trash entry per original item, aligned by position.
            None where the item was a dangling symlink that was unlinked
            without being trashed.
        original_items: Pre-deletion snapshots of the deleted items.
        source_dir: Directory that was displayed when the delete happened.
    """

    trash_paths: tuple[Path | None, ...]
    original_items: tuple[Item, ...]
    source_dir: Path

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if len(self.trash_paths) != len(self.original_items):
            msg = "Delete record needs one trash path per original item"
            raise ValueError(msg)

    @property
    def manipulation_type(self) -> ManipulationType:
        return ManipulationType.DELETE


@dataclass(frozen=True, slots=True)
class PutRecord:
    """Items pasted by one put call.

    Attributes:
        original_items: Snapshots of the pasted sources.
        produced_paths: Paths created in the destination, in source order.
        destination_dir: Directory the items were pasted into.
    """

    original_items: tuple[Item, ...]
    produced_paths: tuple[Path, ...]
    destination_dir: Path

    @property
    def manipulation_type(self) -> ManipulationType:
        return ManipulationType.PUT


@dataclass(frozen=True, slots=True)
class RenameRecord:
    """One entry renamed in place."""

    original_path: Path
    new_path: Path

    @property
    def manipulation_type(self) -> ManipulationType:
        return ManipulationType.RENAME


ManipulationRecord = DeleteRecord | PutRecord | RenameRecord


def describe_record(record: ManipulationRecord) -> str:
    """Build a one-line human-readable summary of a record."""
    match record:
        case DeleteRecord(original_items=items):
            return f"delete {len(items)} item(s)"
        case PutRecord(produced_paths=paths, destination_dir=destination):
            return f"put {len(paths)} item(s) into {destination}"
        case RenameRecord(original_path=original, new_path=new):
            return f"rename {original.name} -> {new.name}"
