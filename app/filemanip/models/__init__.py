"""Data models for filemanip.

This module exports the manipulation records kept in the undo/redo log.
"""

from filemanip.models.history import (
    DeleteRecord,
    ManipulationRecord,
    ManipulationType,
    PutRecord,
    RenameRecord,
    describe_record,
)

__all__ = [
    "DeleteRecord",
    "ManipulationRecord",
    "ManipulationType",
    "PutRecord",
    "RenameRecord",
    "describe_record",
]
