"""In-memory manipulation log with undo/redo.

The log is an ordered list of records plus ``redo_pointer``, the number of
trailing records that are currently undone. Records before that tail are
the active history.

    records:  [r0, r1, r2, r3]     redo_pointer = 1
                           ^^ undone, redo target
                       ^^ next undo target

The log does not touch the filesystem itself: undo() and redo() select a
record and hand it to a callback that performs the inverse or forward
effect. The pointer only moves once the callback returns, so a failed
undo or redo can simply be retried. A callback that fails partway raises
IncompleteManipulationError with the record updated for the work it did,
so the retry picks up where the failure left off.
"""

import logging
from collections.abc import Callable

from filemanip.core.errors import NothingToRedoError, NothingToUndoError
from filemanip.models.history import ManipulationRecord, describe_record

logger = logging.getLogger(__name__)

# Applies a record and returns its refreshed form (or None to keep it as is)
RecordApplier = Callable[[ManipulationRecord], ManipulationRecord | None]


class IncompleteManipulationError(Exception):
    """Raised by an applier that failed after part of a record was applied.

    The log stores ``record`` in place of the original and re-raises
    ``error``, so callers only ever see the underlying failure.

    Attributes:
        record: The record updated for the work already done.
        error: The failure that stopped the applier.
    """

    def __init__(self, record: ManipulationRecord, error: Exception) -> None:
        super().__init__(str(error))
        self.record = record
        self.error = error


class ManipulationLog:
    """Undo/redo history for the lifetime of the process."""

    def __init__(self) -> None:
        self._records: list[ManipulationRecord] = []
        self._redo_pointer = 0

    @property
    def records(self) -> tuple[ManipulationRecord, ...]:
        return tuple(self._records)

    @property
    def redo_pointer(self) -> int:
        return self._redo_pointer

    def __len__(self) -> int:
        return len(self._records)

    @property
    def can_undo(self) -> bool:
        return len(self._records) - self._redo_pointer > 0

    @property
    def can_redo(self) -> bool:
        return self._redo_pointer > 0

    def append(self, record: ManipulationRecord) -> None:
        """Log a new manipulation, discarding any undone tail first."""
        if self._redo_pointer > 0:
            logger.debug("Discarding %d redoable record(s)", self._redo_pointer)
            del self._records[-self._redo_pointer :]
        self._records.append(record)
        self._redo_pointer = 0
        logger.debug("Logged %s", describe_record(record))

    def undo(self, invert: RecordApplier) -> ManipulationRecord:
        """Undo the most recent active record.

        Args:
            invert: Performs the inverse of the record. Any exception it
                raises propagates and leaves the pointer unchanged.

        Returns:
            The record as stored after the undo.

        Raises:
            NothingToUndoError: If no active record remains.
        """
        if not self.can_undo:
            raise NothingToUndoError()
        index = len(self._records) - self._redo_pointer - 1
        record = self._apply(index, invert)
        self._redo_pointer += 1
        logger.info("Undid %s", describe_record(record))
        return record

    def redo(self, reapply: RecordApplier) -> ManipulationRecord:
        """Redo the earliest undone record.

        Args:
            reapply: Performs the forward effect of the record. Any exception
                it raises propagates and leaves the pointer unchanged.

        Returns:
            The record as stored after the redo.

        Raises:
            NothingToRedoError: If nothing is undone.
        """
        if not self.can_redo:
            raise NothingToRedoError()
        index = len(self._records) - self._redo_pointer
        record = self._apply(index, reapply)
        self._redo_pointer -= 1
        logger.info("Redid %s", describe_record(record))
        return record

    def _apply(self, index: int, applier: RecordApplier) -> ManipulationRecord:
        try:
            refreshed = applier(self._records[index])
        except IncompleteManipulationError as e:
            self._records[index] = e.record
            logger.debug("Kept partial progress of %s", describe_record(e.record))
            raise e.error from e.error.__cause__
        if refreshed is not None:
            self._records[index] = refreshed
        return self._records[index]
