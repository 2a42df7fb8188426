"""Unit tests for the in-memory manipulation log."""

from pathlib import Path

import pytest
from filemanip.core.errors import NothingToRedoError, NothingToUndoError
from filemanip.filesystem.history import IncompleteManipulationError, ManipulationLog
from filemanip.models.history import ManipulationRecord, RenameRecord


def _record(name: str) -> RenameRecord:
    return RenameRecord(original_path=Path(f"/tmp/{name}"), new_path=Path(f"/tmp/{name}.new"))


def _noop(record: ManipulationRecord) -> None:
    return None


class TestManipulationLog:
    """Tests for ManipulationLog."""

    def test_empty_log(self) -> None:
        """A new log has nothing to undo or redo."""
        log = ManipulationLog()

        assert len(log) == 0
        assert log.redo_pointer == 0
        assert not log.can_undo
        assert not log.can_redo

    def test_undo_on_empty_then_redo(self) -> None:
        """undo() on an empty log fails, and so does redo() afterwards."""
        log = ManipulationLog()

        with pytest.raises(NothingToUndoError, match="Nothing to undo"):
            log.undo(_noop)
        with pytest.raises(NothingToRedoError, match="Nothing to redo"):
            log.redo(_noop)

    def test_undo_targets_latest_record(self) -> None:
        """Undo walks backwards through the active records."""
        log = ManipulationLog()
        first, second = _record("a"), _record("b")
        log.append(first)
        log.append(second)
        seen: list[ManipulationRecord] = []

        log.undo(lambda r: seen.append(r))
        log.undo(lambda r: seen.append(r))

        assert seen == [second, first]
        assert log.redo_pointer == 2
        assert not log.can_undo

    def test_redo_targets_earliest_undone(self) -> None:
        """Redo walks forward through the undone tail."""
        log = ManipulationLog()
        first, second = _record("a"), _record("b")
        log.append(first)
        log.append(second)
        log.undo(_noop)
        log.undo(_noop)
        seen: list[ManipulationRecord] = []

        log.redo(lambda r: seen.append(r))

        assert seen == [first]
        assert log.redo_pointer == 1

    def test_append_truncates_redo_tail(self) -> None:
        """append(A), undo(), append(B): nothing is left to redo."""
        log = ManipulationLog()
        log.append(_record("a"))
        log.undo(_noop)

        log.append(_record("b"))

        assert log.records == (_record("b"),)
        assert log.redo_pointer == 0
        with pytest.raises(NothingToRedoError):
            log.redo(_noop)

    def test_failed_undo_keeps_pointer(self) -> None:
        """An applier exception leaves the log unchanged."""
        log = ManipulationLog()
        log.append(_record("a"))

        def fail(record: ManipulationRecord) -> None:
            raise OSError("boom")

        with pytest.raises(OSError, match="boom"):
            log.undo(fail)

        assert log.redo_pointer == 0
        assert log.can_undo

    def test_failed_redo_keeps_pointer(self) -> None:
        """A failing redo can be retried."""
        log = ManipulationLog()
        log.append(_record("a"))
        log.undo(_noop)

        def fail(record: ManipulationRecord) -> None:
            raise OSError("boom")

        with pytest.raises(OSError):
            log.redo(fail)

        assert log.redo_pointer == 1

    def test_applier_result_replaces_record(self) -> None:
        """A refreshed record returned by the applier is stored."""
        log = ManipulationLog()
        log.append(_record("a"))
        refreshed = _record("refreshed")

        result = log.undo(lambda r: refreshed)

        assert result == refreshed
        assert log.records == (refreshed,)

    def test_incomplete_apply_keeps_progress(self) -> None:
        """A partly applied record is stored and the underlying error re-raised."""
        log = ManipulationLog()
        log.append(_record("a"))
        partial = _record("partial")

        def fail_halfway(record: ManipulationRecord) -> None:
            raise IncompleteManipulationError(partial, OSError("boom"))

        with pytest.raises(OSError, match="boom"):
            log.undo(fail_halfway)

        assert log.records == (partial,)
        assert log.redo_pointer == 0

    def test_pointer_stays_in_bounds(self) -> None:
        """redo_pointer never exceeds the number of records."""
        log = ManipulationLog()
        log.append(_record("a"))
        log.undo(_noop)

        with pytest.raises(NothingToUndoError):
            log.undo(_noop)

        assert log.redo_pointer == len(log) == 1
