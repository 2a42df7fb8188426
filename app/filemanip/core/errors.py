"""Exception hierarchy for file manipulation.

Every engine call raises one of these types instead of a bare OSError, so
callers (the interactive loop or the CLI) can render an error line and
continue. The underlying OSError is always chained as ``__cause__``.
"""


class FilemanipError(Exception):
    """Base exception for all filemanip errors."""


class FilesystemError(FilemanipError):
    """Generic I/O failure, e.g. a directory that cannot be enumerated."""


class CopyError(FilesystemError):
    """Content could not be copied during a delete, put or restore."""


class RemoveError(FilesystemError):
    """A source could not be removed after a successful copy.

    The copy (in the trash or the destination) is left in place.
    """


class EncodingError(FilesystemError):
    """A file name could not be represented as valid text."""


class NotFoundError(FilesystemError):
    """An index or path does not resolve to a current item."""


class HistoryError(FilemanipError):
    """Base exception for undo/redo boundary errors."""


class NothingToUndoError(HistoryError):
    """Raised when every logged manipulation is already undone."""

    def __init__(self) -> None:
        super().__init__("Nothing to undo")


class NothingToRedoError(HistoryError):
    """Raised when no undone manipulation is available for redo."""

    def __init__(self) -> None:
        super().__init__("Nothing to redo")
