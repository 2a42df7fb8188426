"""Coarse progress feedback for long recursive operations.

Reporters are purely observational: an operation behaves identically with
the default no-op reporter.
"""

from rich.console import Console

STAGE_COUNT = 5


def progress_stage(index: int, total: int) -> int:
    """Map a walk position to one of five stages (0, 20, 40, 60, 80 percent).

    Args:
        index: Zero-based position in the walk.
        total: Total number of entries in the walk.

    Returns:
        Stage number between 0 and 4.
    """
    if total <= 0 or index <= 0:
        return 0
    return min(STAGE_COUNT - 1, index * STAGE_COUNT // total)


def render_stage(stage: int) -> str:
    """Render a stage as a fixed-width bar, e.g. ``[»»---]``."""
    return "[" + "»" * stage + "-" * (STAGE_COUNT - stage) + "]"


def render_count(index: int, total: int) -> str:
    """Render a batch position as ``current/total`` (one-based)."""
    return f"{index + 1}/{total}"


class ProgressReporter:
    """Base reporter; ignores every update."""

    def item(self, index: int, total: int) -> None:
        """Called before each target of a batch is processed."""

    def stage(self, index: int, total: int) -> None:
        """Called for each entry of a recursive walk."""

    def done(self) -> None:
        """Called once a batch has finished or failed."""


class ConsoleProgress(ProgressReporter):
    """Renders progress on a single status line of a Rich console.

    Walk updates are only drawn when the stage changes, so a walk over
    thousands of entries draws at most five times.
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self._count = ""
        self._last_stage: int | None = None

    def item(self, index: int, total: int) -> None:
        self._count = render_count(index, total)
        self._last_stage = None
        self._draw("")

    def stage(self, index: int, total: int) -> None:
        current = progress_stage(index, total)
        if current == self._last_stage:
            return
        self._last_stage = current
        self._draw(render_stage(current))

    def done(self) -> None:
        if self._count:
            self._console.print()
        self._count = ""
        self._last_stage = None

    def _draw(self, bar: str) -> None:
        line = f"{self._count} {bar}".rstrip()
        self._console.print(f"[muted]{line}[/muted]", end="\r", highlight=False)
