"""Selection of items in the current snapshot.

Selection is kept apart from the immutable Items and keyed by path, so a
refreshed snapshot keeps the selection of entries that still exist.
"""

from collections.abc import Iterable, Sequence
from pathlib import Path

from filemanip.filesystem.models import Item


class Selection:
    """Set of selected paths within one snapshot."""

    def __init__(self) -> None:
        self._paths: set[Path] = set()

    def __contains__(self, item: Item) -> bool:
        return item.path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def toggle(self, item: Item) -> bool:
        """Flip the selection of ``item``; returns the new state."""
        if item.path in self._paths:
            self._paths.discard(item.path)
            return False
        self._paths.add(item.path)
        return True

    def select_from_top(self, snapshot: Sequence[Item], index: int) -> None:
        """Select exactly the items from the top down to ``index`` inclusive."""
        self._paths = {item.path for item in snapshot[: index + 1]}

    def select_to_bottom(self, snapshot: Sequence[Item], index: int) -> None:
        """Select exactly the items from ``index`` down to the bottom."""
        self._paths = {item.path for item in snapshot[index:]}

    def reset(self) -> None:
        self._paths.clear()

    def prune(self, snapshot: Iterable[Item]) -> None:
        """Forget paths that are no longer in ``snapshot``."""
        self._paths &= {item.path for item in snapshot}

    def items(self, snapshot: Iterable[Item]) -> list[Item]:
        """Selected items in snapshot order."""
        return [item for item in snapshot if item.path in self._paths]
