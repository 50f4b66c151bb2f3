import logging
from typing import Callable, Optional

from grid_model import Grid, GridSnapshot

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 50


class GridHistory:
    """Linear undo/redo stacks of grid snapshots."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = max(1, int(max_depth))
        self.undo_stack: list[GridSnapshot] = []
        self.redo_stack: list[GridSnapshot] = []

    # ---------- stack helpers ----------
    def _push(self, stack: list, snap: GridSnapshot):
        stack.append(snap)
        if len(stack) > self.max_depth:
            dropped = stack.pop(0)
            logger.debug("History depth %d reached; dropped %r", self.max_depth, dropped.label)

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    @property
    def undo_depth(self) -> int:
        return len(self.undo_stack)

    @property
    def redo_depth(self) -> int:
        return len(self.redo_stack)

    def peek_undo_label(self) -> Optional[str]:
        return self.undo_stack[-1].label if self.undo_stack else None

    def peek_redo_label(self) -> Optional[str]:
        return self.redo_stack[-1].label if self.redo_stack else None

    # ---------- recording ----------
    def record_and_apply(
        self, current: Grid, mutation: Callable[[Grid], Grid], label: str = ""
    ) -> Grid:
        """
        Snapshot ``current``, run ``mutation`` on it and record the snapshot.

        Nothing is recorded when the mutation raises or hands back the same
        grid object (a protected no-op such as deleting the header row).
        """
        snap = current.snapshot(label)
        result = mutation(current)
        if result is current:
            return current
        self._push(self.undo_stack, snap)
        self.redo_stack.clear()
        return result

    # ---------- undo/redo ----------
    def undo(self, current: Grid) -> Optional[Grid]:
        if not self.undo_stack:
            return None
        snap = self.undo_stack.pop()
        self._push(self.redo_stack, current.snapshot(snap.label))
        return Grid.from_snapshot(snap)

    def redo(self, current: Grid) -> Optional[Grid]:
        if not self.redo_stack:
            return None
        snap = self.redo_stack.pop()
        self._push(self.undo_stack, current.snapshot(snap.label))
        return Grid.from_snapshot(snap)

    def reset(self):
        self.undo_stack.clear()
        self.redo_stack.clear()
