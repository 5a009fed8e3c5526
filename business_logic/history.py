"""Bounded undo/redo history of task collection snapshots."""
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from business_logic.task_operations import TaskCollection
from config import config


@dataclass(frozen=True)
class UndoHistory:
    """Past and future snapshot stacks; the last element is the top.

    Both stacks hold at most `limit` snapshots, dropping the oldest first.
    """
    past: Tuple[TaskCollection, ...] = ()
    future: Tuple[TaskCollection, ...] = ()
    limit: int = config.history_limit

    def _bounded(self, stack: Tuple[TaskCollection, ...]) -> Tuple[TaskCollection, ...]:
        return stack[-self.limit:] if len(stack) > self.limit else stack

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)

    def record(self, snapshot: TaskCollection) -> 'UndoHistory':
        """Push the pre-change snapshot and drop the redo stack."""
        return replace(self, past=self._bounded(self.past + (snapshot,)), future=())

    def undo(self, current: TaskCollection) -> Optional[Tuple['UndoHistory', TaskCollection]]:
        """
        Step back one snapshot.

        Args:
            current: The collection being replaced, kept for redo

        Returns:
            (new history, restored snapshot), or None when there is nothing to undo
        """
        if not self.past:
            return None
        restored = self.past[-1]
        history = replace(
            self,
            past=self.past[:-1],
            future=self._bounded(self.future + (current,)),
        )
        return history, restored

    def redo(self, current: TaskCollection) -> Optional[Tuple['UndoHistory', TaskCollection]]:
        """Mirror of undo(); returns None when there is nothing to redo."""
        if not self.future:
            return None
        restored = self.future[-1]
        history = replace(
            self,
            past=self._bounded(self.past + (current,)),
            future=self.future[:-1],
        )
        return history, restored
