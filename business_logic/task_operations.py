"""Operations on the ordered task collection.

The collection is an immutable tuple of Task; every operation returns a new
tuple and leaves its input untouched, so the previous value can be kept as an
undo snapshot.

Functions:
    clamp_selection: Keep a selection index inside the collection
    next_task_id: Allocate a clock-derived id unique within the collection
"""
from typing import Iterable, Sequence, Tuple

from models import Task

TaskCollection = Tuple[Task, ...]


def clamp_selection(index: int, tasks: Sequence[Task]) -> int:
    """Clamp `index` to [0, len(tasks) - 1], or 0 for an empty collection."""
    return max(0, min(index, len(tasks) - 1))


def next_task_id(tasks: Iterable[Task], now: int) -> int:
    """Return max(now, highest integer id + 1).

    Ids derived this way grow monotonically and never repeat within the
    collection, even for several tasks created in the same millisecond.
    """
    highest = max(
        (t.id for t in tasks if isinstance(t.id, int) and not isinstance(t.id, bool)),
        default=None,
    )
    if highest is None:
        return now
    return max(now, highest + 1)


class TaskOperations:
    """Mutations of the task collection.

    Invalid indices are silently ignored: the collection is returned unchanged
    so callers can compare identities to detect a no-op.
    """

    @staticmethod
    def add_task(tasks: TaskCollection, text: str, now: int) -> TaskCollection:
        """
        Append a new open task.

        Args:
            tasks: Current collection
            text: Task text, already trimmed by the caller
            now: Creation time in epoch milliseconds

        Returns:
            New collection with the task at the end
        """
        task = Task(id=next_task_id(tasks, now), text=text, done=False, created_at=now)
        return tasks + (task,)

    @staticmethod
    def toggle_task(tasks: TaskCollection, index: int, now: int) -> TaskCollection:
        """Flip completion of the task at `index`, stamping completed_at."""
        if not 0 <= index < len(tasks):
            return tasks
        return tasks[:index] + (tasks[index].toggled(now),) + tasks[index + 1:]

    @staticmethod
    def edit_task_text(tasks: TaskCollection, index: int, text: str) -> TaskCollection:
        """Replace the text of the task at `index`.

        Empty text keeps the existing text. A valid index always yields a new
        collection, so every submitted edit is recorded and saved.
        """
        if not 0 <= index < len(tasks):
            return tasks
        task = tasks[index]
        return tasks[:index] + (task.with_text(text or task.text),) + tasks[index + 1:]

    @staticmethod
    def delete_task(tasks: TaskCollection, index: int) -> TaskCollection:
        """Remove the task at `index`."""
        if not 0 <= index < len(tasks):
            return tasks
        return tasks[:index] + tasks[index + 1:]
