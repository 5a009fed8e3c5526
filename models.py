"""Data models for task management."""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Union

TaskId = Union[int, float, str]


class Mode(Enum):
    """Interaction context that decides what a keypress means."""
    LIST = "list"
    ADD = "add"
    EDIT = "edit"
    HELP = "help"
    SETTINGS = "settings"


class StorageLocation(Enum):
    """Where the task collection is persisted."""
    PROJECT = "project"
    GLOBAL = "global"

    @property
    def label(self) -> str:
        return "Global" if self is StorageLocation.GLOBAL else "Project"


class Severity(Enum):
    """Notice severity, mapped to a display color."""
    SUCCESS = "green"
    WARNING = "yellow"
    ERROR = "red"

    @property
    def color(self) -> str:
        return self.value


@dataclass(frozen=True)
class Task:
    """Represents a single task.

    Tasks are immutable so a collection can be snapshotted for undo/redo by
    reference. Timestamps are epoch milliseconds.

    completed_at is set exactly when done is True.
    """
    id: TaskId
    text: str
    done: bool = False
    created_at: int = 0
    completed_at: Optional[int] = None

    def toggled(self, now: int) -> 'Task':
        """Return a copy with completion flipped at time `now`."""
        if self.done:
            return replace(self, done=False, completed_at=None)
        return replace(self, done=True, completed_at=now)

    def with_text(self, text: str) -> 'Task':
        """Return a copy with new text."""
        return replace(self, text=text)

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to its persisted JSON form."""
        return {
            "id": self.id,
            "text": self.text,
            "done": self.done,
            "createdAt": self.created_at,
            "completedAt": self.completed_at,
        }


@dataclass(frozen=True)
class Notice:
    """Transient status message shown until `expires_at` or the next keypress."""
    text: str
    severity: Severity
    expires_at: int
