"""Handle reading and writing tasks from/to JSON files."""
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Set

from config import config
from models import StorageLocation, Task
from utils.time_utils import now_ms

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# Largest epoch-millisecond value datetime can represent (year 9999)
MAX_TIMESTAMP_MS = 253_402_300_799_999


def _is_timestamp(value: Any) -> bool:
    # NaN and infinities fail the range comparison
    return _is_number(value) and 0 <= value <= MAX_TIMESTAMP_MS


class JsonHandler:
    """Load and save the task collection as a JSON document.

    Two storage locations exist: the project file in the working directory and
    the global file in the user's home directory.
    """

    def __init__(self, project_dir: Optional[str] = None, home_dir: Optional[str] = None):
        """
        Initialize JsonHandler.

        Args:
            project_dir: Directory holding the project file. If None, uses the cwd.
            home_dir: Directory holding the global file. If None, uses the home directory.
        """
        self.project_dir = Path.cwd() if project_dir is None else Path(project_dir).expanduser()
        self.home_dir = Path.home() if home_dir is None else Path(home_dir).expanduser()

    def get_file_path(self, location: StorageLocation) -> Path:
        """Get the file path for a storage location.

        Args:
            location: PROJECT or GLOBAL

        Returns:
            Path of the JSON file backing that location
        """
        if location is StorageLocation.GLOBAL:
            return self.home_dir / config.global_filename
        return self.project_dir / config.project_filename

    def file_exists(self, path: Path) -> bool:
        """Check for a file, treating any filesystem error as absence."""
        try:
            return Path(path).is_file()
        except OSError:
            return False

    def detect_initial_location(self) -> StorageLocation:
        """Pick the startup location: project file, else global file, else project."""
        if self.file_exists(self.get_file_path(StorageLocation.PROJECT)):
            return StorageLocation.PROJECT
        if self.file_exists(self.get_file_path(StorageLocation.GLOBAL)):
            return StorageLocation.GLOBAL
        return StorageLocation.PROJECT

    def load_tasks(self, path: Path) -> List[Task]:
        """Load tasks from a JSON file.

        Accepts either {"tasks": [...]} or a bare array of task objects.
        Every record is coerced into a valid Task (see coerce_task).

        Args:
            path: The file to read

        Returns:
            List of tasks in file order.
            Returns empty list if the file is missing, unreadable or malformed.

        Note:
            Handles gracefully: missing files, corrupted files, encoding errors
        """
        path = Path(path)
        if not self.file_exists(path):
            return []

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", path, e)
            return []

        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning("Ignoring malformed JSON in %s: %s", path, e)
            return []

        if isinstance(data, dict) and isinstance(data.get("tasks"), list):
            records = data["tasks"]
        elif isinstance(data, list):
            records = data
        else:
            logger.warning("No task list found in %s", path)
            return []

        return self.coerce_tasks(records, now_ms())

    def coerce_tasks(self, records: Iterable[Any], now: int) -> List[Task]:
        """Coerce raw JSON records into tasks, keeping ids unique.

        Strings become tasks with that text; other non-object records are skipped.
        """
        tasks: List[Task] = []
        taken: Set[Any] = set()
        for raw in records:
            if isinstance(raw, str):
                raw = {"text": raw}
            if not isinstance(raw, dict):
                logger.debug("Skipping non-object task record: %r", raw)
                continue
            task = coerce_task(raw, now, taken)
            taken.add(task.id)
            tasks.append(task)
        return tasks

    def save_tasks(self, tasks: Iterable[Task], path: Path) -> bool:
        """Save tasks to a JSON file.

        Writes {"tasks": [...]} pretty-printed, overwriting any existing file.

        Args:
            tasks: Tasks in display order
            path: The file to write

        Returns:
            True on success, False if the file could not be written
        """
        path = Path(path)
        payload = {"tasks": [task.to_dict() for task in tasks]}
        try:
            content = json.dumps(payload, indent=2, ensure_ascii=False)
            path.write_text(content, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save tasks to %s: %s", path, e)
            return False
        logger.debug("Saved %d tasks to %s", len(payload["tasks"]), path)
        return True


def coerce_task(raw: dict, now: int, taken_ids: Optional[Set[Any]] = None) -> Task:
    """Build a Task from a loosely-typed record.

    - id: kept if it is a number or string, otherwise a fresh clock-derived id
    - text: stringified, empty if missing
    - done: truthiness of the stored value
    - createdAt: kept if a representable timestamp, otherwise `now`
    - completedAt: None unless done; a done task without a valid one gets `now`

    Args:
        raw: Decoded JSON object
        now: Load time in epoch milliseconds
        taken_ids: Ids already used in this collection

    Returns:
        A Task satisfying the done/completed_at invariant
    """
    taken_ids = taken_ids if taken_ids is not None else set()

    task_id = raw.get("id")
    if not (_is_number(task_id) or isinstance(task_id, str)):
        task_id = now
        while task_id in taken_ids:
            task_id += 1

    text = raw.get("text")
    text = "" if text is None else str(text)

    done = bool(raw.get("done"))

    created_at = raw.get("createdAt")
    if not _is_timestamp(created_at):
        created_at = now

    completed_at = None
    if done:
        completed_at = raw.get("completedAt")
        if not _is_timestamp(completed_at):
            completed_at = now

    return Task(id=task_id, text=text, done=done, created_at=created_at, completed_at=completed_at)
