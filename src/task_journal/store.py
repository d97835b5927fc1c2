"""Journal file storage.

A journal file holds a JSON array of task objects:

    [{"text": "buy milk", "created_at": 1709284500}, ...]

Every operation is one complete cycle: read the whole file, apply at most
one mutation in memory, write the whole list back. Writes go to a
temporary file in the same directory which then replaces the journal, so
an interrupted write never leaves a half-written journal behind and
readers always see a complete list.
"""

import json
import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Union

from task_journal.errors import (
    CorruptStoreError,
    InvalidPositionError,
    JournalNotFoundError,
)
from task_journal.locks import journal_lock
from task_journal.models import Task

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "Task list is empty!"

# Permission bits for a journal created from scratch, before the umask
NEW_FILE_MODE = 0o666


def current_umask() -> int:
    """Get the process umask without changing it."""
    mask = os.umask(0)
    os.umask(mask)
    return mask


def parse_tasks(raw: bytes, path: Path) -> List[Task]:
    """Parse journal file content into tasks.

    Empty or whitespace-only content is an empty list.

    Raises:
        CorruptStoreError: If non-empty content is not a valid task list
    """
    if not raw.strip():
        return []

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CorruptStoreError(path, f"not valid UTF-8 ({e.reason})") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise CorruptStoreError(
            path, f"invalid JSON ({e.msg} at line {e.lineno} column {e.colno})"
        ) from e

    if not isinstance(data, list):
        raise CorruptStoreError(
            path, f"expected a JSON array, got {type(data).__name__}"
        )

    tasks = []
    for i, item in enumerate(data, 1):
        try:
            tasks.append(Task.from_dict(item))
        except ValueError as e:
            raise CorruptStoreError(path, f"entry {i}: {e}") from e
    return tasks


def serialize_tasks(tasks: List[Task]) -> str:
    """Serialize tasks to the journal file format."""
    return json.dumps(
        [task.to_dict() for task in tasks], ensure_ascii=False, separators=(",", ":")
    )


def format_report(tasks: List[Task]) -> List[str]:
    """Number tasks from 1 for display, or a single empty-list line."""
    if not tasks:
        return [EMPTY_MESSAGE]
    return [f"{i}: {task}" for i, task in enumerate(tasks, 1)]


class TaskStore:
    """Read and write the task list of one journal file.

    The path must already be resolved; the store never looks for a
    default location itself.
    """

    def __init__(self, path: Union[str, Path], lock: bool = True):
        """Initialize store.

        Args:
            path: Journal file path
            lock: Serialize writers with an advisory lock next to the journal
        """
        self.path = Path(path)
        self.lock = lock

    @contextmanager
    def _locked(self) -> Iterator[None]:
        if not self.lock:
            yield
            return
        with journal_lock(self.path):
            yield

    def load(self) -> List[Task]:
        """Load all tasks. The journal file must exist.

        Raises:
            JournalNotFoundError: If the journal file does not exist
            CorruptStoreError: If the journal file cannot be parsed
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError as e:
            raise JournalNotFoundError(self.path) from e

        tasks = parse_tasks(raw, self.path)
        logger.debug("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def _write(self, tasks: List[Task]) -> None:
        # Replace the link target, not a symlinked journal itself
        target = Path(os.path.realpath(self.path))
        fd, tmp_name = tempfile.mkstemp(
            dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(serialize_tasks(tasks))
                f.flush()
                os.fsync(f.fileno())

            if target.exists():
                shutil.copymode(target, tmp_path)
            else:
                tmp_path.chmod(NEW_FILE_MODE & ~current_umask())
            os.replace(tmp_path, target)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d tasks to %s", len(tasks), target)

    def add(self, task: Task) -> int:
        """Append a task, creating the journal file if it does not exist.

        Returns:
            The 1-based position of the new task
        """
        with self._locked():
            try:
                tasks = self.load()
            except JournalNotFoundError:
                logger.debug("Creating journal file %s", self.path)
                tasks = []
            tasks.append(task)
            self._write(tasks)
        return len(tasks)

    def complete(self, position: int) -> Task:
        """Remove the task at a 1-based position.

        Nothing is written if the position is invalid.

        Returns:
            The removed task

        Raises:
            JournalNotFoundError: If the journal file does not exist
            InvalidPositionError: If position is outside [1, number of tasks]
        """
        if not self.path.exists():
            raise JournalNotFoundError(self.path)

        with self._locked():
            tasks = self.load()
            if not 1 <= position <= len(tasks):
                raise InvalidPositionError(position, len(tasks))
            removed = tasks.pop(position - 1)
            self._write(tasks)
        return removed

    def list_tasks(self) -> List[Task]:
        """Load tasks for display.

        Takes no lock: writers replace the file atomically, so a read
        always sees a complete list.
        """
        return self.load()

    def report(self) -> List[str]:
        """Numbered display lines for all tasks."""
        return format_report(self.list_tasks())
