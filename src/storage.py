"""Task stores: the abstract interface and its two backends.

MemoryStore keeps everything in a dict and never touches the disk.
FileStore keeps one file per task in a directory, named by the zero-padded
id, and mirrors every file into an in-memory cache loaded at startup.

Ordering rule for FileStore mutations: the filesystem artifact is written or
deleted first and the cache follows. The one exception is apply(), where the
transition lands in the cache first and a failing rewrite is reported as
IOFailure with the in-memory change kept.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Tuple
from errors import CorruptTaskFile, InvalidName, IOFailure, NoSuchTask
from models import Task, TaskId

logger = logging.getLogger(__name__)

Transition = Callable[[Task], None]
Entry = Tuple[TaskId, Task]

FIRST_ID = TaskId(1)


class TaskStore(ABC):
    """Mapping from TaskId to Task plus the next-id counter.

    enumerate(), ids() and sorted() always agree on order: ascending id.
    Tasks handed out by find() and enumerate() are detached copies; the only
    way to change a stored task durably is apply().
    """

    @abstractmethod
    def create(self, name: str) -> TaskId: ...

    @abstractmethod
    def find_mut(self, task_id: TaskId) -> Task: ...

    @abstractmethod
    def remove(self, task_id: TaskId) -> Task: ...

    @abstractmethod
    def apply(self, task_id: TaskId, transition: Transition) -> None: ...

    @abstractmethod
    def _items(self) -> Iterator[Entry]:
        """Live (id, task) pairs in any order."""

    # -------------------- derived queries --------------------
    def find(self, task_id: TaskId) -> Task:
        return self.find_mut(task_id).copy()

    def enumerate(self) -> List[Entry]:
        return [(tid, task.copy()) for tid, task in sorted(self._items(), key=lambda e: e[0])]

    def ids(self) -> List[TaskId]:
        return [tid for tid, _ in self.enumerate()]

    def sorted(self) -> List[Task]:
        return [task for _, task in self.enumerate()]

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def __contains__(self, task_id: object) -> bool: ...

    # -------------------- conveniences --------------------
    def create_finished(self, name: str) -> TaskId:
        task_id = self.create(name)
        self.apply(task_id, Task.finish)
        return task_id

    def create_abandoned(self, name: str) -> TaskId:
        task_id = self.create(name)
        self.apply(task_id, Task.abandon)
        return task_id


class MemoryStore(TaskStore):
    def __init__(self) -> None:
        self._tasks: Dict[TaskId, Task] = {}
        self._next_id: TaskId = FIRST_ID

    def _allocate_id(self) -> TaskId:
        tid = self._next_id
        self._next_id = tid.next()
        return tid

    def create(self, name: str) -> TaskId:
        tid = self._allocate_id()
        self._tasks[tid] = Task(name=name)
        logger.debug('Created task %s in memory', tid)
        return tid

    def find_mut(self, task_id: TaskId) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise NoSuchTask(task_id) from None

    def remove(self, task_id: TaskId) -> Task:
        try:
            task = self._tasks.pop(task_id)
        except KeyError:
            raise NoSuchTask(task_id) from None
        logger.debug('Removed task %s from memory', task_id)
        return task

    def apply(self, task_id: TaskId, transition: Transition) -> None:
        transition(self.find_mut(task_id))

    def _items(self) -> Iterator[Entry]:
        return iter(self._tasks.items())

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks


class FileStore(TaskStore):
    """One file per task under `directory`.

    File content is exactly two lines of UTF-8: the task name, then the
    status tag. Files are read and written as bytes so the name round-trips
    verbatim (no newline translation).
    """

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure('create directory', self.directory, exc) from exc
        self._tasks: Dict[TaskId, Task] = {}
        found = self._scan()
        self._next_id: TaskId = max(tid for tid, _ in found).next() if found else FIRST_ID
        for tid, path in found:
            # Only canonical zero-padded names are loaded; later writes and
            # removals address that name. Others still count toward next id.
            if path.name != tid.filename:
                logger.debug('Skipping non-canonical task file %s', path.name)
                continue
            task = self._read(path)
            assert tid not in self._tasks, f'task {tid} loaded twice'
            self._tasks[tid] = task
        logger.info('FileStore ready dir=%s tasks=%d next_id=%s', self.directory, len(self._tasks), self._next_id)

    # -------------------- disk helpers --------------------
    def _path(self, task_id: TaskId) -> Path:
        return self.directory / task_id.filename

    def _scan(self) -> List[Tuple[TaskId, Path]]:
        """(id, path) of every file whose name is a plain decimal number,
        ascending by id. Anything else in the directory is skipped."""
        try:
            entries = list(self.directory.iterdir())
        except OSError as exc:
            raise IOFailure('scan', self.directory, exc) from exc
        found: List[Tuple[TaskId, Path]] = []
        for entry in entries:
            name = entry.name
            if not (name.isascii() and name.isdigit()) or not entry.is_file():
                logger.debug('Skipping directory entry %s', name)
                continue
            found.append((TaskId(int(name)), entry))
        found.sort()
        return found

    @staticmethod
    def _read(path: Path) -> Task:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise IOFailure('read', path, exc) from exc
        try:
            text = data.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise CorruptTaskFile(f'{path} is not valid UTF-8') from exc
        return Task.loads(text)

    @staticmethod
    def _encode(task: Task) -> bytes:
        try:
            return task.dumps().encode('utf-8')
        except UnicodeEncodeError as exc:
            raise InvalidName(f'Task name cannot be stored: {task.name!r}') from exc

    def _write(self, task_id: TaskId, task: Task) -> None:
        data = self._encode(task)
        path = self._path(task_id)
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise IOFailure('write', path, exc) from exc

    # -------------------- operations --------------------
    def create(self, name: str) -> TaskId:
        task = Task(name=name)
        # Reject unstorable names before an id is spent.
        self._encode(task)
        # Ids are consumed even when the write fails so they are never reissued.
        tid = self._next_id
        self._next_id = tid.next()
        self._write(tid, task)
        self._tasks[tid] = task
        logger.debug('Created task %s at %s', tid, self._path(tid))
        return tid

    def find_mut(self, task_id: TaskId) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise NoSuchTask(task_id) from None

    def remove(self, task_id: TaskId) -> Task:
        if task_id not in self._tasks:
            raise NoSuchTask(task_id)
        path = self._path(task_id)
        try:
            path.unlink()
        except OSError as exc:
            raise IOFailure('remove', path, exc) from exc
        logger.debug('Removed task %s (%s)', task_id, path)
        return self._tasks.pop(task_id)

    def apply(self, task_id: TaskId, transition: Transition) -> None:
        task = self.find_mut(task_id)
        transition(task)
        self._write(task_id, task)

    def _items(self) -> Iterator[Entry]:
        return iter(self._tasks.items())

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return task_id in self._tasks


def open_store(settings) -> TaskStore:
    """Build the backend named by settings.backend."""
    if settings.backend == 'memory':
        logger.info('Using in-memory store')
        return MemoryStore()
    return FileStore(settings.data_dir)
