"""Cursor over a task store: movement, selection and status toggling.

`position` is a zero-based rank into store.enumerate(), never a TaskId.
Invariant kept by every operation: 0 <= position < len(store) when the store
is non-empty, position == 0 when it is empty.
"""
from __future__ import annotations
import logging
from typing import Iterable, List
from errors import NoSuchTask
from models import Task, TaskId
from storage import TaskStore, Transition

logger = logging.getLogger(__name__)

LEGEND = '  Wont Open Done'


# -------------------- rendering --------------------
def render_task(task: Task, selected: bool) -> str:
    """14-column status marker, '>' or a space, one space, then the name."""
    pointer = '>' if selected else ' '
    return f'{task.status.marker}{pointer} {task.name}'


def render_listing(tasks: Iterable[Task], position: int) -> str:
    """Legend header, a blank line, then one rendered line per task."""
    lines: List[str] = [LEGEND, '']
    lines.extend(render_task(task, rank == position) for rank, task in enumerate(tasks))
    return '\n'.join(lines)


class TaskPicker:
    def __init__(self, store: TaskStore, position: int = 0):
        self.store = store
        self.position = 0
        if len(store):
            self.position = max(0, min(position, len(store) - 1))

    def __len__(self) -> int:
        return len(self.store)

    # -------------------- movement --------------------
    def top(self) -> None:
        self.position = 0

    def bottom(self) -> None:
        count = len(self.store)
        if count == 0:
            raise NoSuchTask('empty list')
        self.position = count - 1

    def down(self) -> None:
        if self.position < len(self.store) - 1:
            self.position += 1

    def up(self) -> None:
        if self.position > 0:
            self.position -= 1

    # -------------------- selection --------------------
    def selected_id(self) -> TaskId:
        ids = self.store.ids()
        if not 0 <= self.position < len(ids):
            raise NoSuchTask(f'rank {self.position}')
        return ids[self.position]

    def selected(self) -> Task:
        return self.store.find(self.selected_id())

    # -------------------- status --------------------
    def right(self) -> None:
        self._apply(Task.advance)

    def left(self) -> None:
        self._apply(Task.retreat)

    def _apply(self, transition: Transition) -> None:
        tid = self.selected_id()
        self.store.apply(tid, transition)
        logger.debug('Applied %s to task %s', transition.__name__, tid)

    # -------------------- create / remove --------------------
    def create(self, name: str) -> TaskId:
        """Create a task and move the selection onto it."""
        tid = self.store.create(name)
        # Locate by scan; the rank of a new id is not assumed.
        for rank, candidate in enumerate(self.store.ids()):
            if candidate == tid:
                self.position = rank
                break
        return tid

    def remove(self) -> Task:
        task = self.store.remove(self.selected_id())
        self._clamp()
        return task

    def _clamp(self) -> None:
        count = len(self.store)
        self.position = min(self.position, count - 1) if count else 0

    # -------------------- display --------------------
    def render(self) -> str:
        return render_listing(self.store.sorted(), self.position)

    def __str__(self) -> str:
        return self.render()
