"""Data models for the task tracker: statuses, identifiers and tasks.

Status lifecycle is a three-state cycle, not an undo stack:

    advance:  Wont -> Open -> Done   (Done fails with AlreadyDone)
    retreat:  Done -> Open -> Wont   (Wont fails with AlreadyWont)

The Status value doubles as the tag written to disk by the file backend.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum
from errors import AlreadyDone, AlreadyWont, CorruptTaskFile

ID_WIDTH = 5


class Status(Enum):
    OPEN = 'Open'
    DONE = 'Done'
    WONT = 'Wont'

    @classmethod
    def parse(cls, tag: str) -> 'Status':
        """Case-sensitive lookup of an on-disk tag."""
        for status in cls:
            if status.value == tag:
                return status
        raise CorruptTaskFile(f'Unrecognized status tag {tag!r}')

    @property
    def marker(self) -> str:
        return _MARKERS[self]


# Fixed 14-column markers; one column group each for Wont, Open, Done.
_MARKERS = {
    Status.OPEN: '     [ ]      ',
    Status.DONE: '           [x]',
    Status.WONT: '----          ',
}


def advance(status: Status) -> Status:
    if status is Status.WONT:
        return Status.OPEN
    if status is Status.OPEN:
        return Status.DONE
    raise AlreadyDone()


def retreat(status: Status) -> Status:
    if status is Status.OPEN:
        return Status.WONT
    if status is Status.DONE:
        return Status.OPEN
    raise AlreadyWont()


@dataclass(frozen=True, order=True)
class TaskId:
    """Store-assigned identifier. Kept apart from cursor ranks on purpose:
    ids are never reused, ranks shift whenever a task is removed."""
    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(f'TaskId must be non-negative, got {self.value}')

    @property
    def filename(self) -> str:
        return f'{self.value:0{ID_WIDTH}d}'

    def next(self) -> 'TaskId':
        return TaskId(self.value + 1)

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class Task:
    """A single task.

    Fields:
        name: Free text, stored verbatim.
        status: Current lifecycle status; new tasks start Open.
    """
    name: str
    status: Status = Status.OPEN

    # -------------------- transitions --------------------
    def advance(self) -> None:
        self.status = advance(self.status)

    def retreat(self) -> None:
        self.status = retreat(self.status)

    def finish(self) -> None:
        if self.status is Status.DONE:
            raise AlreadyDone()
        self.status = Status.DONE

    def abandon(self) -> None:
        if self.status is Status.DONE:
            raise AlreadyDone()
        if self.status is Status.WONT:
            raise AlreadyWont()
        self.status = Status.WONT

    def copy(self) -> 'Task':
        return replace(self)

    # -------------------- serialization --------------------
    def dumps(self) -> str:
        return f'{self.name}\n{self.status.value}'

    @classmethod
    def loads(cls, text: str) -> 'Task':
        """Parse file content; the tag is always the last line so names may
        themselves contain newlines."""
        if text.endswith('\n'):
            text = text[:-1]
        name, sep, tag = text.rpartition('\n')
        if not sep:
            raise CorruptTaskFile(f'Expected two lines, got {text!r}')
        return cls(name=name, status=Status.parse(tag))
