"""Error taxonomy for the task tracker.

Every fallible core operation raises one of these; nothing in the store or
picker layers catches them. The shell catches TrackerError and shows its
message beneath the listing.
"""
from __future__ import annotations
from typing import Optional


class TrackerError(Exception):
    """Base class; carries a default human-readable message."""
    message = 'An unknown error occurred'

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class AlreadyDone(TrackerError):
    message = 'The task is already finished'


class AlreadyWont(TrackerError):
    message = 'The task has already been closed'


class NoSuchTask(TrackerError):
    message = 'No such task could be found'

    def __init__(self, key: object = None):
        self.key = key
        if key is None:
            super().__init__()
        else:
            super().__init__(f'{self.message}: {key}')


class IOFailure(TrackerError):
    """Wraps a filesystem error; the OSError is chained as __cause__."""
    message = 'An external error occurred'

    def __init__(self, action: str, path: object, cause: OSError):
        self.action = action
        self.path = path
        super().__init__(f'Could not {action} {path}: {cause.strerror or cause}')


class CorruptTaskFile(TrackerError):
    message = 'Task file could not be parsed'


class InvalidName(TrackerError):
    """Name cannot be encoded as UTF-8 (e.g. lone surrogates from stdin)."""
    message = 'Task name cannot be stored'


class UnrecognizedCommand(TrackerError):
    message = 'Unknown command'

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown command {key!r}. Press '?' for help.")
