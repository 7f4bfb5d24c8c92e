# tests/test_models.py

from __future__ import annotations

import pytest

from errors import AlreadyDone, AlreadyWont, CorruptTaskFile
from models import Status, Task, TaskId, advance, retreat


def test_advance_cycle() -> None:
    assert advance(Status.WONT) is Status.OPEN
    assert advance(Status.OPEN) is Status.DONE
    with pytest.raises(AlreadyDone):
        advance(Status.DONE)


def test_retreat_cycle() -> None:
    assert retreat(Status.DONE) is Status.OPEN
    assert retreat(Status.OPEN) is Status.WONT
    with pytest.raises(AlreadyWont):
        retreat(Status.WONT)


def test_advance_three_times_from_open() -> None:
    task = Task("A")
    task.advance()
    assert task.status is Status.DONE
    with pytest.raises(AlreadyDone):
        task.advance()
    assert task.status is Status.DONE


def test_retreat_twice_from_open() -> None:
    task = Task("A")
    task.retreat()
    assert task.status is Status.WONT
    with pytest.raises(AlreadyWont):
        task.retreat()
    assert task.status is Status.WONT


def test_finish_and_abandon() -> None:
    task = Task("A")
    task.abandon()
    assert task.status is Status.WONT
    with pytest.raises(AlreadyWont):
        task.abandon()

    done = Task("B")
    done.finish()
    with pytest.raises(AlreadyDone):
        done.finish()
    with pytest.raises(AlreadyDone):
        done.abandon()
    assert done.status is Status.DONE


def test_markers_are_fixed_width() -> None:
    assert Status.OPEN.marker == "     [ ]      "
    assert Status.DONE.marker == "           [x]"
    assert Status.WONT.marker == "----          "
    assert {len(s.marker) for s in Status} == {14}


def test_status_parse_is_case_sensitive() -> None:
    assert Status.parse("Wont") is Status.WONT
    with pytest.raises(CorruptTaskFile):
        Status.parse("open")


def test_task_id_filename_and_order() -> None:
    assert TaskId(7).filename == "00007"
    assert TaskId(123456).filename == "123456"
    assert TaskId(2) < TaskId(10)
    with pytest.raises(ValueError):
        TaskId(-1)


def test_task_dumps_loads() -> None:
    task = Task("Buy milk", Status.DONE)
    assert task.dumps() == "Buy milk\nDone"
    assert Task.loads("Buy milk\nDone") == task
    assert Task.loads("Buy milk\nDone\n") == task
    assert Task.loads("two\nlines\nOpen") == Task("two\nlines")


def test_task_loads_rejects_garbage() -> None:
    with pytest.raises(CorruptTaskFile):
        Task.loads("just a name")
    with pytest.raises(CorruptTaskFile):
        Task.loads("name\nFinished")
