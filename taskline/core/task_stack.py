"""Ordered record of open tasks, outermost first.

The stack holds no lock and does no I/O; ``ProgressEngine`` serializes
every access to it.
"""
from __future__ import annotations
import itertools
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from taskline.core.errors import ProtocolViolation


class TaskStatus(Enum):
    RUNNING = "running"
    PASSED = "passed"
    WARNED = "warned"
    FAILED = "failed"

    @property
    def is_final(self) -> bool:
        return self is not TaskStatus.RUNNING


@dataclass
class Task:
    id: int
    depth: int
    message: str
    status: TaskStatus = TaskStatus.RUNNING


class TaskStack:
    def __init__(self):
        self._tasks: List[Task] = []
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._tasks)

    def __bool__(self) -> bool:
        return bool(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    @property
    def is_empty(self) -> bool:
        return not self._tasks

    @property
    def top(self) -> Optional[Task]:
        return self._tasks[-1] if self._tasks else None

    def ids(self) -> List[int]:
        return [t.id for t in self._tasks]

    def push(self, message: str) -> Task:
        """Open a new task one level below the current top."""
        task = Task(id=next(self._ids), depth=len(self._tasks), message=message)
        self._tasks.append(task)
        return task

    def set_message(self, task_id: int, message: str) -> bool:
        """Replace the top task's message; any other id is ignored."""
        top = self.top
        if top is None or top.id != task_id:
            return False
        top.message = message
        return True

    def pop(self, task_id: int, status: TaskStatus) -> Task:
        """Resolve and remove the top task.

        Raises:
            ValueError: if ``status`` is RUNNING
            ProtocolViolation: if ``task_id`` is not the current top
        """
        if not status.is_final:
            raise ValueError(f"Cannot resolve a task to {status.value}")
        top = self.top
        if top is None:
            raise ProtocolViolation(
                f"Cannot resolve task #{task_id}: no task is open",
                actual_id=task_id,
            )
        if top.id != task_id:
            raise ProtocolViolation(
                f"Cannot resolve task #{task_id}: innermost open task is #{top.id} ({top.message!r})",
                expected_id=top.id,
                actual_id=task_id,
            )
        self._tasks.pop()
        top.status = status
        return top
