"""Module-level task functions bound to the shared engine.

    h = task("Building")
    sub = task("Compiling foo.c")
    pass_(sub, "Compiled foo.c")
    pass_(h, "Build complete")

Calling ``task`` with ``handle=`` set to the innermost task re-labels it
instead of opening a subtask.
"""
from __future__ import annotations
from typing import Optional

from taskline.core.engine import TaskHandle, get_engine
from taskline.core.task_stack import TaskStatus


def task(message: str, handle: Optional[TaskHandle] = None) -> TaskHandle:
    return get_engine().begin(message, handle)


def update(handle: TaskHandle, message: str) -> bool:
    return handle.engine.update(handle, message)


def pass_(handle: TaskHandle, message: Optional[str] = None) -> None:
    """Resolve ``handle`` with a check mark."""
    handle.engine.resolve(handle, TaskStatus.PASSED, message)


def warn(handle: TaskHandle, message: Optional[str] = None) -> None:
    """Resolve ``handle`` with a warning triangle."""
    handle.engine.resolve(handle, TaskStatus.WARNED, message)


def fail(handle: TaskHandle, message: Optional[str] = None) -> None:
    """Resolve ``handle`` with a cross."""
    handle.engine.resolve(handle, TaskStatus.FAILED, message)
