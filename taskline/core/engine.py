"""Process-wide render state: the task stack, its spinner and its terminal.

Every stack mutation and every spinner repaint happens under one lock, so
a final status line is always the last thing written for its task.
"""
from __future__ import annotations
import logging
import threading
from dataclasses import dataclass, field
from typing import Optional, Sequence, TextIO

from taskline.core.errors import ProtocolViolation
from taskline.core.progress import RendererState, SpinnerRenderer
from taskline.core.task_stack import TaskStack, TaskStatus
from taskline.core.terminal import Terminal, resolve_stream
from taskline.utils.config import config
from taskline.utils.constants import DEFAULT_FRAMES, DEFAULT_INTERVAL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskHandle:
    """Identifies one open task. Usable as a context manager."""
    id: int
    depth: int
    engine: "ProgressEngine" = field(repr=False, compare=False)

    def update(self, message: str) -> bool:
        return self.engine.update(self, message)

    def pass_(self, message: Optional[str] = None) -> None:
        self.engine.resolve(self, TaskStatus.PASSED, message)

    def warn(self, message: Optional[str] = None) -> None:
        self.engine.resolve(self, TaskStatus.WARNED, message)

    def fail(self, message: Optional[str] = None) -> None:
        self.engine.resolve(self, TaskStatus.FAILED, message)

    @property
    def is_open(self) -> bool:
        return self.engine.is_open(self)

    def __enter__(self) -> "TaskHandle":
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.is_open:
            if exc_type is None:
                self.pass_()
            else:
                self.fail()
        return False


class ProgressEngine:
    def __init__(self, terminal: Optional[Terminal] = None, *,
                 interval: float = DEFAULT_INTERVAL, frames: Sequence[str] = DEFAULT_FRAMES):
        self._lock = threading.Lock()
        self.stack = TaskStack()
        self.terminal = terminal if terminal is not None else Terminal()
        self.renderer = SpinnerRenderer(self.stack, self.terminal, self._lock,
                                        interval=interval, frames=frames)

    @property
    def state(self) -> RendererState:
        return self.renderer.state

    @property
    def is_idle(self) -> bool:
        with self._lock:
            return self.stack.is_empty and self.renderer.state is RendererState.IDLE

    def depth(self) -> int:
        with self._lock:
            return len(self.stack)

    def is_open(self, handle: TaskHandle) -> bool:
        with self._lock:
            return handle.engine is self and handle.id in self.stack.ids()

    def _set_message(self, handle: TaskHandle, message: str) -> bool:
        # ids are only unique within one stack
        return handle.engine is self and self.stack.set_message(handle.id, message)

    def begin(self, message: str, handle: Optional[TaskHandle] = None) -> TaskHandle:
        """Open a task, or re-label ``handle`` when it is the innermost task."""
        if handle is not None:
            with self._lock:
                if self._set_message(handle, message):
                    self.renderer.repaint()
                else:
                    logger.debug("Ignoring update for task #%d: not the innermost task", handle.id)
            return handle
        with self._lock:
            parent = self.stack.top
            if parent is not None:
                self.renderer.paint_header(parent)
            task = self.stack.push(message)
            self.renderer.repaint()
            if len(self.stack) == 1:
                self.renderer.start()
        logger.debug("Task #%d opened at depth %d: %s", task.id, task.depth, message)
        return TaskHandle(task.id, task.depth, self)

    def update(self, handle: TaskHandle, message: str) -> bool:
        with self._lock:
            updated = self._set_message(handle, message)
            if updated:
                self.renderer.repaint()
        return updated

    def resolve(self, handle: TaskHandle, status: TaskStatus, message: Optional[str] = None) -> None:
        """Close the innermost task with ``status`` and paint its final line.

        Raises:
            ProtocolViolation: if ``handle`` is not the innermost open task
        """
        stopped = None
        with self._lock:
            try:
                if handle.engine is not self:
                    raise ProtocolViolation(
                        f"Cannot resolve task #{handle.id}: it belongs to another engine",
                        actual_id=handle.id,
                    )
                task = self.stack.pop(handle.id, status)
            except ProtocolViolation as e:
                logger.error("Task protocol violation: %s (open tasks: %s)", e, self.stack.ids())
                raise
            if message is not None:
                task.message = message
            self.renderer.paint_final(task, task.message)
            if self.stack.is_empty:
                stopped = self.renderer.stop()
            else:
                self.renderer.repaint()
        logger.debug("Task #%d %s: %s", task.id, status.value, task.message)
        if stopped is not None:
            stopped.join()

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no render thread is alive. True when settled."""
        return self.renderer.join(timeout)


_engine: Optional[ProgressEngine] = None
_engine_lock = threading.Lock()


def _engine_from_config(stream: Optional[TextIO] = None) -> ProgressEngine:
    settings = config.validated()
    terminal = Terminal(
        stream if stream is not None else resolve_stream(settings['stream']),
        animate=settings.get('animate'),
        color=settings.get('color'),
    )
    return ProgressEngine(terminal, interval=settings['interval'], frames=settings['frames'])


def get_engine() -> ProgressEngine:
    """Return the shared engine, creating it on first use."""
    global _engine
    with _engine_lock:
        if _engine is None:
            _engine = _engine_from_config()
        return _engine


def configure_engine(engine: Optional[ProgressEngine] = None, *, stream: Optional[TextIO] = None) -> ProgressEngine:
    """Replace the shared engine. Only allowed while no task is open."""
    global _engine
    with _engine_lock:
        if _engine is not None and not _engine.is_idle:
            raise ProtocolViolation("Cannot reconfigure while tasks are open")
        _engine = engine if engine is not None else _engine_from_config(stream)
        return _engine
