"""Background spinner that animates the innermost open task."""
from __future__ import annotations
import logging
import threading
from enum import Enum
from typing import Dict, Optional, Sequence, Set

from taskline.core.task_stack import Task, TaskStack, TaskStatus
from taskline.core.terminal import Terminal
from taskline.utils.constants import (
    ANSI_GREEN_BOLD, ANSI_RED_BOLD, ANSI_YELLOW_BOLD,
    DEFAULT_FRAMES, DEFAULT_INTERVAL,
    FAIL_GLYPH, OPEN_GLYPH, PASS_GLYPH, WARN_GLYPH,
)
from taskline.utils.string_utils import indent_for

logger = logging.getLogger(__name__)

FINAL_GLYPHS: Dict[TaskStatus, tuple] = {
    TaskStatus.PASSED: (PASS_GLYPH, ANSI_GREEN_BOLD),
    TaskStatus.WARNED: (WARN_GLYPH, ANSI_YELLOW_BOLD),
    TaskStatus.FAILED: (FAIL_GLYPH, ANSI_RED_BOLD),
}


class RendererState(Enum):
    IDLE = "idle"
    SPINNING = "spinning"


class SpinnerRenderer:
    """Two-state render loop: IDLE while the stack is empty, SPINNING otherwise.

    ``start`` and ``stop`` must be called with ``lock`` held; they only flip
    state and signal the thread. ``join`` waits for the thread and must be
    called without the lock.
    """

    def __init__(self, stack: TaskStack, terminal: Terminal, lock: threading.Lock,
                 interval: float = DEFAULT_INTERVAL, frames: Sequence[str] = DEFAULT_FRAMES):
        if not frames:
            raise ValueError("Spinner needs at least one frame")
        self.stack = stack
        self.terminal = terminal
        self.interval = interval
        self._lock = lock
        self._frames = list(frames)
        self._frame_index = 0
        self._state = RendererState.IDLE
        self._generation = 0
        self._wake: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._headed: Set[int] = set()
        self.ticks = 0

    @property
    def state(self) -> RendererState:
        return self._state

    @property
    def is_spinning(self) -> bool:
        return self._state is RendererState.SPINNING

    @property
    def frame(self) -> str:
        return self._frames[self._frame_index]

    def advance(self) -> str:
        self._frame_index = (self._frame_index + 1) % len(self._frames)
        return self.frame

    # --- lifecycle ---

    def start(self) -> None:
        if self._state is RendererState.SPINNING:
            return
        self._generation += 1
        self._wake = threading.Event()
        self._state = RendererState.SPINNING
        self._thread = threading.Thread(
            target=self._run, args=(self._generation, self._wake),
            name=f"taskline-spinner-{self._generation}", daemon=True,
        )
        self._thread.start()
        logger.debug("Spinner started (generation %d)", self._generation)

    def stop(self) -> Optional[threading.Thread]:
        if self._state is RendererState.IDLE:
            return None
        self._state = RendererState.IDLE
        self._generation += 1
        if self._wake is not None:
            self._wake.set()
        logger.debug("Spinner stopped after %d ticks", self.ticks)
        return self._thread

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the most recent render thread; True once it has exited."""
        thread = self._thread
        if thread is None or thread is threading.current_thread():
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _run(self, generation: int, wake: threading.Event) -> None:
        while True:
            wake.wait(self.interval)
            with self._lock:
                if generation != self._generation or self.stack.is_empty:
                    return
                self.advance()
                self.ticks += 1
                self.repaint()

    # --- painting (lock held by caller) ---

    def spinner_line(self, task: Task) -> str:
        glyph = self.terminal.style(self.frame, ANSI_YELLOW_BOLD)
        return f"{indent_for(task.depth)}{glyph} {task.message}"

    def repaint(self) -> bool:
        top = self.stack.top
        if top is None:
            return False
        return self.terminal.redraw(self.spinner_line(top))

    def paint_header(self, task: Task) -> bool:
        """Freeze a parent task's line above its first subtask."""
        if task.id in self._headed:
            return False
        self._headed.add(task.id)
        glyph = self.terminal.style(OPEN_GLYPH, ANSI_YELLOW_BOLD)
        return self.terminal.commit(f"{indent_for(task.depth)}{glyph} {task.message}")

    def paint_final(self, task: Task, message: str) -> bool:
        self._headed.discard(task.id)
        glyph, code = FINAL_GLYPHS[task.status]
        return self.terminal.commit(f"{indent_for(task.depth)}{self.terminal.style(glyph, code)} {message}")
